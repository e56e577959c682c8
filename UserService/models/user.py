from pydantic import BaseModel, Field


class User(BaseModel):
    """User record as returned by every storage backend"""
    userId: str = Field(..., description="Unique identifier for the user")
    name: str = Field(..., description="Display name of the user")
    email: str = Field(..., description="Email address of the user (not validated)")

    class Config:
        json_schema_extra = {
            "example": {
                "userId": "u1",
                "name": "Ann",
                "email": "ann@x.com"
            }
        }
