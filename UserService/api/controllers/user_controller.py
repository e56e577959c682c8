from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from typing import Any, List, Optional
import logging

from api.dependencies import get_user_service
from business.user import UserService, InvalidInput, UserNotFound
from models import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

MISSING_FIELDS = "Missing fields"
USER_NOT_FOUND = "User not found"
INTERNAL_ERROR = "Internal server error"


# Request models for API
# Fields are optional so that absence is reported as 400 by the presence check
class CreateUserRequest(BaseModel):
    """Request model for creating a user"""
    userId: Optional[str] = Field(None, description="Unique identifier for the user")
    name: Optional[str] = Field(None, description="Display name of the user")
    email: Optional[str] = Field(None, description="Email address of the user")


class UpdateUserRequest(BaseModel):
    """Request model for updating a user"""
    name: Optional[str] = Field(None, description="New display name")
    email: Optional[str] = Field(None, description="New email address")


# Response models
class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str


class UserDetailResponse(BaseModel):
    """Response model for a single user with their orders"""
    user: User
    orders: List[Any] = Field(default_factory=list, description="Orders from the order service, passed through")


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "User created successfully"},
        400: {"model": ErrorResponse, "description": "Missing fields"},
        500: {"model": ErrorResponse, "description": "Internal server error"}
    }
)
def create_user(request: CreateUserRequest, user_service: UserService = Depends(get_user_service)):
    """
    Create a new user
    
    Requires userId, name and email, all non-empty.
    """
    try:
        logger.info(f"Received create user request: userId={request.userId}")
        user_service.create_user(request.userId, request.name, request.email)
        return MessageResponse(message="User created!")
    
    except InvalidInput as e:
        logger.warning(f"Validation error: {str(e)}")
        return error_response(status.HTTP_400_BAD_REQUEST, MISSING_FIELDS)
    
    except Exception as e:
        logger.exception(f"Create user error: {str(e)}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)


@router.get(
    "/{user_id}",
    response_model=UserDetailResponse,
    status_code=status.HTTP_200_OK,
    responses={
        200: {"description": "User and orders retrieved successfully"},
        404: {"model": ErrorResponse, "description": "User not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"}
    }
)
def get_user(user_id: str, user_service: UserService = Depends(get_user_service)):
    """
    Get a user by ID together with their orders
    
    Orders come from the order service; if it cannot be reached the user is
    still returned with an empty orders list.
    """
    try:
        logger.info(f"Received get user request: userId={user_id}")
        user, orders = user_service.get_user_with_orders(user_id)
        return UserDetailResponse(user=user, orders=orders)
    
    except UserNotFound as e:
        logger.info(str(e))
        return error_response(status.HTTP_404_NOT_FOUND, USER_NOT_FOUND)
    
    except Exception as e:
        logger.exception(f"Get user error: {str(e)}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)


@router.put(
    "/{user_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    responses={
        200: {"description": "User updated successfully"},
        400: {"model": ErrorResponse, "description": "Missing fields"},
        500: {"model": ErrorResponse, "description": "Internal server error"}
    }
)
def update_user(user_id: str, request: UpdateUserRequest, user_service: UserService = Depends(get_user_service)):
    """
    Update name and email of a user
    
    The user is not looked up first, so updating an unknown ID is not an error.
    """
    try:
        logger.info(f"Received update user request: userId={user_id}")
        user_service.update_user(user_id, request.name, request.email)
        return MessageResponse(message="User updated!")
    
    except InvalidInput as e:
        logger.warning(f"Validation error: {str(e)}")
        return error_response(status.HTTP_400_BAD_REQUEST, MISSING_FIELDS)
    
    except Exception as e:
        logger.exception(f"Update user error: {str(e)}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    responses={
        200: {"description": "User deleted (or did not exist)"},
        500: {"model": ErrorResponse, "description": "Internal server error"}
    }
)
def delete_user(user_id: str, user_service: UserService = Depends(get_user_service)):
    """Delete a user by ID"""
    try:
        logger.info(f"Received delete user request: userId={user_id}")
        user_service.delete_user(user_id)
        return MessageResponse(message="User deleted!")
    
    except Exception as e:
        logger.exception(f"Delete user error: {str(e)}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)


@router.get(
    "",
    response_model=List[User],
    status_code=status.HTTP_200_OK,
    responses={
        200: {"description": "All stored users"},
        500: {"model": ErrorResponse, "description": "Internal server error"}
    }
)
def list_users(user_service: UserService = Depends(get_user_service)):
    """
    List all users
    
    Returns every stored record; there is no pagination or filtering.
    """
    try:
        return user_service.list_users()
    
    except Exception as e:
        logger.exception(f"List users error: {str(e)}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)
