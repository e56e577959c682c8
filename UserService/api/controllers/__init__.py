from .user_controller import router as user_router

__all__ = ["user_router"]
