from .errors import UserServiceError, InvalidInput, UserNotFound, BackendError
from .user_service import UserService

__all__ = [
    "UserServiceError",
    "InvalidInput",
    "UserNotFound",
    "BackendError",
    "UserService",
]
