from typing import List


class UserServiceError(Exception):
    """Base class for user business errors"""


class InvalidInput(UserServiceError):
    """A required field is missing or empty"""

    def __init__(self, missing: List[str]):
        self.missing = missing
        super().__init__(f"Missing fields: {', '.join(missing)}")


class UserNotFound(UserServiceError):
    """No user is stored under the requested ID"""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User with ID '{user_id}' not found")


class BackendError(UserServiceError):
    """The storage backend failed; the original exception is the __cause__"""
