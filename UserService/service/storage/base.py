from abc import ABC, abstractmethod
from typing import List, Optional

from models import User


class UserStore(ABC):
    """
    Storage adapter for user records

    Exactly one implementation is active per process. Implementations always
    return ``User`` objects shaped ``{userId, name, email}`` and let backend
    exceptions propagate to the caller.
    """

    backend_name: str = ""

    @abstractmethod
    def initialize(self) -> None:
        """
        Connect and make sure the users table exists

        Must be idempotent. Any exception raised here is fatal for startup.
        """

    @abstractmethod
    def create(self, user_id: str, name: str, email: str) -> None:
        """Store a new user record"""

    @abstractmethod
    def get(self, user_id: str) -> Optional[User]:
        """Return the user with the given ID, or None if there is none"""

    @abstractmethod
    def update(self, user_id: str, name: str, email: str) -> None:
        """Set name and email for the given ID without checking it exists"""

    @abstractmethod
    def delete(self, user_id: str) -> None:
        """Remove the given ID; a missing ID is not an error"""

    @abstractmethod
    def list(self) -> List[User]:
        """Return every stored user in backend-defined order"""

    def close(self) -> None:
        """Release the underlying client or connection"""
