from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Tuple
import logging

from models import User
from service.orders import OrderClient
from service.storage import UserStore
from .errors import InvalidInput, UserNotFound, BackendError

logger = logging.getLogger(__name__)


class UserService:
    """Business logic for user management"""
    
    def __init__(self, store: UserStore, order_client: OrderClient):
        self.store = store
        self.order_client = order_client
    
    @property
    def backend_name(self) -> str:
        return self.store.backend_name
    
    @staticmethod
    def _require(fields: Dict[str, Optional[str]]) -> None:
        missing = [name for name, value in fields.items() if not value]
        if missing:
            raise InvalidInput(missing)
    
    @contextmanager
    def _backend(self, action: str):
        try:
            yield
        except Exception as e:
            raise BackendError(f"{action} failed on {self.backend_name}: {str(e)}") from e
    
    def create_user(self, user_id: Optional[str], name: Optional[str], email: Optional[str]) -> None:
        """
        Create a new user
        
        Raises:
            InvalidInput: If userId, name or email is missing or empty
            BackendError: If the store rejects the write (on PostgreSQL this
                includes an already existing userId)
        """
        self._require({"userId": user_id, "name": name, "email": email})
        
        with self._backend("Create user"):
            self.store.create(user_id, name, email)
        logger.info(f"User created: {user_id}")
    
    def get_user_with_orders(self, user_id: str) -> Tuple[User, List[Any]]:
        """
        Get a user together with their orders
        
        Orders are only looked up once the user is known to exist, and a
        failed lookup yields an empty list.
        
        Raises:
            UserNotFound: If no user is stored under user_id
            BackendError: If the store read fails
        """
        with self._backend("Get user"):
            user = self.store.get(user_id)
        if user is None:
            raise UserNotFound(user_id)
        
        orders = self.order_client.get_orders(user_id)
        return user, orders
    
    def update_user(self, user_id: str, name: Optional[str], email: Optional[str]) -> None:
        """
        Update name and email of a user
        
        No existence check is made: on DynamoDB a missing user is created,
        on PostgreSQL the update matches no row.
        """
        self._require({"name": name, "email": email})
        
        with self._backend("Update user"):
            self.store.update(user_id, name, email)
        logger.info(f"User updated: {user_id}")
    
    def delete_user(self, user_id: str) -> None:
        """Delete a user; deleting a missing user succeeds"""
        with self._backend("Delete user"):
            self.store.delete(user_id)
        logger.info(f"User deleted: {user_id}")
    
    def list_users(self) -> List[User]:
        with self._backend("List users"):
            return self.store.list()
    
    def close(self) -> None:
        self.order_client.close()
        self.store.close()
