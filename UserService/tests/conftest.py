import os
import sys
from threading import Lock
from typing import Dict, List, Optional
from unittest.mock import Mock

import pytest

# Ensure the service root (where main.py lives) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
SERVICE_ROOT = os.path.dirname(CURRENT_DIR)
if SERVICE_ROOT not in sys.path:
    sys.path.insert(0, SERVICE_ROOT)

from business.user import UserService
from models import User
from service.orders import OrderClient
from service.storage import UserStore


class InMemoryUserStore(UserStore):
    """Thread-safe in-memory store with key-value (upsert) semantics"""

    backend_name = "memory"

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._lock = Lock()
        self.initialized = False
        self.closed = False

    def initialize(self) -> None:
        self.initialized = True

    def create(self, user_id: str, name: str, email: str) -> None:
        with self._lock:
            self._users[user_id] = User(userId=user_id, name=name, email=email)

    def get(self, user_id: str) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def update(self, user_id: str, name: str, email: str) -> None:
        with self._lock:
            self._users[user_id] = User(userId=user_id, name=name, email=email)

    def delete(self, user_id: str) -> None:
        with self._lock:
            self._users.pop(user_id, None)

    def list(self) -> List[User]:
        with self._lock:
            return list(self._users.values())

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def store():
    return InMemoryUserStore()


@pytest.fixture
def order_client():
    client = Mock(spec=OrderClient)
    client.get_orders.return_value = []
    return client


@pytest.fixture
def user_service(store, order_client):
    return UserService(store, order_client)
