from .base import UserStore
from .dynamodb_store import DynamoDBUserStore
from .postgres_store import PostgresUserStore
from .factory import create_user_store

__all__ = ["UserStore", "DynamoDBUserStore", "PostgresUserStore", "create_user_store"]
