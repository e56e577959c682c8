from typing import Any, Dict, List, Optional
import logging

import psycopg2
from psycopg2.extras import RealDictCursor

from models import User
from .base import UserStore

logger = logging.getLogger(__name__)

# PostgreSQL folds unquoted identifiers, so the key column is stored as "userid"
CREATE_TABLE_SQL = """
    CREATE TABLE IF NOT EXISTS users (
        userid TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        email TEXT NOT NULL
    )
"""
INSERT_USER_SQL = "INSERT INTO users (userid, name, email) VALUES (%s, %s, %s)"
SELECT_USER_SQL = "SELECT userid, name, email FROM users WHERE userid = %s"
UPDATE_USER_SQL = "UPDATE users SET name = %s, email = %s WHERE userid = %s"
DELETE_USER_SQL = "DELETE FROM users WHERE userid = %s"
SELECT_USERS_SQL = "SELECT userid, name, email FROM users"


class PostgresUserStore(UserStore):
    """
    Relational backend on a ``users`` table

    Uses one autocommit connection shared by all requests. A create with an
    existing ID raises ``psycopg2.errors.UniqueViolation``.
    """

    backend_name = "postgres"

    def __init__(self, dsn: str, sslmode: str = "require", connection: Any = None):
        self.dsn = dsn
        self.sslmode = sslmode
        self.connection = connection

    def initialize(self) -> None:
        if self.connection is None:
            self.connection = psycopg2.connect(self.dsn, sslmode=self.sslmode)
            self.connection.autocommit = True
            logger.info("Connected to PostgreSQL")

        with self.connection.cursor() as cursor:
            cursor.execute(CREATE_TABLE_SQL)
        logger.info("Ensured users table exists")

    @staticmethod
    def _to_user(row: Dict[str, Any]) -> User:
        return User(userId=row["userid"], name=row["name"], email=row["email"])

    def _cursor(self):
        return self.connection.cursor(cursor_factory=RealDictCursor)

    def create(self, user_id: str, name: str, email: str) -> None:
        with self._cursor() as cursor:
            cursor.execute(INSERT_USER_SQL, (user_id, name, email))

    def get(self, user_id: str) -> Optional[User]:
        with self._cursor() as cursor:
            cursor.execute(SELECT_USER_SQL, (user_id,))
            row = cursor.fetchone()
        if row is None:
            return None
        return self._to_user(row)

    def update(self, user_id: str, name: str, email: str) -> None:
        with self._cursor() as cursor:
            cursor.execute(UPDATE_USER_SQL, (name, email, user_id))

    def delete(self, user_id: str) -> None:
        with self._cursor() as cursor:
            cursor.execute(DELETE_USER_SQL, (user_id,))

    def list(self) -> List[User]:
        with self._cursor() as cursor:
            cursor.execute(SELECT_USERS_SQL)
            rows = cursor.fetchall()
        return [self._to_user(row) for row in rows]

    def close(self) -> None:
        if self.connection is not None:
            self.connection.close()
            self.connection = None
