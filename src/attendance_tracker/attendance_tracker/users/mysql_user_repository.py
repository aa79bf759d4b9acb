from __future__ import annotations

from typing import Optional

from mysql.connector import errors as mysql_errors

from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import User
from .repository import UserRepository


def _row_to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, name, email, password_hash FROM users WHERE user_id=%s",
                (user_id,),
            )
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, name, email, password_hash FROM users WHERE email=%s",
                (email,),
            )
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def create_user(self, *, name: str, email: str, password_hash: str) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO users(name, email, password_hash) VALUES(%s,%s,%s)",
                    (name, email, password_hash),
                )
                return int(cur.lastrowid)
        except mysql_errors.IntegrityError:
            # UNIQUE(email) lost a race with a concurrent registration.
            raise ValidationError("User already exists")

    def update_user(self, *, user_id: int, name: str, email: str, password_hash: str) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "UPDATE users SET name=%s, email=%s, password_hash=%s WHERE user_id=%s",
                    (name, email, password_hash, user_id),
                )
                # MySQL reports 0 affected rows when nothing changed, so existence is checked by the service.
                return True
        except mysql_errors.IntegrityError:
            raise ValidationError("Email is already in use")
