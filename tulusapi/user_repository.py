"""User storage backed by a DB-API connection."""

from __future__ import annotations

from contextlib import closing
from datetime import datetime
from typing import Any

from .logger import get_logger
from .models import RecordNotFound, User

_COLUMNS = "u.id, u.name, u.user_name, u.password, u.created_at, u.updated_at"


def _as_datetime(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, bytes):
        value = value.decode()
    return datetime.fromisoformat(str(value))


class UserRepository:
    """Reads and writes users in the ``public.user`` table.

    ``placeholder`` is the parameter marker of the driver in use
    (``%s`` for most drivers, ``?`` for sqlite3).
    """

    def __init__(self, connection: Any, placeholder: str = "%s", table: str = "public.user") -> None:
        self._connection = connection
        self._placeholder = placeholder
        self._table = table

    def _fetch_one(self, column: str, value: Any) -> User:
        query = (
            f"SELECT {_COLUMNS} FROM {self._table} AS u "
            f"WHERE u.{column} = {self._placeholder}"
        )
        try:
            with closing(self._connection.cursor()) as cursor:
                cursor.execute(query, (value,))
                row = cursor.fetchone()
        except Exception as err:
            get_logger().error("Error while query", extra={"error": err})
            raise
        if row is None:
            err = RecordNotFound()
            get_logger().error("Error while query", extra={"error": err})
            raise err
        user_id, name, user_name, password, created_at, updated_at = row
        return User(
            id=int(user_id),
            name=name,
            user_name=user_name,
            password=password,
            created_at=_as_datetime(created_at),
            updated_at=_as_datetime(updated_at),
        )

    def get_by_id(self, user_id: int) -> User:
        """Return the user with this id or raise RecordNotFound."""
        return self._fetch_one("id", user_id)

    def get_by_user_name(self, user_name: str) -> User:
        """Return the user with this user name or raise RecordNotFound."""
        return self._fetch_one("user_name", user_name)

    def create_user(self, user: User) -> None:
        """Insert the user's name, user name and password."""
        p = self._placeholder
        query = f"INSERT INTO {self._table} (name, user_name, password) VALUES ({p}, {p}, {p})"
        try:
            with closing(self._connection.cursor()) as cursor:
                cursor.execute(query, (user.name, user.user_name, user.password))
            self._connection.commit()
        except Exception as err:
            get_logger().error("Error execute query", extra={"error": err})
            raise