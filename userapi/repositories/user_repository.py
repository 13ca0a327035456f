"""MySQL implementation of UserRepository on top of an injected Database handle."""
import logging
from typing import Any, List, Optional, Sequence

import pymysql

from userapi.db import CREATE_USER_TABLE, Database
from userapi.errors import NotFoundError, StorageError
from userapi.models import User

logger = logging.getLogger(__name__)

SELECT_USER = "SELECT id, username, password, email FROM user"


class MySQLUserRepository:
    """User persistence in MySQL. Rows are read by column name (DictCursor)."""

    def __init__(self, database: Database) -> None:
        self._db = database

    def _execute(self, sql: str, params: Optional[Sequence[Any]] = None, fetch: str = "") -> Any:
        """Run one statement on its own connection.

        fetch: "" -> rowcount, "one" -> single row or None, "all" -> list of rows,
        "lastrowid" -> id generated by an INSERT.
        """
        try:
            with self._db.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, params)
                    if fetch == "one":
                        return cur.fetchone()
                    if fetch == "all":
                        return list(cur.fetchall())
                    if fetch == "lastrowid":
                        return cur.lastrowid
                    return cur.rowcount
        except pymysql.MySQLError as e:
            logger.exception("MySQL statement failed: %s", sql.split()[0])
            raise StorageError(str(e)) from e

    def _to_user(self, row: dict) -> User:
        try:
            return User.from_row(row)
        except ValueError as e:
            raise StorageError(f"unreadable user row: {e}") from e

    def ensure_schema(self) -> None:
        self._execute(CREATE_USER_TABLE)

    def list_all(self) -> List[User]:
        rows = self._execute(SELECT_USER, fetch="all")
        return [self._to_user(r) for r in rows]

    def count(self) -> int:
        row = self._execute("SELECT COUNT(*) AS total FROM user", fetch="one")
        return int((row or {}).get("total", 0))

    def get_by_id(self, user_id: int) -> User:
        row = self._execute(SELECT_USER + " WHERE id = %s", (user_id,), fetch="one")
        if row is None:
            raise NotFoundError()
        return self._to_user(row)

    def get_by_username(self, username: str) -> User:
        row = self._execute(SELECT_USER + " WHERE username = %s", (username,), fetch="one")
        if row is None:
            raise NotFoundError()
        return self._to_user(row)

    def create(self, user: User) -> User:
        new_id = self._execute(
            "INSERT INTO user (username, password, email) VALUES (%s, %s, %s)",
            (user.username, user.password, user.email),
            fetch="lastrowid",
        )
        if not new_id:
            logger.error("INSERT INTO user returned no id")
            raise StorageError("insert did not return an id")
        return user.model_copy(update={"id": int(new_id)})

    def update(self, user: User) -> User:
        matched = self._execute(
            "UPDATE user SET username = %s, password = %s, email = %s WHERE id = %s",
            (user.username, user.password, user.email, user.id),
        )
        if matched == 0:
            raise NotFoundError()
        return user

    def delete(self, user: User) -> None:
        deleted = self._execute("DELETE FROM user WHERE id = %s", (user.id,))
        if deleted == 0:
            raise NotFoundError()
