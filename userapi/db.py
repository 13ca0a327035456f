"""
MySQL storage handle. One connection per operation; the handle is built at
startup and injected into repositories.
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

import pymysql
import pymysql.cursors
from pymysql.connections import Connection
from pymysql.constants import CLIENT

from userapi.core.settings import Settings

logger = logging.getLogger(__name__)

CREATE_USER_TABLE = """
CREATE TABLE IF NOT EXISTS user (
  id INT NOT NULL AUTO_INCREMENT,
  username VARCHAR(255) NOT NULL,
  password VARCHAR(255) NOT NULL,
  email VARCHAR(255),
  PRIMARY KEY (id)
) ENGINE=InnoDB
"""


class Database:
    """Connection factory for the configured MySQL database."""

    def __init__(self, connect_kwargs: Dict[str, Any]) -> None:
        self._connect_kwargs = dict(connect_kwargs)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.mysql_connect_kwargs())

    @property
    def name(self) -> Optional[str]:
        return self._connect_kwargs.get("database")

    def connect(self) -> Connection:
        # FOUND_ROWS: rowcount of UPDATE counts matched rows, not changed rows
        return pymysql.connect(
            cursorclass=pymysql.cursors.DictCursor,
            client_flag=CLIENT.FOUND_ROWS,
            **self._connect_kwargs,
        )

    @contextmanager
    def connection(self) -> Iterator[Connection]:
        conn = self.connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            try:
                conn.rollback()
            except pymysql.MySQLError as e:
                # broken connection; keep the original error
                logger.debug("MySQL rollback failed: %s", e)
            raise
        finally:
            conn.close()

    def ping(self) -> bool:
        """True if a connection can be opened and answers SELECT 1."""
        try:
            with self.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT 1")
            return True
        except pymysql.MySQLError as e:
            logger.warning("MySQL ping failed: %s", e)
            return False
