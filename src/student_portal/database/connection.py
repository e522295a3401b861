from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from mysql.connector import Error as MySQLError
from mysql.connector import pooling

from ..common.logging import get_logger
from ..core.constants import DEFAULT_POOL_SIZE

logger = get_logger("database")


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = DEFAULT_POOL_SIZE

    @classmethod
    def from_dict(cls, db_config: dict, *, pool_size: int = DEFAULT_POOL_SIZE) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config["database"]),
            pool_size=int(pool_size),
        )

    def describe(self) -> str:
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Pooled connection provider.

    The pool is created on first use so the HTTP server can start while the
    database is still unreachable. When every pooled connection is busy,
    callers wait for one to come back instead of failing.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._lock = threading.Lock()
        self._slots = threading.BoundedSemaphore(config.pool_size)

    @property
    def config(self) -> DBConfig:
        return self._config

    @property
    def is_initialized(self) -> bool:
        return self._pool is not None

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        with self._lock:
            if self._pool is None:
                self._pool = pooling.MySQLConnectionPool(
                    pool_name="student_portal",
                    pool_size=self._config.pool_size,
                    host=self._config.host,
                    port=int(self._config.port),
                    user=self._config.user,
                    password=self._config.password,
                    database=self._config.database,
                    connection_timeout=30,
                )
                logger.info("Connection pool ready (%s, size=%d)", self._config.describe(), self._config.pool_size)
            return self._pool

    @contextmanager
    def connection(self) -> Iterator:
        """Borrow one pooled connection; it goes back to the pool on exit."""
        with self._slots:
            conn = self._get_pool().get_connection()
            try:
                yield conn
            finally:
                conn.close()

    def ping(self) -> int:
        with self.connection() as conn:
            cur = conn.cursor()
            try:
                cur.execute("SELECT 1")
                row = cur.fetchone()
            finally:
                cur.close()
        return int(row[0])

    def warm_up(self) -> bool:
        """Open the pool at startup. An unreachable database is logged, not fatal."""
        try:
            self.ping()
        except MySQLError as e:
            logger.warning("Database not reachable at startup (%s): %s", self._config.describe(), e)
            return False
        return True

    def close(self) -> None:
        with self._lock:
            if self._pool is None:
                return
            # Closes idle connections; borrowed ones are closed when returned.
            self._pool._remove_connections()
            self._pool = None
        logger.info("Connection pool closed")
