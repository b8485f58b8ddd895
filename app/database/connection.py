from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg_pool import ConnectionPool

from app.config.settings import Settings


def build_conninfo(settings: Settings) -> str:
    return (
        f"host={settings.db_host} "
        f"port={settings.db_port} "
        f"dbname={settings.db_database} "
        f"user={settings.db_username} "
        f"password={settings.db_password}"
    )


class Database:
    """Owns the connection pool for the lifetime of the process."""

    def __init__(self, conninfo: str, min_size: int = 1, max_size: int = 10) -> None:
        self._conninfo = conninfo
        self._min_size = min_size
        self._max_size = max_size
        self._pool: ConnectionPool | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(build_conninfo(settings))

    def open(self) -> None:
        """Create the pool and wait until a connection is available."""
        if self._pool is None:
            self._pool = ConnectionPool(
                self._conninfo,
                min_size=self._min_size,
                max_size=self._max_size,
                open=True,
            )
            self._pool.wait()

    def close(self) -> None:
        if self._pool is not None:
            self._pool.close()
            self._pool = None

    @contextmanager
    def connection(self) -> Generator[psycopg.Connection[Any], None, None]:
        """Yield a connection from the pool. Caller manages commit/rollback."""
        if self._pool is None:
            raise RuntimeError("Connection pool not initialized. Call open() first.")
        with self._pool.connection() as conn:
            yield conn
