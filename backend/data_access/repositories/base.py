"""
Base repository with connection management.

Provides a context manager for database connections that handles:
- Lazy schema initialization
- Automatic connection cleanup
- Transaction commit on success
- Transaction rollback on failure
"""

from contextlib import contextmanager
from typing import Any, Generator, Optional

from database import get_connection, init_database


class BaseRepository:
    """
    Base class for all repositories.

    Provides connection management via context manager pattern.
    Subclasses should use self.connection() to get database connections.
    """

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path
        self._schema_ready = False

    def _ensure_schema(self) -> None:
        if not self._schema_ready:
            init_database(self.db_path)
            self._schema_ready = True

    @contextmanager
    def connection(self, auto_commit: bool = True) -> Generator[Any, None, None]:
        """
        Context manager for database connections.

        Automatically handles:
        - Getting a connection
        - Committing on successful exit (if auto_commit=True)
        - Rolling back on exception
        - Closing the connection in all cases

        Args:
            auto_commit: If True, commit transaction on successful exit.
                        Set to False if you want to manage transactions manually.

        Yields:
            A tuple of (connection, cursor) for database operations.

        Example:
            with self.connection() as (conn, cursor):
                cursor.execute("SELECT * FROM games")
                results = cursor.fetchall()
        """
        self._ensure_schema()
        conn = get_connection(self.db_path)
        cursor = conn.cursor()
        try:
            yield conn, cursor
            if auto_commit:
                conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    @contextmanager
    def read_connection(self) -> Generator[Any, None, None]:
        """
        Context manager for read-only operations.

        Same as connection() but with auto_commit=False since
        read operations don't need commits.

        Yields:
            A tuple of (connection, cursor) for database operations.
        """
        self._ensure_schema()
        conn = get_connection(self.db_path)
        cursor = conn.cursor()
        try:
            yield conn, cursor
        finally:
            cursor.close()
            conn.close()
