"""
Key-value repository for single integer values (the persisted high score).
"""

from typing import Dict

from .base import BaseRepository


class ScoreRepository(BaseRepository):
    """
    Repository for the kv_store table.
    """

    def get_int(self, key: str, default: int = 0) -> int:
        with self.read_connection() as (conn, cursor):
            cursor.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = cursor.fetchone()
            return int(row["value"]) if row is not None else default

    def set_int(self, key: str, value: int) -> None:
        with self.connection() as (conn, cursor):
            cursor.execute("""
                INSERT INTO kv_store (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = CURRENT_TIMESTAMP
            """, (key, int(value)))

    def set_int_if_greater(self, key: str, value: int) -> bool:
        """
        Store `value` only if it beats the stored one, in one transaction.

        Returns:
            True if the stored value changed.
        """
        with self.connection() as (conn, cursor):
            cursor.execute("""
                INSERT INTO kv_store (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = CURRENT_TIMESTAMP
                WHERE excluded.value > kv_store.value
            """, (key, int(value)))
            return cursor.rowcount > 0

    def get_all(self) -> Dict[str, int]:
        with self.read_connection() as (conn, cursor):
            cursor.execute("SELECT key, value FROM kv_store ORDER BY key")
            return {row["key"]: int(row["value"]) for row in cursor.fetchall()}
