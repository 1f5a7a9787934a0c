"""
Database configuration and schema management for the grid snake game.

This module provides SQLite connection management with environment-aware
path selection and schema initialization.
"""

import logging
import os
import sqlite3
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def get_database_path() -> str:
    """
    Determine the database path.

    Returns:
        Path to the SQLite database file: GRIDSNAKE_DB_PATH when set,
        otherwise backend/gridsnake.db.
    """
    env_path = os.getenv('GRIDSNAKE_DB_PATH', '').strip()
    if env_path:
        return env_path

    backend_dir = Path(__file__).parent
    return str(backend_dir / 'gridsnake.db')


def get_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """
    Get a database connection with appropriate settings.

    Returns:
        sqlite3.Connection: Database connection with row factory enabled.
    """
    db_path = db_path or get_database_path()
    parent = os.path.dirname(db_path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row  # Enable column access by name
    return conn


def init_database(db_path: Optional[str] = None) -> None:
    """
    Initialize the database schema with all required tables and indexes.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = get_connection(db_path)
    cursor = conn.cursor()

    try:
        # Single-integer settings such as the high score
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value INTEGER NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Finished games
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS games (
                id TEXT PRIMARY KEY,
                mode TEXT NOT NULL CHECK(mode IN ('HUMAN', 'BOT')),
                variant TEXT,
                score INTEGER DEFAULT 0,
                ticks INTEGER DEFAULT 0,
                end_reason TEXT,
                board_width INTEGER NOT NULL,
                board_height INTEGER NOT NULL,
                start_time TIMESTAMP,
                end_time TIMESTAMP,
                replay_path TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        cursor.execute("CREATE INDEX IF NOT EXISTS idx_games_score ON games(score DESC)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_games_end_time ON games(end_time DESC)")

        conn.commit()
        logger.debug("Database schema ready at %s", db_path or get_database_path())

    except Exception as e:
        conn.rollback()
        logger.error("Error initializing database: %s", e)
        raise
    finally:
        conn.close()


if __name__ == "__main__":
    # Allow running this module directly to initialize the database
    init_database()
    print(f"Database ready at: {get_database_path()}")
