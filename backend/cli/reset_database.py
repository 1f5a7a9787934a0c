#!/usr/bin/env python3
"""
Reset database to clean state.

Wipes the persisted high score and the finished-games table while
preserving the schema structure.

Usage:
    python backend/cli/reset_database.py [--confirm] [--scores-only]
"""

import os
import sys
import argparse

# Add parent directory to path to import database modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from database import get_connection, get_database_path, init_database  # noqa: E402


def reset_database(confirm: bool = False, scores_only: bool = False, db_path=None) -> bool:
    """
    Reset the database by deleting all rows.

    Args:
        confirm: If True, skip confirmation prompt
        scores_only: Only clear kv_store (the high score), keep games

    Returns:
        True if reset was successful, False otherwise
    """
    db_path = db_path or get_database_path()
    tables = ['kv_store'] if scores_only else ['kv_store', 'games']

    if not confirm:
        print("=" * 70)
        print("DATABASE RESET WARNING")
        print("=" * 70)
        print(f"Database path: {db_path}")
        print("\nThis will DELETE ALL DATA from the following tables:")
        for table in tables:
            print(f"  - {table}")
        print("\nThe schema structure will be preserved.")
        print("=" * 70)

        response = input("\nType 'RESET' to confirm: ")

        if response != 'RESET':
            print("Reset cancelled")
            return False

    init_database(db_path)
    conn = get_connection(db_path)
    cursor = conn.cursor()

    try:
        for table in tables:
            cursor.execute(f"DELETE FROM {table}")
            print(f"  Cleared {table}: {cursor.rowcount} rows deleted")

        conn.commit()
        print("Database reset complete")
        return True

    except Exception as e:
        conn.rollback()
        print(f"Error during reset: {e}")
        return False
    finally:
        conn.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Reset the game database")
    parser.add_argument("--confirm", action="store_true",
                        help="Skip the confirmation prompt")
    parser.add_argument("--scores-only", action="store_true",
                        help="Only reset the high score")
    args = parser.parse_args(argv)

    ok = reset_database(confirm=args.confirm, scores_only=args.scores_only)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
