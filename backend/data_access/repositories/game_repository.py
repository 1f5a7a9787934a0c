"""
Game repository for game-related database operations.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from .base import BaseRepository


class GameRepository(BaseRepository):
    """
    Repository for games table operations.
    """

    # -------------------------------------------------------------------------
    # Game CRUD operations
    # -------------------------------------------------------------------------

    def insert_game(
        self,
        game_id: str,
        mode: str,
        variant: Optional[str],
        score: int,
        ticks: int,
        end_reason: Optional[str],
        board_width: int,
        board_height: int,
        start_time: datetime,
        end_time: datetime,
        replay_path: Optional[str] = None,
    ) -> None:
        """
        Insert a completed game record.

        Args:
            game_id: Unique game identifier (UUID)
            mode: 'HUMAN' or 'BOT'
            variant: Bot variant key (None for human games)
            score: Final score
            ticks: Number of ticks played
            end_reason: 'wall', 'self', 'board_cleared', ...
            board_width: Width of the game board
            board_height: Height of the game board
            start_time: Game start timestamp
            end_time: Game end timestamp
            replay_path: Path to the JSON replay file, if one was written
        """
        with self.connection() as (conn, cursor):
            cursor.execute("""
                INSERT INTO games (
                    id, mode, variant, score, ticks, end_reason,
                    board_width, board_height, start_time, end_time, replay_path
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                game_id,
                mode,
                variant,
                score,
                ticks,
                end_reason,
                board_width,
                board_height,
                start_time.isoformat() if isinstance(start_time, datetime) else start_time,
                end_time.isoformat() if isinstance(end_time, datetime) else end_time,
                replay_path,
            ))

    def get_game(self, game_id: str) -> Optional[Dict[str, Any]]:
        with self.read_connection() as (conn, cursor):
            cursor.execute("SELECT * FROM games WHERE id = ?", (game_id,))
            row = cursor.fetchone()
            return dict(row) if row is not None else None

    def get_recent_games(self, limit: int = 10) -> List[Dict[str, Any]]:
        with self.read_connection() as (conn, cursor):
            cursor.execute(
                "SELECT * FROM games ORDER BY end_time DESC, created_at DESC LIMIT ?",
                (limit,),
            )
            return [dict(row) for row in cursor.fetchall()]

    def get_top_games(self, limit: int = 10, variant: Optional[str] = None) -> List[Dict[str, Any]]:
        with self.read_connection() as (conn, cursor):
            if variant is None:
                cursor.execute(
                    "SELECT * FROM games ORDER BY score DESC, ticks ASC LIMIT ?",
                    (limit,),
                )
            else:
                cursor.execute(
                    "SELECT * FROM games WHERE variant = ? ORDER BY score DESC, ticks ASC LIMIT ?",
                    (variant, limit),
                )
            return [dict(row) for row in cursor.fetchall()]

    def count_games(self) -> int:
        with self.read_connection() as (conn, cursor):
            cursor.execute("SELECT COUNT(*) AS total FROM games")
            return int(cursor.fetchone()["total"])
