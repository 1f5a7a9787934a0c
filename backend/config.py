"""
Runtime configuration read from the environment (and an optional .env file).
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from domain import constants
from domain.grid import GridWorld

load_dotenv()


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass
class GameConfig:
    board_px: int = constants.BOARD_PX
    cell_px: int = constants.CELL_PX
    tick_ms: int = constants.TICK_MS
    initial_length: int = constants.INITIAL_LENGTH
    bot_variant: str = "pathfinding"
    max_spawn_attempts: int = constants.MAX_SPAWN_ATTEMPTS
    max_pending_inputs: Optional[int] = constants.MAX_PENDING_INPUTS
    seed: Optional[int] = None
    log_level: str = "INFO"
    # Explicit dimensions override board_px / cell_px
    cols: Optional[int] = None
    rows: Optional[int] = None

    def __post_init__(self):
        if self.cols is None or self.rows is None:
            grid = GridWorld.from_pixels(self.board_px, self.cell_px)
            self.cols = self.cols if self.cols is not None else grid.cols
            self.rows = self.rows if self.rows is not None else grid.rows
        if self.cols * self.rows < 2:
            raise ValueError(f"Board must hold at least 2 cells, got {self.cols}x{self.rows}")
        if self.initial_length < 1 or self.initial_length > self.cols // 2 + 1:
            raise ValueError(
                f"initial_length {self.initial_length} does not fit a {self.cols}-column board"
            )
        if self.tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {self.tick_ms}")

    @property
    def tick_interval(self) -> float:
        """Logic tick length in seconds."""
        return self.tick_ms / 1000.0

    @classmethod
    def from_env(cls, **overrides) -> "GameConfig":
        values = {
            "board_px": _env_int("GRIDSNAKE_BOARD_PX", constants.BOARD_PX),
            "cell_px": _env_int("GRIDSNAKE_CELL_PX", constants.CELL_PX),
            "tick_ms": _env_int("GRIDSNAKE_TICK_MS", constants.TICK_MS),
            "initial_length": _env_int("GRIDSNAKE_INITIAL_LENGTH", constants.INITIAL_LENGTH),
            "bot_variant": os.getenv("GRIDSNAKE_BOT_VARIANT", "pathfinding").strip() or "pathfinding",
            "max_spawn_attempts": _env_int("GRIDSNAKE_MAX_SPAWN_ATTEMPTS", constants.MAX_SPAWN_ATTEMPTS),
            "max_pending_inputs": _env_int("GRIDSNAKE_MAX_PENDING_INPUTS", constants.MAX_PENDING_INPUTS),
            "seed": _env_int("GRIDSNAKE_SEED", None),
            "log_level": os.getenv("GRIDSNAKE_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
