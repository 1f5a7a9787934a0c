"""
Fixed-timestep driver for a SnakeGame.

The host calls advance() as often as it likes (once per rendered frame,
from a timer, ...). Elapsed time is accumulated and converted into whole
logic ticks, so simulation speed does not depend on how often advance()
is called.
"""

import logging
import time
from typing import Callable, List, Optional

from domain.constants import PLAYING
from domain.game_state import TickResult

logger = logging.getLogger(__name__)


class FixedStepLoop:
    def __init__(
        self,
        game,
        tick_interval: float = 0.1,
        clock: Callable[[], float] = time.monotonic,
        max_ticks_per_frame: Optional[int] = 10,
    ):
        if tick_interval <= 0:
            raise ValueError(f"tick_interval must be positive, got {tick_interval}")
        self.game = game
        self.tick_interval = tick_interval
        self.clock = clock
        self.max_ticks_per_frame = max_ticks_per_frame
        self.accumulator = 0.0
        self.last_time: Optional[float] = None

    def reset(self) -> None:
        self.accumulator = 0.0
        self.last_time = None

    def advance(self, now: Optional[float] = None) -> List[TickResult]:
        """
        Account for the time since the previous call and run due ticks.

        Returns the tick results produced during this call, oldest first.
        The first call only records the starting time.
        """
        now = self.clock() if now is None else now
        if self.last_time is None:
            self.last_time = now
            return []

        elapsed = max(0.0, now - self.last_time)
        self.last_time = now

        if self.game.state != PLAYING:
            self.accumulator = 0.0
            return []

        self.accumulator += elapsed
        results = []
        while self.accumulator > self.tick_interval:
            if self.max_ticks_per_frame is not None and len(results) >= self.max_ticks_per_frame:
                logger.debug("Dropping %.3fs of backlog after %d ticks", self.accumulator, len(results))
                self.accumulator = 0.0
                break
            result = self.game.tick()
            self.accumulator -= self.tick_interval
            if result is None:
                break
            results.append(result)
            if self.game.state != PLAYING:
                self.accumulator = 0.0
                break
        return results

    def run(
        self,
        frame_interval: float = 1 / 60,
        max_frames: Optional[int] = None,
        on_frame: Optional[Callable[[List[TickResult]], None]] = None,
        sleep: Callable[[float], None] = time.sleep,
        until: Optional[Callable[[], bool]] = None,
    ) -> int:
        """
        Drive the game in real time until it leaves PLAYING or `until()`
        returns True.

        Returns the number of frames run.
        """
        frames = 0
        self.advance()
        while self.game.state == PLAYING:
            if max_frames is not None and frames >= max_frames:
                break
            if until is not None and until():
                break
            sleep(frame_interval)
            results = self.advance()
            if on_frame is not None:
                on_frame(results)
            frames += 1
        return frames
