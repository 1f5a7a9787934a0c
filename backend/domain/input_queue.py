"""
Buffered human input.
"""

from collections import deque
from typing import Dict, List, Optional

from .constants import DOWN, LEFT, MAX_PENDING_INPUTS, RIGHT, UP, VALID_MOVES, is_reversal

# Raw key / gesture names understood by submit()
KEY_BINDINGS: Dict[str, str] = {
    "ArrowUp": UP,
    "ArrowDown": DOWN,
    "ArrowLeft": LEFT,
    "ArrowRight": RIGHT,
    "w": UP,
    "s": DOWN,
    "a": LEFT,
    "d": RIGHT,
    "swipe_up": UP,
    "swipe_down": DOWN,
    "swipe_left": LEFT,
    "swipe_right": RIGHT,
}


def parse_direction(raw) -> Optional[str]:
    """Map a raw key, swipe or direction name to a direction, or None."""
    if raw is None:
        return None
    raw = str(raw).strip()
    if raw in KEY_BINDINGS:
        return KEY_BINDINGS[raw]
    lowered = raw.lower()
    if lowered in KEY_BINDINGS:
        return KEY_BINDINGS[lowered]
    upper = raw.upper()
    if upper in VALID_MOVES:
        return upper
    return None


class InputQueue:
    """
    Pending directions submitted between ticks.

    No queued entry is ever the reverse of the entry before it, or of the
    committed direction when the queue is empty. Each tick consumes at most
    one entry.
    """

    def __init__(self, max_pending: Optional[int] = MAX_PENDING_INPUTS):
        self.max_pending = max_pending
        self._pending = deque()

    def submit(self, raw, committed: str) -> bool:
        """
        Queue a raw input. Returns True if it was accepted.

        Unknown inputs, reversals and inputs beyond `max_pending` are
        discarded silently.
        """
        direction = parse_direction(raw)
        if direction is None:
            return False

        last = self._pending[-1] if self._pending else committed
        if is_reversal(last, direction):
            return False
        if self.max_pending is not None and len(self._pending) >= self.max_pending:
            return False

        self._pending.append(direction)
        return True

    def next_direction(self, committed: str) -> str:
        """Dequeue one direction if present, otherwise keep `committed`."""
        if self._pending:
            return self._pending.popleft()
        return committed

    def pending(self) -> List[str]:
        return list(self._pending)

    def clear(self) -> None:
        self._pending.clear()

    def __len__(self):
        return len(self._pending)
