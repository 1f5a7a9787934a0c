"""
Fixed-step game engine: session lifecycle and the per-tick update.

The module-level functions operate on an explicit Session; SnakeGame wraps
them into the MENU -> PLAYING -> GAMEOVER state machine used by the CLI and
the HTTP API.
"""

import logging
import random
import time
from typing import Callable, List, Optional

from config import GameConfig
from domain.collision import check_move
from domain.constants import (
    BOARD_CLEARED, BOT, DEFAULT_DIRECTION, GAMEOVER, HUMAN, MENU, PLAYING,
    VALID_MODES, VALID_MOVES, step,
)
from domain.food import FoodSpawner
from domain.game_state import GameSnapshot, TickResult
from domain.grid import GridWorld
from domain.input_queue import InputQueue
from domain.session import Session
from domain.snake import Snake
from players.variant_registry import create_player

logger = logging.getLogger(__name__)


def new_game(
    mode: str,
    config: Optional[GameConfig] = None,
    variant: Optional[str] = None,
    rng: Optional[random.Random] = None,
    high_scores=None,
    record_history: bool = False,
    session_id: Optional[str] = None,
) -> Session:
    """
    Create a fresh PLAYING session.

    Args:
        mode: HUMAN or BOT
        config: Board and rule settings (defaults to GameConfig())
        variant: Bot variant key, ignored for HUMAN (defaults to config.bot_variant)
        rng: Random source shared by food spawning and random bots
        high_scores: Optional tracker with get() / record(score)
        record_history: Keep a per-tick record for replays

    Raises:
        ValueError: If the mode or bot variant is not recognized.
    """
    if mode not in VALID_MODES:
        raise ValueError(f"Unknown mode '{mode}'. Expected '{HUMAN}' or '{BOT}'.")

    config = config or GameConfig()
    rng = rng or random.Random(config.seed)
    if mode == BOT:
        if variant is not None and not isinstance(variant, str):
            raise ValueError(f"Bot variant must be a string, got {variant!r}")
        variant = (variant or config.bot_variant).strip().lower()
    else:
        variant = None

    grid = GridWorld(config.cols, config.rows)
    snake = Snake.spawn((grid.cols // 2, grid.rows // 2), config.initial_length)
    session = Session(
        grid=grid,
        snake=snake,
        direction=DEFAULT_DIRECTION,
        mode=mode,
        player=create_player(mode, variant, rng),
        spawner=FoodSpawner(grid, rng, config.max_spawn_attempts),
        input_queue=InputQueue(config.max_pending_inputs),
        high_scores=high_scores,
        variant=variant,
        session_id=session_id,
        record_history=record_history,
    )
    logger.info(
        "Started %s session %s on %dx%d board (variant=%s)",
        mode, session.session_id, grid.cols, grid.rows, variant,
    )

    if session.food is None:
        end_game(session, BOARD_CLEARED)
    return session


def submit_direction(session: Session, raw_input) -> bool:
    """Queue a human direction. No-op (False) for bots or finished sessions."""
    if session.mode != HUMAN or session.state != PLAYING:
        return False
    return session.input_queue.submit(raw_input, session.direction)


def snapshot(session: Session) -> GameSnapshot:
    return session.snapshot()


def tick(session: Session) -> TickResult:
    """
    Advance the session by one logic tick.

    1) Ask the controller for a direction (None keeps the current one)
    2) Check the new head against walls and the pre-move body
    3) Either commit the move (growing on food) or end the game

    Never raises for gameplay conditions; every call returns a TickResult.
    """
    if session.state != PLAYING:
        return _idle_result(session)

    move = session.player.get_move(session)
    if move is not None:
        if move in VALID_MOVES:
            session.direction = move
        else:
            logger.warning("Ignoring invalid move %r from %r", move, session.player)

    snake = session.snake
    head = snake.head
    new_head = step(head, session.direction)
    death_reason = check_move(session.grid, new_head, snake.positions)

    if death_reason is not None:
        snake.alive = False
        snake.death_reason = death_reason
        snake.death_tick = session.tick_number
        session.tick_number += 1
        if session.record_history:
            session.record_round()
        end_game(session, death_reason)
        return TickResult(
            alive=False,
            ate_food=False,
            head=head,
            score=session.score,
            direction=session.direction,
            death_reason=death_reason,
            tick_number=session.tick_number,
        )

    ate_food = new_head == session.food
    new_head, popped = snake.advance(session.direction, grew=ate_food)

    board_cleared = False
    if ate_food:
        session.score += 1
        session.food = session.spawner.spawn(snake.positions)
        board_cleared = session.food is None

    session.tick_number += 1
    if session.record_history:
        session.record_round()
    if board_cleared:
        end_game(session, BOARD_CLEARED)

    return TickResult(
        alive=True,
        ate_food=ate_food,
        head=new_head,
        score=session.score,
        popped_tail=popped,
        direction=session.direction,
        board_cleared=board_cleared,
        tick_number=session.tick_number,
    )


def _idle_result(session: Session) -> TickResult:
    return TickResult(
        alive=session.state == PLAYING,
        ate_food=False,
        head=session.snake.head,
        score=session.score,
        direction=session.direction,
        death_reason=session.snake.death_reason,
        board_cleared=session.end_reason == BOARD_CLEARED,
        tick_number=session.tick_number,
    )


def end_game(session: Session, reason: str) -> None:
    """Move a PLAYING session to GAMEOVER and record its score."""
    if session.state == GAMEOVER:
        return
    session.state = GAMEOVER
    session.end_reason = reason
    session.end_time = time.time()
    session.input_queue.clear()

    if session.high_scores is not None:
        try:
            if session.high_scores.record(session.score):
                logger.info("New high score: %d", session.score)
        except Exception as e:
            logger.warning("Could not record high score: %s", e)

    logger.info(
        "Game over (%s) for session %s after %d ticks with score %d",
        reason, session.session_id, session.tick_number, session.score,
    )


class SnakeGame:
    """
    Manages:
      - The current session (None while in the menu)
      - MENU -> PLAYING -> GAMEOVER transitions
      - Tick listeners (render, audio and score adapters)
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        high_scores=None,
        rng: Optional[random.Random] = None,
        record_history: bool = False,
    ):
        self.config = config or GameConfig()
        self.high_scores = high_scores
        self.rng = rng or random.Random(self.config.seed)
        self.record_history = record_history
        self.session: Optional[Session] = None
        self.mode: Optional[str] = None
        self.variant: Optional[str] = None
        self._listeners: List[Callable[[TickResult], None]] = []

    @property
    def state(self) -> str:
        if self.session is None:
            return MENU
        return self.session.state

    def add_listener(self, callback: Callable[[TickResult], None]) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[TickResult], None]) -> None:
        self._listeners.remove(callback)

    def start(self, mode: str, variant: Optional[str] = None) -> Session:
        """Start a fresh session, replacing any current one."""
        self.session = new_game(
            mode,
            config=self.config,
            variant=variant,
            rng=self.rng,
            high_scores=self.high_scores,
            record_history=self.record_history,
        )
        self.mode = mode
        self.variant = self.session.variant
        return self.session

    def restart(self) -> Session:
        """Start over with the same mode and variant as the last session."""
        if self.mode is None:
            raise RuntimeError("Cannot restart before a game has been started.")
        return self.start(self.mode, self.variant)

    def menu(self) -> None:
        """Drop the current session (and its pending input) and go back to the menu."""
        self.session = None

    def submit_direction(self, raw_input) -> bool:
        if self.session is None:
            return False
        return submit_direction(self.session, raw_input)

    def tick(self) -> Optional[TickResult]:
        """Run one logic tick. Returns None in the menu."""
        if self.session is None:
            return None
        result = tick(self.session)
        for callback in list(self._listeners):
            callback(result)
        return result

    def snapshot(self) -> GameSnapshot:
        if self.session is not None:
            return self.session.snapshot()
        return GameSnapshot(
            state=MENU,
            mode=None,
            snake_cells=[],
            food=None,
            score=0,
            width=self.config.cols,
            height=self.config.rows,
            high_score=self.high_scores.get() if self.high_scores is not None else 0,
        )

    def __repr__(self):
        return f"<SnakeGame state={self.state} mode={self.mode} variant={self.variant}>"
