"""
Tests for the controllers: human, random, greedy, pathfinding and the
variant registry.
"""

import random
import sys
import os

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import GameConfig
from domain.constants import BOT, HUMAN, UP, DOWN, LEFT, RIGHT
from domain.snake import Snake
from game_engine import new_game
from players import GreedyPlayer, HumanPlayer, PathfindingPlayer, RandomPlayer
from players.variant_registry import (
    AVAILABLE_VARIANTS, DEFAULT_VARIANT, create_player, get_player_class, list_variants,
)


def make_session(cols, rows, body, direction, food, mode=BOT, variant="pathfinding"):
    """Build a session and overwrite its board with a hand-made position."""
    config = GameConfig(cols=cols, rows=rows, initial_length=1, seed=0)
    session = new_game(mode, config=config, variant=variant)
    session.snake = Snake(body)
    session.direction = direction
    session.food = food
    return session


class TestSafeMoves:
    """Tests for Player.safe_moves()."""

    def test_reversal_is_excluded(self):
        session = make_session(5, 5, [(2, 2), (1, 2), (0, 2)], RIGHT, (4, 4))
        moves = [move for move, _ in PathfindingPlayer.safe_moves(session)]
        assert moves == [UP, DOWN, RIGHT]

    def test_walls_and_body_are_excluded(self):
        session = make_session(5, 5, [(0, 0), (1, 0), (1, 1), (0, 1), (0, 2)], LEFT, (4, 4))
        assert PathfindingPlayer.safe_moves(session) == []


class TestPathfindingPlayer:
    """Tests for the BFS + flood-fill bot."""

    def test_follows_first_step_of_shortest_path(self):
        """On an open board the bot heads straight for the food."""
        session = make_session(10, 10, [(2, 5), (1, 5), (0, 5)], RIGHT, (6, 5))
        assert PathfindingPlayer().get_move(session) == RIGHT

    def test_path_tie_break_uses_neighbour_order(self):
        """Food diagonally down-right: DOWN is explored before RIGHT."""
        session = make_session(5, 5, [(1, 1)], RIGHT, (2, 2))
        assert PathfindingPlayer().get_move(session) == DOWN

    def test_fallback_picks_largest_reachable_area(self):
        """With no path to food the move leaving the most room wins."""
        body = [
            (1, 0), (1, 1), (0, 1), (0, 2), (1, 2), (2, 2),
            (2, 3), (2, 4), (3, 4), (3, 3), (4, 3), (4, 2),
        ]
        session = make_session(5, 5, body, UP, (4, 4))
        # LEFT leads into a one-cell pocket, RIGHT into seven open cells
        assert PathfindingPlayer().get_move(session) == RIGHT

    def test_fallback_tie_goes_to_first_in_order(self):
        """Equal space on both sides: LEFT comes before RIGHT."""
        body = [(2, 0), (2, 1), (2, 2), (2, 3), (2, 4)]
        session = make_session(5, 5, body, UP, None)
        assert PathfindingPlayer().get_move(session) == LEFT

    def test_boxed_in_keeps_direction(self):
        """No path and no safe move: None leaves the direction unchanged."""
        session = make_session(5, 5, [(0, 0), (1, 0), (1, 1), (0, 1), (0, 2)], LEFT, (4, 4))
        assert PathfindingPlayer().get_move(session) is None

    def test_decide_alias(self):
        session = make_session(10, 10, [(2, 5), (1, 5), (0, 5)], RIGHT, (2, 1))
        player = PathfindingPlayer()
        assert player.decide(session) == player.get_move(session) == UP


class TestGreedyPlayer:
    """Tests for the Manhattan-distance bot."""

    def test_moves_toward_food(self):
        session = make_session(10, 10, [(5, 5), (4, 5)], RIGHT, (5, 1))
        assert GreedyPlayer().get_move(session) == UP

    def test_never_picks_unsafe_move(self):
        """Food behind the body: the reversal is not considered."""
        session = make_session(10, 10, [(5, 5), (4, 5), (3, 5)], RIGHT, (0, 5))
        assert GreedyPlayer().get_move(session) in (UP, DOWN)

    def test_boxed_in_returns_none(self):
        session = make_session(5, 5, [(0, 0), (1, 0), (1, 1), (0, 1), (0, 2)], LEFT, (4, 4))
        assert GreedyPlayer().get_move(session) is None


class TestRandomPlayer:
    """Tests for the random bot."""

    def test_only_returns_safe_moves(self):
        session = make_session(5, 5, [(0, 0), (1, 0), (2, 0)], LEFT, (4, 4))
        player = RandomPlayer(random.Random(5))
        for _ in range(20):
            assert player.get_move(session) == DOWN

    def test_seeded_players_agree(self):
        session = make_session(10, 10, [(5, 5), (4, 5)], RIGHT, (0, 0))
        a = RandomPlayer(random.Random(42))
        b = RandomPlayer(random.Random(42))
        assert [a.get_move(session) for _ in range(10)] == [b.get_move(session) for _ in range(10)]


class TestHumanPlayer:
    """Tests for queued human input."""

    def test_consumes_queued_direction(self):
        session = make_session(10, 10, [(5, 5), (4, 5)], RIGHT, (0, 0), mode=HUMAN)
        session.input_queue.submit("ArrowUp", session.direction)
        player = HumanPlayer()
        assert player.get_move(session) == UP
        assert player.get_move(session) == RIGHT


class TestVariantRegistry:
    """Tests for variant lookup."""

    def test_available_variants(self):
        assert AVAILABLE_VARIANTS == ["pathfinding", "greedy", "random"]
        assert DEFAULT_VARIANT == "pathfinding"
        assert [v["key"] for v in list_variants()] == AVAILABLE_VARIANTS

    def test_get_player_class_defaults_and_normalizes(self):
        assert get_player_class(None) is PathfindingPlayer
        assert get_player_class("  Greedy ") is GreedyPlayer

    def test_unknown_variant_raises(self):
        with pytest.raises(ValueError, match="Unknown player variant"):
            get_player_class("minimax")

    def test_create_player(self):
        assert isinstance(create_player(HUMAN), HumanPlayer)
        assert isinstance(create_player(BOT, "random", random.Random(1)), RandomPlayer)
        with pytest.raises(ValueError):
            create_player("SPECTATOR")
