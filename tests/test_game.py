"""
Tests for the round driver.

Tests cover the game state machine, tile seeding after accepted moves, rejected moves and resumed boards.
"""

from contextlib import redirect_stdout
from io import StringIO
from unittest import TestCase, main

import numpy as np

from slidemerge.core.board import Board, Direction
from slidemerge.envs.config import GameConfiguration
from slidemerge.envs.game import GameState, SlidingGame


class TestGameConfiguration(TestCase):
    """Test configuration validation."""

    def test_defaults(self):
        """Default rules are a 4x4 board seeding one 2 or 4."""
        config = GameConfiguration()
        self.assertEqual((config.size, config.spawn_count, config.spawn_scope), (4, 1, (1, 3)))

    def test_invalid_values(self):
        """Invalid rules are rejected."""
        with self.assertRaises(ValueError):
            GameConfiguration(size=1)
        with self.assertRaises(ValueError):
            GameConfiguration(spawn_count=0)
        with self.assertRaises(ValueError):
            GameConfiguration(spawn_scope=(3, 3))


class TestSlidingGame(TestCase):
    """Test the round state machine."""

    def setUp(self):
        """Initialize a seeded game before each test."""
        self.game = SlidingGame(seed=42)

    def test_reset_seeds_one_tile(self):
        """A new game starts waiting for input with a single 2 or 4."""
        board = self.game.reset(seed=5)

        self.assertEqual(np.count_nonzero(board.tiles), 1)
        self.assertTrue(np.isin(board.tiles[board.tiles != 0], [1, 2]).all())
        self.assertEqual(self.game.state, GameState.WAIT_INPUT)
        self.assertEqual(self.game.score, 0)
        self.assertEqual(self.game.moves, 0)

    def test_reset_seed_reproducibility(self):
        """Same seed produces identical initial boards."""
        first = SlidingGame(seed=9).board
        second = SlidingGame(seed=9).board
        self.assertEqual(first, second)

    def test_accepted_move_seeds_a_tile(self):
        """An accepted move is followed by exactly one new tile."""
        self.game.resume(Board(4, [[1, 1, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]], seed=3))

        traces, done = self.game.step(Direction.LEFT)

        self.assertEqual(traces, [((0, 1), (0, 0))])
        self.assertFalse(done)
        self.assertEqual(self.game.board.get((0, 0)), 2)
        self.assertEqual(np.count_nonzero(self.game.board.tiles), 2)
        self.assertEqual(self.game.score, 4)
        self.assertEqual(self.game.moves, 1)
        self.assertEqual(self.game.state, GameState.WAIT_INPUT)

    def test_rejected_move_changes_nothing(self):
        """A move that changes nothing seeds no tile and keeps waiting."""
        board = Board(4, [[1, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        self.game.resume(board)
        before = board.copy()

        with self.assertLogs('slidemerge.envs.game', level='WARNING'):
            traces, done = self.game.step(Direction.LEFT)

        self.assertEqual(traces, [])
        self.assertFalse(done)
        self.assertEqual(self.game.board, before)
        self.assertEqual(self.game.moves, 0)
        self.assertEqual(self.game.state, GameState.WAIT_INPUT)

    def test_move_ending_the_game(self):
        """The last accepted move leads to the terminal state."""
        # ##>: Merging the pair leaves a single cell, filled with a 1 that matches none of its neighbours.
        board = Board(2, [[3, 3], [5, 4]], seed=0)
        self.game = SlidingGame(config=GameConfiguration(size=2, spawn_scope=(1, 2)), board=board)

        traces, done = self.game.step(Direction.LEFT)

        self.assertEqual(traces, [((0, 1), (0, 0))])
        self.assertTrue(done)
        self.assertEqual(self.game.state, GameState.TERMINAL)
        self.assertEqual(self.game.score, 16)
        np.testing.assert_array_equal(self.game.board.tiles, [[4, 1], [5, 4]])

    def test_spawn_limited_to_empty_cells(self):
        """An accepted move seeds as many tiles as fit when fewer cells are empty than configured."""
        board = Board(2, [[3, 3], [5, 4]], seed=0)
        config = GameConfiguration(size=2, spawn_count=2, spawn_scope=(1, 2))
        self.game = SlidingGame(config=config, board=board)

        traces, done = self.game.step(Direction.LEFT)

        self.assertEqual(traces, [((0, 1), (0, 0))])
        self.assertTrue(done)
        self.assertEqual(self.game.state, GameState.TERMINAL)
        self.assertEqual(self.game.moves, 1)
        np.testing.assert_array_equal(self.game.board.tiles, [[4, 1], [5, 4]])

    def test_reset_limited_to_board_cells(self):
        """A new game never asks for more tiles than the board holds."""
        game = SlidingGame(config=GameConfiguration(size=2, spawn_count=6), seed=2)
        self.assertTrue(game.board.is_full)

    def test_terminal_is_absorbing(self):
        """A finished game ignores every move."""
        board = Board(2, [1, 2, 2, 1])
        self.game.resume(board)
        self.assertTrue(self.game.is_finished)

        for direction in Direction:
            self.assertEqual(self.game.step(direction), ([], True))
        self.assertEqual(self.game.board, Board(2, [1, 2, 2, 1]))

    def test_render(self):
        """Render prints the displayed numbers of the board."""
        self.game.resume(Board(2, [0, 1, 2, 11]))
        output = StringIO()
        with redirect_stdout(output):
            self.game.render()
        self.assertEqual(output.getvalue(), "0 \t2\n4 \t2048\n")

    def test_render_stored_values(self):
        """Render prints the stored exponents when asked to."""
        self.game.resume(Board(2, [0, 1, 2, 11]))
        output = StringIO()
        with redirect_stdout(output):
            self.game.render(displayed=False)
        self.assertEqual(output.getvalue(), "0 \t1\n2 \t11\n")

    def test_random_game_reaches_the_end(self):
        """A seeded game played with every direction in turn ends."""
        game = SlidingGame(config=GameConfiguration(size=2), seed=1)
        for _ in range(1000):
            if game.is_finished:
                break
            for direction in Direction:
                traces, _ = game.step(direction)
                if traces:
                    break
        self.assertTrue(game.is_finished)
        self.assertGreater(game.moves, 0)


if __name__ == '__main__':
    main()
