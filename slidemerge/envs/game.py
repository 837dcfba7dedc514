"""Round driver of the sliding-tile game."""

import logging
from enum import Enum, auto

from slidemerge.core.board import Board, Direction
from slidemerge.core.engine import Engine, Trace
from slidemerge.utils.display import render_board

from .config import GameConfiguration

logger = logging.getLogger(__name__)


class GameState(Enum):
    """Where a round stands."""

    WAIT_INPUT = auto()  # Waiting for the next direction
    SHIFTED = auto()  # A move was accepted, a new tile is due
    TERMINAL = auto()  # No move can change the board anymore


class SlidingGame:
    """
    Sliding-tile game played one direction at a time.

    This class owns the board and the round state machine: an accepted move seeds new tiles and either waits for
    the next input or ends the game, while a move that changes nothing is rejected and the board is left as is.
    """

    # ##: Keyboard mapping of directions.
    ACTIONS = {'w': Direction.UP, 'a': Direction.LEFT, 's': Direction.DOWN, 'd': Direction.RIGHT}

    def __init__(self, config: GameConfiguration | None = None, seed: int | None = None, board: Board | None = None):
        """
        Initialize the game.

        Parameters
        ----------
        config : GameConfiguration, optional
            Rules of the round (default is a 4x4 board seeding one tile of 2 or 4 per move).
        seed : int, optional
            Seed of the random tile generator.
        board : Board, optional
            Board to resume instead of starting a fresh one.
        """
        self.config = config if config is not None else GameConfiguration()
        self._engine = Engine()
        self._board: Board | None = None
        self._state = GameState.WAIT_INPUT
        self._moves = 0

        if board is not None:
            self.resume(board)
        else:
            self.reset(seed=seed)

    @property
    def board(self) -> Board:
        """Get the board being played."""
        return self._board

    @property
    def state(self) -> GameState:
        """Get the current state of the round."""
        return self._state

    @property
    def score(self) -> int:
        """Get the score of the board."""
        return self._board.score

    @property
    def moves(self) -> int:
        """Get the number of accepted moves."""
        return self._moves

    @property
    def is_finished(self) -> bool:
        """
        Check if the game is finished.

        Returns
        -------
        bool
            True if no move can change the board anymore, False otherwise.
        """
        return self._state is GameState.TERMINAL

    def reset(self, seed: int | None = None) -> Board:
        """
        Start a new game on a blank board seeded with the configured number of tiles.

        Parameters
        ----------
        seed : int, optional
            Seed of the random tile generator.

        Returns
        -------
        Board
            The new board.
        """
        self._board = Board(size=self.config.size, seed=seed)
        self._spawn()
        self._moves = 0
        self._update_state()
        return self._board

    def resume(self, board: Board) -> Board:
        """
        Continue a game from an existing board, without seeding new tiles.

        Parameters
        ----------
        board : Board
            The board to play on, for instance one loaded from a snapshot.

        Returns
        -------
        Board
            The adopted board.
        """
        self._board = board
        self._moves = 0
        self._update_state()
        return self._board

    def step(self, direction: Direction) -> tuple[list[Trace], bool]:
        """
        Play one direction.

        Parameters
        ----------
        direction : Direction
            Where the tiles move.

        Returns
        -------
        tuple[list[Trace], bool]
            A tuple containing:
            - The traces of the moved tiles, empty when the move was rejected
            - Whether the game has finished after this move

        Notes
        -----
        - A finished game ignores every move.
        - A move that changes nothing does not seed a tile; the caller should ask for another direction.
        - Fewer tiles than configured are seeded when the board lacks room for all of them.
        """
        if self._state is GameState.TERMINAL:
            return [], True

        traces = self._engine.shift(self._board, direction)
        if not traces:
            logger.warning('Invalid moved!')
            return traces, False

        self._state = GameState.SHIFTED
        self._moves += 1
        self._spawn()
        self._update_state()
        return traces, self.is_finished

    def render(self, displayed: bool = True) -> None:
        """
        Render the game board. This method prints the current state of the game board to the console.

        Parameters
        ----------
        displayed : bool, optional
            Whether to print the displayed numbers instead of stored exponents (default is True).
        """
        print(render_board(self._board, displayed=displayed))

    def _spawn(self) -> None:
        # ##: Never ask for more tiles than there are empty cells.
        count = min(self.config.spawn_count, len(self._board.empty_cells()))
        self._board.generate(count, self.config.spawn_scope)

    def _update_state(self) -> None:
        if self._engine.is_game_over(self._board):
            self._state = GameState.TERMINAL
            logger.info('Game over after %d moves, score %d', self._moves, self._board.score)
        else:
            self._state = GameState.WAIT_INPUT
