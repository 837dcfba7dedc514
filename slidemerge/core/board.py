"""
Board state for the sliding-tile game: grid, score, random tile seeding and JSON snapshots.

Tiles are stored as exponents: ``0`` is an empty cell and a stored value ``v`` is displayed as ``2 ** v``.
"""

import json
import logging
from enum import IntEnum
from pathlib import Path
from typing import Any, Sequence

from numpy import array, int64, ndarray, zeros
from numpy.random import Generator, default_rng

from .errors import SnapshotFormatError, SnapshotIOError

logger = logging.getLogger(__name__)

# ##: Stored value of an empty cell.
BLANK = 0

Coordinate = tuple[int, int]


class Direction(IntEnum):
    """Move directions, numbered like the actions of the 2048 environments."""

    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3

    @property
    def offset(self) -> Coordinate:
        """Row and column step taken when moving one cell in this direction."""
        return _OFFSETS[self]


_OFFSETS = {
    Direction.LEFT: (0, -1),
    Direction.UP: (-1, 0),
    Direction.RIGHT: (0, 1),
    Direction.DOWN: (1, 0),
}


class Board:
    """
    Square grid of tiles with a running score.

    The size is fixed at construction. Cells are only written through ``set``, ``generate`` and the engine's
    ``shift``, and the score only ever grows.
    """

    def __init__(
        self,
        size: int = 4,
        tiles: Sequence[int] | Sequence[Sequence[int]] | ndarray | None = None,
        score: int = 0,
        seed: int | None = None,
        rng: Generator | None = None,
    ):
        """
        Initialize a board, blank or from existing tiles.

        Parameters
        ----------
        size : int, optional
            Number of rows and columns (default is 4, minimum 2).
        tiles : sequence, optional
            Either a flat row-major sequence of ``size * size`` tiles or a nested ``size x size`` one.
            A blank board is created when omitted.
        score : int, optional
            Initial score (default is 0).
        seed : int, optional
            Seed of the random generator used by ``generate``. Ignored when ``rng`` is given.
        rng : Generator, optional
            Random generator used by ``generate``.

        Raises
        ------
        ValueError
            If the size is below 2, the tiles do not fill the grid, a tile is negative or the score is negative.
        """
        if size < 2:
            raise ValueError(f'size must be >= 2, got {size}')
        if score < 0:
            raise ValueError(f'score must be >= 0, got {score}')

        self._size = int(size)
        self._score = int(score)
        self._rng = rng if rng is not None else default_rng(seed)

        if tiles is None:
            self._tiles = zeros((self._size, self._size), dtype=int64)
        else:
            self._tiles = self._shape_tiles(tiles)

    def _shape_tiles(self, tiles: Sequence[int] | Sequence[Sequence[int]] | ndarray) -> ndarray:
        """Convert caller supplied tiles into a ``size x size`` grid."""
        try:
            grid = array(tiles, dtype=int64)
        except OverflowError as error:
            raise ValueError(f'tile values must fit in 64 bits: {error}') from error
        if grid.ndim == 1 and grid.shape[0] == self._size * self._size:
            grid = grid.reshape((self._size, self._size))
        elif grid.shape != (self._size, self._size):
            raise ValueError(
                f'expected {self._size * self._size} tiles for a board of size {self._size}, got {grid.size}'
            )

        if (grid < 0).any():
            raise ValueError('tile values must be >= 0')
        return grid.copy()

    @property
    def size(self) -> int:
        """Get the number of rows (and columns) of the board."""
        return self._size

    @property
    def score(self) -> int:
        """Get the current score."""
        return self._score

    @property
    def tiles(self) -> ndarray:
        """Get a read-only view of the grid, indexed as ``tiles[row, column]``."""
        view = self._tiles.view()
        view.flags.writeable = False
        return view

    @property
    def is_full(self) -> bool:
        """Check whether every cell holds a tile."""
        return bool(self._tiles.all())

    @property
    def max_tile(self) -> int:
        """Get the largest stored tile value."""
        return int(self._tiles.max())

    def in_bounds(self, pos: Coordinate) -> bool:
        """Check whether a coordinate lies on the board."""
        row, column = pos
        return 0 <= row < self._size and 0 <= column < self._size

    def get(self, pos: Coordinate) -> int | None:
        """
        Read the tile at a coordinate.

        Parameters
        ----------
        pos : Coordinate
            The (row, column) to read.

        Returns
        -------
        int or None
            The stored tile value, or None when the coordinate is off the board.
        """
        if not self.in_bounds(pos):
            return None
        return int(self._tiles[pos[0], pos[1]])

    def set(self, pos: Coordinate, value: int) -> None:
        """
        Write a tile at a coordinate.

        Parameters
        ----------
        pos : Coordinate
            The (row, column) to write.
        value : int
            The stored tile value, ``0`` to clear the cell.

        Raises
        ------
        ValueError
            If the coordinate is off the board or the value is negative.
        """
        if value < 0:
            raise ValueError(f'tile value must be >= 0, got {value}')
        if not self.in_bounds(pos):
            raise ValueError(f'coordinate {pos} is outside a board of size {self._size}')
        self._tiles[pos[0], pos[1]] = value

    def add_score(self, points: int) -> None:
        """Add merge points to the score."""
        if points < 0:
            raise ValueError(f'score can only increase, got {points} points')
        self._score += int(points)

    def neighbour(self, pos: Coordinate, direction: Direction) -> Coordinate | None:
        """
        Get the cell next to ``pos`` in a direction.

        Parameters
        ----------
        pos : Coordinate
            The starting (row, column).
        direction : Direction
            Where to look.

        Returns
        -------
        Coordinate or None
            The neighbouring coordinate, or None when it would fall off the board.
        """
        d_row, d_column = direction.offset
        cell = (pos[0] + d_row, pos[1] + d_column)
        if not self.in_bounds(cell):
            return None
        return cell

    def empty_cells(self) -> list[Coordinate]:
        """List the coordinates of empty cells in row-major order."""
        return [
            (row, column)
            for row in range(self._size)
            for column in range(self._size)
            if self._tiles[row, column] == BLANK
        ]

    def generate(
        self, times: int = 1, scope: tuple[int, int] = (1, 3), rng: Generator | None = None
    ) -> list[Coordinate]:
        """
        Place new tiles on random empty cells.

        Parameters
        ----------
        times : int, optional
            Number of tiles to place (default is 1).
        scope : tuple[int, int], optional
            Half-open range ``[low, high)`` the new tile values are drawn from (default is (1, 3), i.e. 2 or 4).
        rng : Generator, optional
            Random generator to draw from instead of the board's own.

        Returns
        -------
        list[Coordinate]
            The coordinates that received a tile, in placement order.

        Raises
        ------
        ValueError
            If ``times`` is negative, the scope is empty or not positive, or fewer than ``times`` cells are empty.

        Notes
        -----
        Each placement draws a uniform coordinate and redraws it until an empty cell is hit, then draws the
        value uniformly from the scope.
        """
        low, high = scope
        if times < 0:
            raise ValueError(f'times must be >= 0, got {times}')
        if low < 1 or high <= low:
            raise ValueError(f'scope must be a non-empty range of positive values, got {scope}')

        available = self._size * self._size - int((self._tiles != BLANK).sum())
        if available < times:
            raise ValueError(f'cannot place {times} tiles, only {available} empty cells left')

        generator = rng if rng is not None else self._rng
        placed = []
        for _ in range(times):
            while True:
                row = int(generator.integers(0, self._size))
                column = int(generator.integers(0, self._size))
                if self._tiles[row, column] == BLANK:
                    self._tiles[row, column] = int(generator.integers(low, high))
                    placed.append((row, column))
                    break
        return placed

    def copy(self) -> 'Board':
        """Get an independent copy of the board sharing the random generator."""
        return Board(size=self._size, tiles=self._tiles, score=self._score, rng=self._rng)

    def to_dict(self) -> dict[str, Any]:
        """
        Get the snapshot document of the board.

        Returns
        -------
        dict
            ``{"size": int, "tiles": [[int, ...], ...], "score": int}`` with row-major tiles.
        """
        return {'size': self._size, 'tiles': self._tiles.tolist(), 'score': self._score}

    @classmethod
    def from_dict(cls, payload: Any, rng: Generator | None = None) -> 'Board':
        """
        Build a board from a snapshot document.

        Parameters
        ----------
        payload : dict
            Document shaped like the output of ``to_dict``.
        rng : Generator, optional
            Random generator of the restored board.

        Returns
        -------
        Board
            The restored board.

        Raises
        ------
        SnapshotFormatError
            If the document does not describe a valid board.
        """
        if not isinstance(payload, dict):
            raise SnapshotFormatError(f'snapshot must be a JSON object, got {type(payload).__name__}')

        missing = {'size', 'tiles', 'score'} - payload.keys()
        if missing:
            raise SnapshotFormatError(f'snapshot is missing fields: {", ".join(sorted(missing))}')

        size, tiles, score = payload['size'], payload['tiles'], payload['score']
        if not _is_int(size) or not _is_int(score):
            raise SnapshotFormatError('snapshot size and score must be integers')
        if not isinstance(tiles, list) or len(tiles) != size:
            raise SnapshotFormatError(f'snapshot tiles must hold {size} rows')
        for row in tiles:
            if not isinstance(row, list) or len(row) != size or not all(_is_int(tile) for tile in row):
                raise SnapshotFormatError(f'each snapshot row must hold {size} integers')

        try:
            return cls(size=size, tiles=tiles, score=score, rng=rng)
        except (ValueError, OverflowError) as error:
            raise SnapshotFormatError(f'invalid snapshot: {error}') from error

    def to_json(self) -> str:
        """Serialize the board as a JSON snapshot."""
        try:
            return json.dumps(self.to_dict())
        except (TypeError, ValueError) as error:
            raise SnapshotFormatError(f'cannot encode board: {error}') from error

    @classmethod
    def from_json(cls, document: str, rng: Generator | None = None) -> 'Board':
        """Deserialize a board from a JSON snapshot."""
        try:
            payload = json.loads(document)
        except json.JSONDecodeError as error:
            raise SnapshotFormatError(f'snapshot is not valid JSON: {error}') from error
        return cls.from_dict(payload, rng=rng)

    def save(self, path: str | Path) -> Path:
        """
        Save the board as a JSON snapshot.

        Parameters
        ----------
        path : str or Path
            Destination file, overwritten if present.

        Returns
        -------
        Path
            The written file.

        Raises
        ------
        SnapshotIOError
            If the file cannot be written. The board itself is left untouched.
        SnapshotFormatError
            If the board cannot be encoded.
        """
        path = Path(path)
        document = self.to_json()
        try:
            path.write_text(document, encoding='utf-8')
        except OSError as error:
            raise SnapshotIOError(f'cannot write snapshot to {path}: {error}') from error

        logger.debug('Saved to file: %s', path)
        return path

    @classmethod
    def load(cls, path: str | Path, rng: Generator | None = None) -> 'Board':
        """
        Load a board from a JSON snapshot file.

        Raises
        ------
        SnapshotIOError
            If the file cannot be read.
        SnapshotFormatError
            If the file does not hold a valid snapshot.
        """
        path = Path(path)
        try:
            document = path.read_text(encoding='utf-8')
        except OSError as error:
            raise SnapshotIOError(f'cannot read snapshot from {path}: {error}') from error

        board = cls.from_json(document, rng=rng)
        logger.debug('Loaded from file: %s', path)
        return board

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._size == other._size and self._score == other._score and bool((self._tiles == other._tiles).all())

    def __repr__(self) -> str:
        return f'Board(size={self._size}, tiles={self._tiles.ravel().tolist()}, score={self._score})'

    def __str__(self) -> str:
        lines = ['Situation:']
        for row in self._tiles.tolist():
            lines.append(''.join(f'{tile:5}' for tile in row))
        return '\n'.join(lines) + '\n'


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
