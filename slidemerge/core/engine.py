"""
Move engine for the sliding-tile game: shift and merge tiles, report movement traces and detect the end of a game.
"""

import logging
from typing import NamedTuple

from numpy import any as np_any

from .board import BLANK, Board, Coordinate, Direction

logger = logging.getLogger(__name__)


class Trace(NamedTuple):
    """Net displacement of one tile during a shift."""

    source: Coordinate
    target: Coordinate


class Engine:
    """
    Stateless operator applying moves to a board.

    A shift processes cells lane by lane, starting from the edge the tiles move towards, so that cells already
    settled are never revisited by a later tile of the same lane.
    """

    def is_game_over(self, board: Board) -> bool:
        """
        Check if no move can change the board.

        Parameters
        ----------
        board : Board
            The board to inspect.

        Returns
        -------
        bool
            True if every cell holds a tile and no two orthogonally adjacent cells are equal, False otherwise.
        """
        tiles = board.tiles
        if not tiles.all():
            return False

        # ##: Every vertical and horizontal adjacent pair.
        return not (np_any(tiles[:-1] == tiles[1:]) or np_any(tiles[:, :-1] == tiles[:, 1:]))

    def shift(self, board: Board, direction: Direction) -> list[Trace]:
        """
        Slide and merge every tile towards a direction, in place.

        Parameters
        ----------
        board : Board
            The board to update.
        direction : Direction
            Where the tiles move.

        Returns
        -------
        list[Trace]
            The movement of each displaced tile, in traversal order. An empty list means the board did not change.

        Notes
        -----
        - Each merge of two tiles of stored value ``v`` adds ``2 ** (v + 1)`` to the score.
        - Consecutive slides of the same tile across empty cells are reported as one trace.
        - A merge is always reported as its own trace ending on the merged cell.
        - A cell produced by one tile's merge never absorbs another tile during the same shift.
        """
        direction = Direction(direction)
        traces = []
        merged = set()
        for start in self._sweep(board.size, direction):
            traces.extend(self._slide(board, start, direction, merged))

        logger.debug('Shift %s moved %d tiles, score %d', direction.name, len(traces), board.score)
        return traces

    def legal_directions(self, board: Board) -> list[Direction]:
        """
        Determine the directions that would change the board.

        Parameters
        ----------
        board : Board
            The board to inspect. It is not modified.

        Returns
        -------
        list[Direction]
            Directions whose shift is not a no-op, in ``Direction`` order.
        """
        return [direction for direction in Direction if self.shift(board.copy(), direction)]

    @staticmethod
    def _sweep(size: int, direction: Direction) -> list[Coordinate]:
        """Order in which start cells are processed, destination edge first in each lane."""
        if direction == Direction.RIGHT:
            return [(row, column) for row in range(size) for column in reversed(range(size))]
        if direction == Direction.LEFT:
            return [(row, column) for row in range(size) for column in range(size)]
        if direction == Direction.DOWN:
            return [(row, column) for column in range(size) for row in reversed(range(size))]
        return [(row, column) for column in range(size) for row in range(size)]

    @staticmethod
    def _slide(board: Board, start: Coordinate, direction: Direction, merged: set[Coordinate]) -> list[Trace]:
        """
        Move the tile found at ``start`` as far as it goes.

        Parameters
        ----------
        board : Board
            The board to update.
        start : Coordinate
            Cell the walk begins on. Empty cells are walked over until a tile is met.
        direction : Direction
            Where the tile moves.
        merged : set[Coordinate]
            Cells produced by earlier merges of this shift, updated in place.

        Returns
        -------
        list[Trace]
            Traces produced by this walk.
        """
        traces = []
        current = start
        just_slid = False

        while True:
            target = board.neighbour(current, direction)
            if target is None:
                return traces

            value = board.get(current)
            target_value = board.get(target)

            if value != BLANK:
                if target_value == BLANK:
                    board.set(target, value)
                    board.set(current, BLANK)
                    if just_slid:
                        # ##: Extend the previous slide of this same tile.
                        origin = traces.pop().source
                        traces.append(Trace(origin, target))
                    else:
                        traces.append(Trace(current, target))
                    just_slid = True
                elif target_value == value and target not in merged:
                    board.set(target, value + 1)
                    board.set(current, BLANK)
                    board.add_score(1 << (value + 1))
                    merged.discard(current)
                    merged.add(target)
                    traces.append(Trace(current, target))
                    just_slid = False
                else:
                    return traces

            current = target
