"""Text rendering of boards, with stored exponents or the displayed tile numbers."""

from numpy import array, ndarray

from slidemerge.core.board import BLANK, Board


def display_value(tile: int) -> int:
    """
    Convert a stored tile into the number shown to the player.

    Parameters
    ----------
    tile : int
        Stored exponent, ``0`` for an empty cell.

    Returns
    -------
    int
        ``0`` for an empty cell, ``2 ** tile`` otherwise.
    """
    if tile == BLANK:
        return 0
    return 1 << tile


def display_grid(board: Board) -> ndarray:
    """Get the grid of displayed numbers of a board, as Python integers so that large tiles never overflow."""
    return array([[display_value(tile) for tile in row] for row in board.tiles.tolist()], dtype=object)


def render_board(board: Board, displayed: bool = True) -> str:
    """
    Render a board as tab separated rows.

    Parameters
    ----------
    board : Board
        The board to render.
    displayed : bool, optional
        Whether to show the displayed numbers instead of stored exponents (default is True).

    Returns
    -------
    str
        One line per row.
    """
    grid = display_grid(board) if displayed else board.tiles
    return '\n'.join(' \t'.join(map(str, row)) for row in grid.tolist())
