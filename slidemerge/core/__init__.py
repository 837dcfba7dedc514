# -*- coding: utf-8 -*-
"""
Core of the sliding-tile game.

It provides the board with its random tile seeding and JSON snapshots, the move engine that slides and merges
tiles while recording their traces, and the snapshot exceptions.
"""

from .board import BLANK, Board, Coordinate, Direction
from .engine import Engine, Trace
from .errors import SnapshotError, SnapshotFormatError, SnapshotIOError

__all__ = [
    "BLANK",
    "Board",
    "Coordinate",
    "Direction",
    "Engine",
    "Trace",
    "SnapshotError",
    "SnapshotFormatError",
    "SnapshotIOError",
]
