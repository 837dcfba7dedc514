"""Sliding-tile puzzle engine in the style of 2048."""

from .core import Board, Direction, Engine, SnapshotError, Trace
from .envs import GameConfiguration, GameState, SlidingGame

__version__ = "0.1.0"

__all__ = ["Board", "Direction", "Engine", "SnapshotError", "Trace", "GameConfiguration", "GameState", "SlidingGame"]
