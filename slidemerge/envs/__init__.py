# -*- coding: utf-8 -*-
"""
Playable sliding-tile game.

This module provides the `SlidingGame` class, which owns a board and drives the rounds of a game.
"""

from .config import GameConfiguration
from .game import GameState, SlidingGame

__all__ = ["GameConfiguration", "GameState", "SlidingGame"]
