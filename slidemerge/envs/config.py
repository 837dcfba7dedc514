# -*- coding: utf-8 -*-
"""
Game specific configuration.
"""
from dataclasses import dataclass


@dataclass
class GameConfiguration:
    """Rules of a round: board size and how new tiles are seeded."""

    size: int = 4
    spawn_count: int = 1
    spawn_scope: tuple[int, int] = (1, 3)

    def __post_init__(self):
        if self.size < 2:
            raise ValueError(f'size must be >= 2, got {self.size}')
        if self.spawn_count < 1:
            raise ValueError(f'spawn_count must be >= 1, got {self.spawn_count}')
        low, high = self.spawn_scope
        if low < 1 or high <= low:
            raise ValueError(f'spawn_scope must be a non-empty range of positive values, got {self.spawn_scope}')
