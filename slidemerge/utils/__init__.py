# -*- coding: utf-8 -*-
"""
This module provides utilities for rendering game boards as text.
"""

from .display import display_grid, display_value, render_board

__all__ = ["display_grid", "display_value", "render_board"]
