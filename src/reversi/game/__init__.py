"""
Reversi game module.
This package contains the core game logic for Reversi.
"""

from .player import Player
from .direction import Direction
from .coordinate import Coordinate
from .board import Board

__all__ = ['Player', 'Direction', 'Coordinate', 'Board']
