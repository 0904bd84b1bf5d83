"""
Reversi: a human plays against a minimax machine opponent.
"""
from .errors import ReversiError, InvalidArgumentError, IllegalStateError, IllegalMoveError
from .game import Board, Coordinate, Direction, Player
from .search import Evaluator, GameTreeNode, MinimaxSearch

__version__ = "0.1"

__all__ = [
    'Board', 'Coordinate', 'Direction', 'Player',
    'Evaluator', 'GameTreeNode', 'MinimaxSearch',
    'ReversiError', 'InvalidArgumentError', 'IllegalStateError', 'IllegalMoveError',
]
