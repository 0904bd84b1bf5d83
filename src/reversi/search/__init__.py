"""
Minimax search for the machine player.
"""
from .evaluator import Evaluator, SCORE_MATRIX
from .tree import GameTreeNode, MinimaxSearch

__all__ = ['Evaluator', 'SCORE_MATRIX', 'GameTreeNode', 'MinimaxSearch']
