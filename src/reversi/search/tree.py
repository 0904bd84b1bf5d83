"""
Fixed-depth minimax search over a game tree of Reversi boards.
"""
import logging
import time
from typing import List, Optional

from ..config import DEFAULT_LEVEL
from ..errors import InvalidArgumentError
from ..game.player import Player
from .evaluator import Evaluator

logger = logging.getLogger(__name__)

class GameTreeNode:
    """A node in the game tree."""

    __slots__ = ['board', 'score', 'depth', 'children']

    def __init__(self, board, score: float = 0.0, depth: int = 0):
        """
        Initialize a new node.

        Args:
            board: The game state of this node
            score: The evaluation of `board` (ignored for the root)
            depth: Distance from the root in half-moves
        """
        self.board = board
        self.score = score
        self.depth = depth
        self.children: List[GameTreeNode] = []

    def add_child(self, child: 'GameTreeNode') -> None:
        self.children.append(child)

    def is_leaf(self) -> bool:
        return len(self.children) == 0

    def set_final_scores(self) -> None:
        """
        Back up the scores of the subtree, children before parents.

        A node adds the smallest child score if the human moves next on its
        board, and the largest one otherwise.
        """
        if self.is_leaf():
            return

        for child in self.children:
            child.set_final_scores()

        if self.board.next() == Player.HUMAN:
            self.score += self.get_min_score_of_children()
        else:
            self.score += self.get_max_child().score

    def get_min_score_of_children(self) -> float:
        return min(child.score for child in self.children)

    def get_max_child(self) -> Optional['GameTreeNode']:
        """
        Get the child with the highest score.

        Returns:
            The best child; if several share the highest score, the one
            inserted first. None for a leaf.
        """
        max_child = None
        max_score = -float('inf')

        for child in self.children:
            if child.score > max_score:
                max_child = child
                max_score = child.score

        return max_child

    def count_nodes(self) -> int:
        """Number of nodes in the subtree rooted at this node."""
        return 1 + sum(child.count_nodes() for child in self.children)


class MinimaxSearch:
    """Chooses the machine's move by looking `level` half-moves ahead."""

    def __init__(self, level: int = DEFAULT_LEVEL, evaluator: Optional[Evaluator] = None):
        """
        Initialize the search.

        Args:
            level: Depth of the game tree
            evaluator: Scores the boards of the tree (default: Evaluator())
        """
        if level < 1:
            raise InvalidArgumentError(f"Search depth must be at least 1, got {level}")
        self.level = level
        self.evaluator = evaluator or Evaluator()

    def build_tree(self, board) -> GameTreeNode:
        """
        Build the game tree of depth `level` below `board`.

        Returns:
            The root node; scores are not backed up yet
        """
        root = GameTreeNode(board, 0.0, 0)
        self._expand(root)
        return root

    def _expand(self, node: GameTreeNode) -> None:
        """Attach one child per possible move of the player to move, recursively."""
        if node.depth >= self.level or node.board.is_game_over():
            return

        board = node.board
        for slot in board.get_possible_moves(board.next()):
            child_board = board.make_move(slot.row, slot.col)
            child = GameTreeNode(child_board, self.evaluator.evaluate(child_board), node.depth + 1)
            node.add_child(child)
            self._expand(child)

    def search(self, board):
        """
        Find the machine's move on `board`.

        Returns:
            The board after the best move
        """
        start_time = time.time()

        root = self.build_tree(board)
        root.set_final_scores()
        best = root.get_max_child()

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"Searched {root.count_nodes()} nodes at level {self.level} in "
                f"{time.time() - start_time:.3f}s, best score {best.score:.2f}")

        return best.board
