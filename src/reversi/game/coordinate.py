"""
Slot coordinates on the Reversi board.
"""
from typing import NamedTuple

from ..config import BOARD_SIZE
from .direction import Direction

class Coordinate(NamedTuple):
    """Immutable (row, col) position of a slot, 1-based."""
    row: int
    col: int

    def next(self, direction: Direction) -> 'Coordinate':
        """
        Get the neighbouring coordinate in `direction`.

        The result may lie outside the board; check it with is_on_board().
        """
        return Coordinate(self.row + direction.d_row, self.col + direction.d_col)

    def is_on_board(self) -> bool:
        return is_in_board(self.row, self.col)


def is_in_board(row: int, col: int) -> bool:
    """Check whether the slot (row, col) exists on the board."""
    return 0 < row <= BOARD_SIZE and 0 < col <= BOARD_SIZE
