"""
Board evaluation for the machine player.

The score of a board combines three terms, all from the machine's point of
view (positive favours the machine):

    T  positional weight of the occupied slots (SCORE_MATRIX)
    M  mobility, i.e. number of possible moves of both players
    P  potential mobility, i.e. free slots next to the opponent's tiles

M and P are scaled by the inverse number of tiles on the board, so they
matter most in the opening. A board without tiles scores 0 in M and P.
"""
from typing import Optional, Tuple
import numpy as np

from ..config import BOARD_SIZE, EvalConfig
from ..game import bitboard
from ..game.player import Player

# Slot weights; corners dominate every other slot
SCORE_MATRIX = np.array([
    [9999,   5, 500, 200, 200, 500,   5, 9999],
    [   5,   1,  50, 150, 150,  50,   1,    5],
    [ 500,  50, 250, 100, 100, 250,  50,  500],
    [ 200, 150, 100,  50,  50, 100, 150,  200],
    [ 200, 150, 100,  50,  50, 100, 150,  200],
    [ 500,  50, 250, 100, 100, 250,  50,  500],
    [   5,   1,  50, 150, 150,  50,   1,    5],
    [9999,   5, 500, 200, 200, 500,   5, 9999],
], dtype=np.int64)
SCORE_MATRIX.setflags(write=False)

# (weight, bitboard of the slots carrying it)
WEIGHT_MASKS = tuple(
    (int(weight), bitboard.from_mask(SCORE_MATRIX == weight)) for weight in np.unique(SCORE_MATRIX)
)


def get_positional_weight(bits: int) -> int:
    """Sum the SCORE_MATRIX weights of the slots set in `bits`."""
    return sum(weight * bitboard.popcount(bits & mask) for weight, mask in WEIGHT_MASKS)


def get_potential(board, player: Player) -> int:
    """
    Count the free slots around the tiles of `player`'s opponent.

    A free slot is counted once for every opponent tile it touches.

    Args:
        board: The board to measure
        player: The player whose potential mobility is measured

    Returns:
        The number of (opponent tile, free neighbour) pairs
    """
    enemy = player.opponent
    if enemy is None:
        return 0

    free = bitboard.neighbours(board.get_tile_bits(Player.NONE))
    return count_free_neighbours(board.get_tile_bits(enemy), free)


def count_free_neighbours(tiles: int, free: Tuple[int, ...]) -> int:
    """Count (tile, free neighbour) pairs; `free` is bitboard.neighbours() of the empty slots."""
    return sum(bitboard.popcount(tiles & shifted) for shifted in free)


class Evaluator:
    """Heuristic scoring of a board in favour of the machine."""

    def __init__(self, config: Optional[EvalConfig] = None):
        """
        Initialize the evaluator.

        Args:
            config: Term weights (default: EvalConfig())
        """
        self.config = config or EvalConfig()

    def evaluate(self, board) -> float:
        """
        Score `board` from the machine's point of view.

        Returns:
            T + M + P; only the ordering of scores is meaningful
        """
        return (self.positional_score(board)
                + self.mobility_score(board)
                + self.potential_score(board))

    def positional_score(self, board) -> float:
        """Score T: weighted slots of the machine minus the weighted slots of the human."""
        machine = get_positional_weight(board.get_tile_bits(Player.COMPUTER))
        human = get_positional_weight(board.get_tile_bits(Player.HUMAN))
        return machine - self.config.human_position_factor * human

    def mobility_score(self, board) -> float:
        """Score M, based on the number of possible moves of both players."""
        stones_on_board = board.get_number_of_human_tiles() + board.get_number_of_machine_tiles()
        if stones_on_board == 0:
            return 0.0

        mobility_machine = board.count_possible_moves(Player.COMPUTER)
        mobility_human = board.count_possible_moves(Player.HUMAN)
        return (BOARD_SIZE * BOARD_SIZE / stones_on_board) * (
            self.config.machine_mobility_weight * mobility_machine
            - self.config.human_mobility_weight * mobility_human)

    def potential_score(self, board) -> float:
        """Score P, based on the free slots around the tiles of each player's opponent."""
        stones_on_board = board.get_number_of_human_tiles() + board.get_number_of_machine_tiles()
        if stones_on_board == 0:
            return 0.0

        free = bitboard.neighbours(board.get_tile_bits(Player.NONE))
        potential_machine = count_free_neighbours(board.get_tile_bits(Player.HUMAN), free)
        potential_human = count_free_neighbours(board.get_tile_bits(Player.COMPUTER), free)
        return (BOARD_SIZE * BOARD_SIZE / (2 * stones_on_board)) * (
            self.config.machine_potential_weight * potential_machine
            - self.config.human_potential_weight * potential_human)

    def __call__(self, board) -> float:
        return self.evaluate(board)
