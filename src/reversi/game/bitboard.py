"""
Bitboard helpers for Reversi.

The tiles of one player are stored in a single integer with one bit per
slot: slot (row, col) maps to bit (row - 1) * BOARD_SIZE + (col - 1), so bit
order is row-major order.
"""
from typing import Iterator, Tuple
import numpy as np

from ..config import BOARD_SIZE
from .direction import Direction

FULL = 0xFFFFFFFFFFFFFFFF

# Slots outside the first / last column
NOT_FIRST_COL = 0xFEFEFEFEFEFEFEFE
NOT_LAST_COL = 0x7F7F7F7F7F7F7F7F


def _column_mask(d_col: int) -> int:
    # A step to the right must not wrap into the first column and vice versa
    if d_col > 0:
        return NOT_FIRST_COL
    if d_col < 0:
        return NOT_LAST_COL
    return FULL


# (bit shift, wrap mask) per direction, in Direction order
SHIFTS = tuple(
    (d.d_row * BOARD_SIZE + d.d_col, _column_mask(d.d_col)) for d in Direction
)


def bit_index(row: int, col: int) -> int:
    """Get the bit of the 1-based slot (row, col)."""
    return (row - 1) * BOARD_SIZE + (col - 1)


def shift(bits: int, amount: int, mask: int) -> int:
    """Move every tile one step; `amount` and `mask` come from SHIFTS."""
    if amount > 0:
        return (bits << amount) & mask
    return (bits >> -amount) & mask


def popcount(bits: int) -> int:
    return bits.bit_count()


def indices(bits: int) -> Iterator[int]:
    """Yield the set bits in ascending (row-major) order."""
    while bits:
        low = bits & -bits
        yield low.bit_length() - 1
        bits ^= low


def legal_moves(own: int, other: int) -> int:
    """
    Get the empty slots on which the owner of `own` may place a tile.

    Args:
        own: Tiles of the player to move
        other: Tiles of the opponent

    Returns:
        Bitboard of all legal target slots
    """
    empty = ~(own | other) & FULL
    moves = 0
    for amount, mask in SHIFTS:
        targets = other & mask
        if amount > 0:
            frontier = (own << amount) & targets
            run = frontier
            while frontier:
                frontier = (frontier << amount) & targets
                run |= frontier
            moves |= (run << amount) & mask & empty
        else:
            amount = -amount
            frontier = (own >> amount) & targets
            run = frontier
            while frontier:
                frontier = (frontier >> amount) & targets
                run |= frontier
            moves |= (run >> amount) & mask & empty
    return moves


def flips(own: int, other: int, move: int) -> int:
    """
    Get the opponent tiles enclosed by placing a tile on `move`.

    Args:
        own: Tiles of the player placing the tile
        other: Tiles of the opponent
        move: Single-bit bitboard of the target slot

    Returns:
        Bitboard of the tiles to flip (0 if none)
    """
    flipped = 0
    for amount, mask in SHIFTS:
        run = 0
        slot = shift(move, amount, mask)
        while slot & other:
            run |= slot
            slot = shift(slot, amount, mask)
        if slot & own:
            flipped |= run
    return flipped


def neighbours(bits: int) -> Tuple[int, ...]:
    """
    Get `bits` moved one step in every direction.

    A slot is set in the i-th result when the slot one step back along
    SHIFTS[i] is set in `bits`.
    """
    return tuple(shift(bits, amount, mask) for amount, mask in SHIFTS)


def from_mask(mask: np.ndarray) -> int:
    """Pack a boolean BOARD_SIZE x BOARD_SIZE array into a bitboard."""
    packed = np.packbits(np.asarray(mask, dtype=bool).ravel(), bitorder='little')
    return int.from_bytes(packed.tobytes(), 'little')


def to_mask(bits: int) -> np.ndarray:
    """Unpack a bitboard into a boolean BOARD_SIZE x BOARD_SIZE array."""
    packed = np.frombuffer(bits.to_bytes(BOARD_SIZE * BOARD_SIZE // 8, 'little'), dtype=np.uint8)
    return np.unpackbits(packed, bitorder='little').astype(bool).reshape(BOARD_SIZE, BOARD_SIZE)
