"""
Players of a Reversi game.
"""
import enum
from typing import Optional

class Player(enum.IntEnum):
    """
    Occupant of a slot and owner of a turn.

    The integer values are the ones stored in the board grid. In a game
    against the machine the first player is the human, so HUMAN, COMPUTER
    and NOBODY are aliases of FIRST, SECOND and NONE.
    """
    NONE = 0
    FIRST = 1
    SECOND = 2

    NOBODY = 0
    HUMAN = 1
    COMPUTER = 2

    @property
    def opponent(self) -> Optional['Player']:
        """The opposing player, or None for NONE."""
        return _OPPONENTS[self]

    @property
    def symbol(self) -> str:
        """Character used for this player in the textual board dump."""
        return _SYMBOLS[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> 'Player':
        """Look up the player shown by `symbol` ('.', 'X' or 'O')."""
        for player, char in _SYMBOLS.items():
            if char == symbol:
                return player
        raise ValueError(f"Invalid slot symbol: {symbol!r}")


_OPPONENTS = {
    Player.NONE: None,
    Player.FIRST: Player.SECOND,
    Player.SECOND: Player.FIRST,
}

_SYMBOLS = {
    Player.NONE: '.',
    Player.FIRST: 'X',
    Player.SECOND: 'O',
}
