"""
Exceptions raised by the Reversi engine.
"""

class ReversiError(Exception):
    """Base exception for the game."""

class InvalidArgumentError(ReversiError, ValueError):
    """Argument outside its permitted range (off-board slot, bad level)."""

class IllegalStateError(ReversiError):
    """Operation not permitted in the current game state."""

class IllegalMoveError(IllegalStateError):
    """Move attempted after the game ended or out of turn."""
