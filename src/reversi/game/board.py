"""
Board module for Reversi.
Holds the game state (tiles, turn, machine level), validates and executes
moves and detects the end of the game.

Uses bitboard representation for performance: the tiles of each player are
one integer, and the legal moves of a board are computed at most once per
player. A board is treated as immutable: every executed move returns a new
Board, and the numpy grid of a board is built on demand and flagged read-only.
"""
import numbers
from typing import Dict, List, Optional, Sequence, Tuple
import numpy as np

from ..config import BOARD_SIZE, MIN_LEVEL, MAX_LEVEL, DEFAULT_LEVEL
from ..errors import InvalidArgumentError, IllegalMoveError, IllegalStateError
from . import bitboard
from .coordinate import Coordinate, is_in_board
from .player import Player

class Board:
    """
    A Reversi game board on which a human plays against the machine.

    Rows and columns are numbered from 1 to SIZE.
    """

    SIZE = BOARD_SIZE
    MIN_LEVEL = MIN_LEVEL
    MAX_LEVEL = MAX_LEVEL
    DEFAULT_LEVEL = DEFAULT_LEVEL

    def __init__(self, first_player: Player = Player.HUMAN, level: int = DEFAULT_LEVEL):
        """
        Create a new board in the starting position.

        Args:
            first_player: The player who opens the game
            level: Search depth used for machine moves
        """
        if first_player not in (Player.FIRST, Player.SECOND):
            raise InvalidArgumentError(f"Invalid first player: {first_player!r}")

        self._first_player = first_player
        self._next_player = first_player
        self._level = DEFAULT_LEVEL
        self._game_over = False
        self._set_grid(self._start_position(first_player))
        self.set_level(level)

    @staticmethod
    def _start_position(first_player: Player) -> np.ndarray:
        """Build the grid with the four starting tiles in the centre."""
        grid = np.full((BOARD_SIZE, BOARD_SIZE), int(Player.NONE), dtype=np.int8)

        middle = BOARD_SIZE // 2 - 1
        enemy = first_player.opponent
        grid[middle, middle] = enemy
        grid[middle, middle + 1] = first_player
        grid[middle + 1, middle + 1] = enemy
        grid[middle + 1, middle] = first_player
        return grid

    @classmethod
    def from_rows(cls, rows: Sequence[str], first_player: Player = Player.HUMAN,
                  next_player: Optional[Player] = None, level: int = DEFAULT_LEVEL) -> 'Board':
        """
        Build a board from its textual dump.

        Args:
            rows: SIZE strings of SIZE slot symbols ('.', 'X', 'O'); whitespace is ignored
            first_player: The player who opened the game
            next_player: The player to move (default: first_player)
            level: Search depth used for machine moves

        Returns:
            A board holding the given position. If `next_player` cannot move
            but the opponent can, the opponent gets the turn; if nobody can
            move the game is over.
        """
        if next_player is None:
            next_player = first_player
        if next_player not in (Player.FIRST, Player.SECOND):
            raise InvalidArgumentError(f"Invalid next player: {next_player!r}")
        if len(rows) != BOARD_SIZE:
            raise InvalidArgumentError(f"Board must have {BOARD_SIZE} rows, got {len(rows)}")

        grid = np.empty((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
        for i, row in enumerate(rows):
            symbols = "".join(row.split())
            if len(symbols) != BOARD_SIZE:
                raise InvalidArgumentError(f"Row {i + 1} must have {BOARD_SIZE} slots: {row!r}")
            for j, symbol in enumerate(symbols):
                try:
                    grid[i, j] = Player.from_symbol(symbol)
                except ValueError as e:
                    raise InvalidArgumentError(str(e)) from e

        board = cls(first_player, level)
        board._set_grid(grid)
        board._next_player = next_player
        if not board.has_any_valid_move(next_player):
            board._next_player = next_player.opponent
        board._check_game_over()
        return board

    def _set_grid(self, grid: np.ndarray) -> None:
        self._set_tiles(bitboard.from_mask(grid == int(Player.FIRST)),
                        bitboard.from_mask(grid == int(Player.SECOND)))

    def _set_tiles(self, first: int, second: int) -> None:
        # Indexed by Player: empty slots, first player's tiles, second player's tiles
        self._tiles = (~(first | second) & bitboard.FULL, first, second)
        self._moves: Dict[Player, int] = {}
        self._grid: Optional[np.ndarray] = None

    def _derive(self, first: int, second: int, next_player: Player) -> 'Board':
        """Create a board with this board's settings and the given tiles."""
        board = Board.__new__(Board)
        board._first_player = self._first_player
        board._next_player = next_player
        board._level = self._level
        board._game_over = False
        board._set_tiles(first, second)
        return board

    @staticmethod
    def is_in_board(row: int, col: int) -> bool:
        """Check whether the slot (row, col) exists on the board."""
        return is_in_board(row, col)

    def _check_in_board(self, row: int, col: int) -> None:
        if not is_in_board(row, col):
            raise InvalidArgumentError(
                f"Slot ({row}, {col}) is not on the board; rows and columns run from 1 to {BOARD_SIZE}")

    @staticmethod
    def _coordinates(bits: int) -> List[Coordinate]:
        return [Coordinate(i // BOARD_SIZE + 1, i % BOARD_SIZE + 1) for i in bitboard.indices(bits)]

    def get_first_player(self) -> Player:
        """Get the player who opened the game."""
        return self._first_player

    def next(self) -> Player:
        """Get the player owning the next turn (NONE once the game is over)."""
        return self._next_player

    def get_level(self) -> int:
        return self._level

    def set_level(self, level: int) -> None:
        """
        Set the skill level of the machine.

        Args:
            level: Search depth, an integer from MIN_LEVEL to MAX_LEVEL
        """
        if isinstance(level, bool) or not isinstance(level, numbers.Integral):
            raise InvalidArgumentError(
                f"The level must be an integer from {MIN_LEVEL} to {MAX_LEVEL}, got {level!r}")
        if level < MIN_LEVEL or level > MAX_LEVEL:
            raise InvalidArgumentError(
                f"The level must be an integer from {MIN_LEVEL} to {MAX_LEVEL}, got {level}")
        self._level = int(level)

    @property
    def grid(self) -> np.ndarray:
        """Read-only view of the slot grid (values are Player integers)."""
        if self._grid is None:
            grid = (bitboard.to_mask(self._tiles[Player.FIRST]) * int(Player.FIRST)
                    + bitboard.to_mask(self._tiles[Player.SECOND]) * int(Player.SECOND))
            grid = grid.astype(np.int8)
            grid.setflags(write=False)
            self._grid = grid
        return self._grid

    def get_board_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            Writable 2D numpy copy of the grid
        """
        return self.grid.copy()

    def get_tile_bits(self, player: Player) -> int:
        """
        Get the bitboard of `player`'s tiles (of the empty slots for NONE).

        Slot (row, col) is bit (row - 1) * SIZE + (col - 1).
        """
        return self._tiles[player]

    def get_slot(self, row: int, col: int) -> Player:
        """Get the content of the slot at (row, col)."""
        self._check_in_board(row, col)
        bit = 1 << bitboard.bit_index(row, col)
        if self._tiles[Player.FIRST] & bit:
            return Player.FIRST
        if self._tiles[Player.SECOND] & bit:
            return Player.SECOND
        return Player.NONE

    def get_tiles_to_flip(self, row: int, col: int, player: Player) -> List[Coordinate]:
        """
        Find the opponent tiles that a tile of `player` placed on (row, col) would enclose.

        A line of opponent tiles is enclosed when it starts next to (row, col)
        and is closed by a tile of `player`.

        Args:
            row: Row of the slot to search from
            col: Column of the slot to search from
            player: The player placing the tile

        Returns:
            Coordinates of all tiles to flip in row-major order (empty if none)
        """
        self._check_in_board(row, col)
        if player is None or player == Player.NONE:
            return []

        move = 1 << bitboard.bit_index(row, col)
        return self._coordinates(
            bitboard.flips(self._tiles[player], self._tiles[player.opponent], move))

    def _move_bits(self, player: Player) -> int:
        moves = self._moves.get(player)
        if moves is None:
            moves = bitboard.legal_moves(self._tiles[player], self._tiles[player.opponent])
            self._moves[player] = moves
        return moves

    def get_possible_moves(self, player: Player) -> List[Coordinate]:
        """
        Get all slots on which `player` may place a tile.

        Returns:
            Legal slots in row-major order
        """
        if player is None or player == Player.NONE:
            return []
        return self._coordinates(self._move_bits(player))

    def count_possible_moves(self, player: Player) -> int:
        """Get the number of slots on which `player` may place a tile."""
        if player is None or player == Player.NONE:
            return 0
        return bitboard.popcount(self._move_bits(player))

    def has_any_valid_move(self, player: Player) -> bool:
        """Check if the player has any valid moves."""
        if player is None or player == Player.NONE:
            return False
        return self._move_bits(player) != 0

    def move(self, row: int, col: int) -> Optional['Board']:
        """
        Execute a human move.

        Args:
            row: Row of the slot to place the human's tile on
            col: Column of the slot to place the human's tile on

        Returns:
            A new board with the move executed, or None if the slot is
            occupied or no machine tile would be flipped
        """
        self._check_in_board(row, col)
        if self._game_over or self._next_player == Player.COMPUTER:
            raise IllegalMoveError("It is not the human's turn")
        return self.make_move(row, col)

    def make_move(self, row: int, col: int) -> Optional['Board']:
        """
        Place a tile of the player to move on (row, col) and flip the enclosed tiles.

        The turn passes to the opponent only if the opponent can move. The
        game is over once neither player can move.

        Returns:
            A new board with the move executed, or None if the move is not legal
        """
        self._check_in_board(row, col)
        mover = self._next_player
        if mover == Player.NONE:
            return None

        move = 1 << bitboard.bit_index(row, col)
        if not move & self._move_bits(mover):
            return None

        enemy = mover.opponent
        own, other = self._tiles[mover], self._tiles[enemy]
        flipped = bitboard.flips(own, other, move)
        own |= move | flipped
        other &= ~flipped

        if mover == Player.FIRST:
            board = self._derive(own, other, mover)
        else:
            board = self._derive(other, own, mover)
        if board.has_any_valid_move(enemy):
            board._next_player = enemy
        board._check_game_over()
        return board

    def _check_game_over(self) -> None:
        """End the game if neither player can place a tile."""
        if (not self.has_any_valid_move(self._next_player)
                and not self.has_any_valid_move(self._next_player.opponent)):
            self._game_over = True
            self._next_player = Player.NONE

    def machine_move(self, evaluator=None) -> 'Board':
        """
        Execute the machine's move chosen by a minimax search of depth `level`.

        Args:
            evaluator: Board evaluation to search with (default: Evaluator())

        Returns:
            A new board with the move executed
        """
        if self._game_over or self._next_player == Player.HUMAN:
            raise IllegalMoveError("It is not the machine's turn")

        from ..search.tree import MinimaxSearch
        return MinimaxSearch(self._level, evaluator).search(self)

    def is_game_over(self) -> bool:
        """Check if the game is over, i.e. no player can move any more."""
        return self._game_over

    def get_winner(self) -> Player:
        """
        Get the winner of a finished game.

        Returns:
            The player with more tiles, or NONE in case of a tie
        """
        if not self._game_over:
            raise IllegalStateError("The game is not over yet")

        first, second = self.get_score()
        if first > second:
            return Player.FIRST
        elif second > first:
            return Player.SECOND
        return Player.NONE

    def get_number_of_tiles(self, player: Player) -> int:
        return bitboard.popcount(self._tiles[player])

    def get_number_of_first_tiles(self) -> int:
        return self.get_number_of_tiles(Player.FIRST)

    def get_number_of_second_tiles(self) -> int:
        return self.get_number_of_tiles(Player.SECOND)

    def get_number_of_human_tiles(self) -> int:
        return self.get_number_of_tiles(Player.HUMAN)

    def get_number_of_machine_tiles(self) -> int:
        return self.get_number_of_tiles(Player.COMPUTER)

    def get_score(self) -> Tuple[int, int]:
        """
        Get the current score (first, second).

        Returns:
            Tuple of (first_player_tiles, second_player_tiles)
        """
        return self.get_number_of_first_tiles(), self.get_number_of_second_tiles()

    def __str__(self) -> str:
        """Rows separated by newlines, slots by spaces, using '.', 'X' and 'O'."""
        return "\n".join(
            " ".join(Player(int(slot)).symbol for slot in row) for row in self.grid
        )

    def __repr__(self) -> str:
        return (f"Board(first_player={self._first_player.name}, next={self._next_player.name}, "
                f"level={self._level}, game_over={self._game_over})")
