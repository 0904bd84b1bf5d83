"""
Interactive text shell for playing Reversi against the machine.
"""
import argparse
import os
import sys
from typing import List, Optional, TextIO

from .config import Config, get_default_config, BOARD_SIZE, MIN_LEVEL, MAX_LEVEL
from .errors import ReversiError
from .game import Board, Player
from .logger import Logger, LOG_LEVELS, setup_logger
from .search import Evaluator

HELP_FORMAT = "{:<10} {:<15} {:<14} {}"

class Shell:
    """
    Reads commands line by line and plays them on the current board.

    Commands are recognised by their first letter, case-insensitively:
    new, level, move, switch, print, help and quit.
    """

    def __init__(self, config: Optional[Config] = None, stdin: Optional[TextIO] = None,
                 stdout: Optional[TextIO] = None, logger: Optional[Logger] = None):
        """
        Initialize the shell and start the first game.

        Args:
            config: Configuration object (default: get_default_config())
            stdin: Stream to read commands from (default: sys.stdin)
            stdout: Stream to write output to (default: sys.stdout)
            logger: Game event logger, if any
        """
        self.config = config or get_default_config()
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.logger = logger
        self.evaluator = Evaluator(self.config.eval)
        self.level = self.config.search.level
        self.board: Optional[Board] = None

        self._commands = {
            'n': self._new,
            'l': self._set_level,
            'm': self._move,
            's': self._switch,
            'p': self._print,
            'h': self._help,
            'q': self._quit,
        }

        first_player = Player.COMPUTER if self.config.shell.machine_first else Player.HUMAN
        self.new_game(first_player)

    def run(self) -> None:
        """Process commands until 'quit' or the end of the input."""
        done = False
        while not done:
            self._write(self.config.shell.prompt, end="")
            line = self.stdin.readline()

            # No further input?
            if not line:
                break
            done = self.execute(line)

    def execute(self, line: str) -> bool:
        """
        Execute a single command line.

        Returns:
            True if the shell should terminate
        """
        tokens = line.split()
        if not tokens:
            self.error("Your entry is not a valid command")
            return False

        command = self._commands.get(tokens[0][0].lower())
        if command is None:
            self.error("Your entry is not a valid command")
            return False
        return command(tokens)

    def new_game(self, first_player: Player) -> None:
        """Start a new game; the machine moves at once if it opens."""
        self.board = Board(first_player, self.level)
        if self.logger is not None:
            self.logger.log_new_game(self.board)

        if first_player == Player.COMPUTER:
            self._machine_move()

    def _new(self, tokens: List[str]) -> bool:
        self.new_game(self.board.get_first_player())
        return False

    def _set_level(self, tokens: List[str]) -> bool:
        if not self._check_number_tokens(tokens, 2):
            return False

        level = self._parse_int(tokens[1])
        if level is None:
            return False
        if level < MIN_LEVEL or level > MAX_LEVEL:
            self.error(f"The level must be an integer from {MIN_LEVEL} to {MAX_LEVEL}")
            return False

        self.board.set_level(level)
        self.level = level
        return False

    def _move(self, tokens: List[str]) -> bool:
        if not self._check_number_tokens(tokens, 3):
            return False

        row = self._parse_int(tokens[1])
        col = self._parse_int(tokens[2])
        if row is None or col is None:
            return False

        if self.board.is_game_over():
            self.error("The game is over. You must start a new one.")
            return False
        if not Board.is_in_board(row, col):
            self.error(f"The row and column number have to be integers from 1 to {BOARD_SIZE}")
            return False

        try:
            new_board = self.board.move(row, col)
        except ReversiError as e:
            self.error(str(e))
            return False

        if new_board is None:
            self.error("No valid move!")
            return False

        self._log_move(Player.HUMAN, new_board)
        previous, self.board = self.board, new_board

        if new_board.is_game_over():
            self._output_winner()
        elif new_board.next() == previous.next():
            self._write("Machine must miss a turn.")
        else:
            self._machine_move()
        return False

    def _machine_move(self) -> None:
        """Let the machine move, again and again while the human has to pass."""
        while not self.board.is_game_over():
            new_board = self.board.machine_move(self.evaluator)
            self._log_move(Player.COMPUTER, new_board)
            previous, self.board = self.board, new_board

            if new_board.is_game_over():
                self._output_winner()
                return
            if new_board.next() != previous.next():
                return
            self._write("You must miss a turn.")

    def _switch(self, tokens: List[str]) -> bool:
        self.new_game(self.board.get_first_player().opponent)
        return False

    def _print(self, tokens: List[str]) -> bool:
        self._write(str(self.board))
        return False

    def _help(self, tokens: List[str]) -> bool:
        self._write("Available commands:")
        self._write(HELP_FORMAT.format(
            "NEW", "", "", "Creates a new game with the current level and first player."))
        self._write(HELP_FORMAT.format(
            "LEVEL", "<integer lvl>", "",
            f"Sets the level of difficulty to <lvl>, from {MIN_LEVEL} to {MAX_LEVEL}."))
        self._write(HELP_FORMAT.format(
            "MOVE", "<integer row>", "<integer col>",
            f"Places a human tile on row <row> and column <col> (1-{BOARD_SIZE})."))
        self._write(HELP_FORMAT.format(
            "SWITCH", "", "", "Starts a new game opened by the other player."))
        self._write(HELP_FORMAT.format("PRINT", "", "", "Prints the board."))
        self._write(HELP_FORMAT.format("HELP", "", "", "Prints this help."))
        self._write(HELP_FORMAT.format("QUIT", "", "", "Exits the program."))
        return False

    def _quit(self, tokens: List[str]) -> bool:
        return True

    def _output_winner(self) -> None:
        if self.logger is not None:
            self.logger.log_result(self.board)

        winner = self.board.get_winner()
        if winner == Player.HUMAN:
            self._write("Congratulations! You won.")
        elif winner == Player.COMPUTER:
            self._write("Sorry! Machine wins.")
        else:
            self._write("Nobody wins. Tie.")

    def _log_move(self, player: Player, board: Board) -> None:
        if self.logger is not None:
            self.logger.log_move(player, board)

    def _check_number_tokens(self, tokens: List[str], number: int) -> bool:
        if len(tokens) < number:
            self.error("Your entry is not a valid command")
            return False
        return True

    def _parse_int(self, token: str) -> Optional[int]:
        try:
            return int(token)
        except ValueError:
            self.error("The number has to be an integer!")
            return None

    def error(self, message: str) -> None:
        self._write(f"Error! {message}")

    def _write(self, text: str, end: str = "\n") -> None:
        print(text, end=end, file=self.stdout)
        self.stdout.flush()


def main(argv: Optional[List[str]] = None) -> int:
    """Run the Reversi shell."""
    parser = argparse.ArgumentParser(description='Play Reversi against the machine')
    parser.add_argument('--config', type=str, default=None,
                      help='Path to a JSON config file')
    parser.add_argument('--level', type=int, default=None,
                      help=f'Skill level of the machine ({MIN_LEVEL}-{MAX_LEVEL})')
    parser.add_argument('--machine-first', action='store_true',
                      help='Let the machine open the game')
    parser.add_argument('--log-level', type=str.upper, default=None, choices=LOG_LEVELS,
                      help='Logging level, e.g. DEBUG or INFO')
    args = parser.parse_args(argv)

    # Load configuration
    if args.config is not None:
        if not os.path.exists(args.config):
            parser.error(f"Config file {args.config} not found")
        config = Config.load(args.config)
    else:
        config = get_default_config()

    if args.level is not None:
        config.search.level = args.level
    if args.machine_first:
        config.shell.machine_first = True
    if args.log_level is not None:
        config.logging.log_level = args.log_level

    level = config.search.level
    if (isinstance(level, bool) or not isinstance(level, int)
            or level < MIN_LEVEL or level > MAX_LEVEL):
        parser.error(f"The level must be an integer from {MIN_LEVEL} to {MAX_LEVEL}")
    if config.logging.log_level.upper() not in LOG_LEVELS:
        parser.error(f"Unknown log level {config.logging.log_level!r}")

    logger = setup_logger(config)
    try:
        Shell(config, logger=logger).run()
    except KeyboardInterrupt:
        print()
    finally:
        logger.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
