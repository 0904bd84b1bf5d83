"""
Logging utilities for Reversi.
"""
import os
import logging
from typing import Optional

from .config import Config
from .errors import InvalidArgumentError
from .game.player import Player

LOGGER_NAME = "reversi"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

ROLE_NAMES = {
    Player.HUMAN: "human",
    Player.COMPUTER: "machine",
    Player.NOBODY: "nobody",
}

class Logger:
    """Logger for game events."""

    def __init__(self, config: Config, log_dir: Optional[str] = None):
        """
        Initialize the logger.

        Args:
            config: Configuration object
            log_dir: Directory to save logs (default: config.logging.log_dir)
        """
        self.config = config
        self.log_dir = log_dir or config.logging.log_dir
        self.logger = logging.getLogger(LOGGER_NAME)
        self.handlers = []

        level_name = config.logging.log_level.upper()
        if level_name not in LOG_LEVELS:
            raise InvalidArgumentError(
                f"Unknown log level {config.logging.log_level!r}; choose one of {', '.join(LOG_LEVELS)}")
        level = getattr(logging, level_name)
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

        # Set up console logging
        self.console = logging.StreamHandler()
        self.console.setLevel(level)
        self.console.setFormatter(formatter)
        self.handlers.append(self.console)

        # Set up file logging
        self.log_file = None
        if config.logging.log_to_file:
            os.makedirs(self.log_dir, exist_ok=True)
            self.log_file = os.path.join(self.log_dir, config.logging.log_file)
            file_handler = logging.FileHandler(self.log_file)
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            self.handlers.append(file_handler)

        # Configure the package logger
        self.logger.setLevel(level)
        for handler in self.handlers:
            self.logger.addHandler(handler)

    def log_new_game(self, board):
        """Log the start of a game."""
        self.logger.info(
            f"New game: {ROLE_NAMES[board.get_first_player()]} player opens, level {board.get_level()}")

    def log_move(self, player: Player, board):
        """
        Log an executed move.

        Args:
            player: The player who moved
            board: The board after the move
        """
        first, second = board.get_score()
        self.logger.info(
            f"{ROLE_NAMES[player]} moved; score {first}:{second}, next {ROLE_NAMES[board.next()]}")
        self.logger.debug(f"Board:\n{board}")

    def log_result(self, board):
        """Log the outcome of a finished game."""
        winner = board.get_winner()
        first, second = board.get_score()
        outcome = "tie" if winner == Player.NONE else f"{ROLE_NAMES[winner]} wins"
        self.logger.info(f"Game over: {outcome} ({first}:{second})")

    def close(self):
        """Close the logger and flush all pending logs."""
        # Remove handlers to prevent duplicate logging
        for handler in self.handlers:
            self.logger.removeHandler(handler)
            handler.close()
        self.handlers = []

    def __del__(self):
        """Ensure resources are properly released."""
        self.close()


def setup_logger(config: Config) -> Logger:
    """
    Set up and return a logger instance.

    Args:
        config: Configuration object

    Returns:
        Logger instance
    """
    return Logger(config)
