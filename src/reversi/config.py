"""
Configuration parameters for Reversi.
"""
import os
from dataclasses import dataclass, asdict, field
from typing import Dict, Any
import json

# Board dimensions (rows and columns of the grid)
BOARD_SIZE = 8

# Bounds of the machine's skill level (search depth in half-moves)
MIN_LEVEL = 1
MAX_LEVEL = 5
DEFAULT_LEVEL = 3

@dataclass
class SearchConfig:
    """Configuration for the minimax search."""
    level: int = DEFAULT_LEVEL

@dataclass
class EvalConfig:
    """Weights of the board evaluation function."""
    human_position_factor: float = 1.5
    machine_mobility_weight: float = 3.0
    human_mobility_weight: float = 4.0
    machine_potential_weight: float = 2.5
    human_potential_weight: float = 3.0

@dataclass
class LoggingConfig:
    """Configuration for logging."""
    log_dir: str = "logs"
    log_level: str = "WARNING"
    log_to_file: bool = False
    log_file: str = "reversi.log"

@dataclass
class ShellConfig:
    """Configuration for the text shell."""
    prompt: str = "reversi> "
    machine_first: bool = False

@dataclass
class Config:
    """Main configuration class."""
    project_name: str = "Reversi"
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    shell: ShellConfig = field(default_factory=ShellConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    def save(self, filepath: str):
        """Save config to JSON file."""
        os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """Create config from dictionary."""
        return cls(
            project_name=config_dict.get('project_name', 'Reversi'),
            search=SearchConfig(**config_dict.get('search', {})),
            eval=EvalConfig(**config_dict.get('eval', {})),
            logging=LoggingConfig(**config_dict.get('logging', {})),
            shell=ShellConfig(**config_dict.get('shell', {}))
        )

    @classmethod
    def load(cls, filepath: str) -> 'Config':
        """Load config from JSON file."""
        with open(filepath, 'r') as f:
            config_dict = json.load(f)
        return cls.from_dict(config_dict)

def get_default_config() -> Config:
    """Get default configuration."""
    return Config()
