"""
Test script for configuration system.
"""
import json
import sys
from pathlib import Path

# Add src directory to path
sys.path.append(str(Path(__file__).parent.absolute() / "src"))

from reversi.config import Config, EvalConfig, get_default_config, DEFAULT_LEVEL

CONFIG_DIR = Path(__file__).parent.absolute() / "configs"


def test_config_creation(tmp_path):
    """Test creating, saving and loading a config."""
    config = get_default_config()
    assert config.project_name == "Reversi"
    assert config.search.level == DEFAULT_LEVEL
    assert config.logging.log_level == "WARNING"
    assert not config.shell.machine_first

    config.search.level = 5
    config.eval.human_mobility_weight = 2.0
    test_path = tmp_path / "nested" / "test_config.json"
    config.save(str(test_path))

    loaded_config = Config.load(str(test_path))
    assert loaded_config.to_dict() == config.to_dict()
    assert loaded_config.search.level == 5
    assert isinstance(loaded_config.eval, EvalConfig)


def test_partial_dict_uses_defaults():
    config = Config.from_dict({"search": {"level": 1}, "shell": {"machine_first": True}})

    assert config.search.level == 1
    assert config.shell.machine_first
    assert config.shell.prompt == get_default_config().shell.prompt
    assert config.eval == EvalConfig()


def test_default_config_file():
    """Test that the shipped config file matches the defaults."""
    config_path = CONFIG_DIR / "default_config.json"
    config = Config.load(str(config_path))

    assert config.to_dict() == get_default_config().to_dict()
    with open(config_path) as f:
        assert set(json.load(f)) == set(config.to_dict())
