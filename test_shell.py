"""
Test script for the interactive shell.
"""
import io
import sys
from pathlib import Path

import pytest

# Add src directory to path
sys.path.append(str(Path(__file__).parent.absolute() / "src"))

from reversi.config import get_default_config
from reversi.game import Board, Player
from reversi.shell import Shell, main

EMPTY_ROW = ". . . . . . . ."

# Human to move; the machine has to pass after (1,1), (8,3) ends the game
SKIP_ROWS = [". O X . . . . ."] + [EMPTY_ROW] * 6 + ["X O . . . . . ."]

# Same position with the colours swapped, machine to move
MACHINE_SKIP_ROWS = [". X O . . . . ."] + [EMPTY_ROW] * 6 + ["O X . . . . . ."]


def make_shell(commands="", machine_first=False, level=None):
    config = get_default_config()
    config.shell.machine_first = machine_first
    if level is not None:
        config.search.level = level
    return Shell(config, stdin=io.StringIO(commands), stdout=io.StringIO())


def output_of(shell):
    return shell.stdout.getvalue()


def test_print_and_quit():
    shell = make_shell("print\nquit\nprint\n")
    shell.run()

    out = output_of(shell)
    assert out.count(". . . O X . . .") == 1, "Board printed once, nothing after quit"
    assert out.startswith("reversi> ")


def test_run_stops_at_end_of_input():
    shell = make_shell("p\n")
    shell.run()

    assert ". . . X O . . ." in output_of(shell)


def test_commands_are_case_insensitive():
    shell = make_shell()

    assert shell.execute("QUIT") is True
    assert shell.execute("Print") is False
    assert ". . . O X . . ." in output_of(shell)


def test_human_move_triggers_machine():
    shell = make_shell()
    shell.execute("move 4 3")

    first, second = shell.board.get_score()
    assert first + second == 6
    assert shell.board.next() == Player.HUMAN
    assert "Error!" not in output_of(shell)


@pytest.mark.parametrize("line,message", [
    ("xyz", "Error! Your entry is not a valid command"),
    ("", "Error! Your entry is not a valid command"),
    ("move 4", "Error! Your entry is not a valid command"),
    ("move a 3", "Error! The number has to be an integer!"),
    ("move 9 1", "Error! The row and column number have to be integers from 1 to 8"),
    ("move 1 1", "Error! No valid move!"),
    ("level 9", "Error! The level must be an integer from 1 to 5"),
    ("level two", "Error! The number has to be an integer!"),
])
def test_errors(line, message):
    shell = make_shell()
    before = shell.board

    assert shell.execute(line) is False
    assert message in output_of(shell)
    assert shell.board is before


def test_set_level():
    shell = make_shell()
    shell.execute("level 1")

    assert shell.board.get_level() == 1
    shell.execute("new")
    assert shell.board.get_level() == 1, "New games keep the level"


def test_switch_lets_machine_open():
    shell = make_shell(level=1)
    shell.execute("switch")

    assert shell.board.get_first_player() == Player.COMPUTER
    assert shell.board.get_number_of_machine_tiles() == 4
    assert shell.board.get_number_of_human_tiles() == 1
    assert shell.board.next() == Player.HUMAN

    shell.execute("switch")
    assert shell.board.get_first_player() == Player.HUMAN
    assert shell.board.get_score() == (2, 2)


def test_machine_first_config():
    shell = make_shell(machine_first=True, level=1)

    assert shell.board.get_first_player() == Player.COMPUTER
    assert sum(shell.board.get_score()) == 5


def test_new_keeps_first_player():
    shell = make_shell()
    shell.execute("move 4 3")
    shell.execute("new")

    assert shell.board.get_first_player() == Player.HUMAN
    assert shell.board.get_score() == (2, 2)


def test_machine_misses_turn_and_human_wins():
    shell = make_shell()
    shell.board = Board.from_rows(SKIP_ROWS, level=shell.level)

    shell.execute("move 1 1")
    assert "Machine must miss a turn." in output_of(shell)

    shell.execute("move 8 3")
    assert "Congratulations! You won." in output_of(shell)

    shell.execute("move 2 2")
    assert "Error! The game is over. You must start a new one." in output_of(shell)


def test_human_misses_turn_and_machine_wins():
    shell = make_shell()
    shell.board = Board.from_rows(MACHINE_SKIP_ROWS, next_player=Player.COMPUTER,
                                  level=shell.level)

    shell._machine_move()

    out = output_of(shell)
    assert "You must miss a turn." in out
    assert "Sorry! Machine wins." in out
    assert shell.board.get_score() == (0, 6)


def test_help():
    shell = make_shell()
    shell.execute("help")

    out = output_of(shell)
    for command in ["NEW", "LEVEL", "MOVE", "SWITCH", "PRINT", "HELP", "QUIT"]:
        assert command in out


def test_main_rejects_bad_level():
    with pytest.raises(SystemExit):
        main(["--level", "9"])


def test_main_rejects_missing_config(tmp_path):
    with pytest.raises(SystemExit):
        main(["--config", str(tmp_path / "missing.json")])


def test_main_runs_shell(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("print\nquit\n"))

    assert main(["--level", "1"]) == 0
    assert ". . . O X . . ." in capsys.readouterr().out


def test_main_rejects_unknown_log_level():
    with pytest.raises(SystemExit):
        main(["--log-level", "verbose"])


@pytest.mark.parametrize("section,key,value", [
    ("logging", "log_level", "LOUD"),
    ("search", "level", 2.5),
    ("search", "level", True),
])
def test_main_rejects_bad_config_file(tmp_path, section, key, value):
    config = get_default_config()
    setattr(getattr(config, section), key, value)
    config_path = tmp_path / "config.json"
    config.save(str(config_path))

    with pytest.raises(SystemExit):
        main(["--config", str(config_path)])


def test_main_accepts_lower_case_log_level(monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO("quit\n"))

    assert main(["--log-level", "error", "--level", "1"]) == 0
