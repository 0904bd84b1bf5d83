"""
Main script to play Reversi against the machine in the terminal.
"""
import sys
from pathlib import Path

# Add src directory to path
sys.path.append(str(Path(__file__).parent.absolute() / "src"))

from reversi.shell import main

if __name__ == "__main__":
    sys.exit(main())
