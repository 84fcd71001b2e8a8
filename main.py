#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--preset {beginner,intermediate,expert}] [--seed N]
    python main.py simulate [--games N] [--preset ...] [--seed N]
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from minefield.cli import main


if __name__ == "__main__":
    main()
