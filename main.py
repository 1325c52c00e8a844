#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py [--seed N] [--preset {beginner,intermediate,expert}]
    python main.py --width W --height H --mines M [--exact-mine-counter]
"""
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

from console.cli import main


if __name__ == "__main__":
    main()
