"""
Terminal front end for Minesweeper.

Parses typed commands and runs the interactive game loop.
"""
from .commands import (
    CheatCommand,
    HelpCommand,
    Move,
    parse_command,
    parse_dimensions,
    parse_int,
)
from .cli import GameSession, main

__all__ = [
    "CheatCommand",
    "HelpCommand",
    "Move",
    "parse_command",
    "parse_dimensions",
    "parse_int",
    "GameSession",
    "main",
]
