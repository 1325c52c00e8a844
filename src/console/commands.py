"""
Input parsing for the terminal game.

Turns raw input lines into dimensions, moves, or meta-commands.
Malformed input yields None so the caller can simply prompt again.
"""
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from game import Action


# ============================================================================
# Commands
# ============================================================================

@dataclass(frozen=True)
class Move:
    """A move on the cell at column x, row y."""

    x: int
    y: int
    action: Action = Action.CLEAR


@dataclass(frozen=True)
class HelpCommand:
    """Print the list of actions."""


@dataclass(frozen=True)
class CheatCommand:
    """Reveal the whole board and end the game as won."""


Command = Union[Move, HelpCommand, CheatCommand]

HELP_TOKEN = "h"
CHEAT_TOKEN = "cheat"


# ============================================================================
# Parsers
# ============================================================================

def parse_int(text: str) -> Optional[int]:
    """Parse a single integer, or None if the text is not one."""
    try:
        return int(text.strip())
    except ValueError:
        return None


def parse_dimensions(line: str) -> Optional[Tuple[int, int, int]]:
    """
    Parse a ``width height mines`` line.

    Args:
        line: Raw input line.

    Returns:
        (width, height, mines), or None if the line is not three
        integers or the mine count is negative.

    Raises:
        ValueError: If width or height is not positive.
    """
    tokens = line.split()
    if len(tokens) != 3:
        return None
    values = [parse_int(token) for token in tokens]
    if any(value is None for value in values):
        return None
    width, height, mines = values
    if width < 1 or height < 1:
        raise ValueError("Width and height must be positive")
    if mines < 0:
        return None
    return width, height, mines


def parse_action(token: str) -> Optional[Action]:
    """Look up an action by its lowercase name."""
    try:
        return Action(token)
    except ValueError:
        return None


def parse_command(line: str) -> Optional[Command]:
    """
    Parse one turn of input.

    Accepts ``h``, ``cheat``, or ``x y [clear|flag|question]``.
    Coordinates are not bounds-checked here.

    Args:
        line: Raw input line.

    Returns:
        The parsed command, or None for malformed input.
    """
    text = line.strip()
    if text == HELP_TOKEN:
        return HelpCommand()
    if text == CHEAT_TOKEN:
        return CheatCommand()

    tokens = text.split()
    if len(tokens) not in (2, 3):
        return None
    x = parse_int(tokens[0])
    y = parse_int(tokens[1])
    if x is None or y is None:
        return None
    if len(tokens) == 2:
        return Move(x, y)

    action = parse_action(tokens[2])
    if action is None:
        return None
    return Move(x, y, action)
