"""
Unit tests for input parsing.
"""
import pytest
from game import Action
from console.commands import (
    CheatCommand,
    HelpCommand,
    Move,
    parse_action,
    parse_command,
    parse_dimensions,
    parse_int,
)


# ============================================================================
# Dimension Parsing Tests
# ============================================================================

class TestParseDimensions:
    """Test the startup line parser."""

    def test_three_integers(self) -> None:
        """Well-formed line yields a tuple."""
        assert parse_dimensions("9 8 10\n") == (9, 8, 10)

    def test_extra_whitespace(self) -> None:
        """Runs of whitespace are tolerated."""
        assert parse_dimensions("  4   4  0 ") == (4, 4, 0)

    @pytest.mark.parametrize("line", ["", "9 9", "9 9 10 1", "a 9 10", "9 9 x"])
    def test_malformed_returns_none(self, line: str) -> None:
        """Wrong token count or non-integers yield None."""
        assert parse_dimensions(line) is None

    @pytest.mark.parametrize("line", ["0 5 1", "5 -2 1"])
    def test_non_positive_dimension_raises(self, line: str) -> None:
        """Non-positive width or height is reported."""
        with pytest.raises(ValueError, match="must be positive"):
            parse_dimensions(line)

    def test_negative_mines_returns_none(self) -> None:
        """Negative mine count is malformed."""
        assert parse_dimensions("3 3 -1") is None

    def test_mine_count_not_capped(self) -> None:
        """Too many mines is left to the caller."""
        assert parse_dimensions("2 2 9") == (2, 2, 9)


# ============================================================================
# Command Parsing Tests
# ============================================================================

class TestParseCommand:
    """Test per-turn command parsing."""

    def test_help(self) -> None:
        """'h' is the help command."""
        assert parse_command("h\n") == HelpCommand()

    def test_cheat(self) -> None:
        """'cheat' is the cheat command."""
        assert parse_command(" cheat ") == CheatCommand()

    def test_move_defaults_to_clear(self) -> None:
        """Omitted action means clear."""
        assert parse_command("3 4") == Move(3, 4, Action.CLEAR)

    @pytest.mark.parametrize("name, action", [
        ("clear", Action.CLEAR),
        ("flag", Action.FLAG),
        ("question", Action.QUESTION),
    ])
    def test_move_with_action(self, name: str, action: Action) -> None:
        """Action names map to actions."""
        assert parse_command(f"1 2 {name}") == Move(1, 2, action)

    def test_negative_coordinates_parse(self) -> None:
        """Bounds are left to the engine."""
        assert parse_command("-1 0") == Move(-1, 0)

    @pytest.mark.parametrize("line", [
        "",
        "1",
        "1 2 flag extra",
        "a 2",
        "1 b",
        "1 2 dig",
        "1 2 FLAG",
        "H",
        "help",
    ])
    def test_malformed_returns_none(self, line: str) -> None:
        """Anything else is ignored."""
        assert parse_command(line) is None


# ============================================================================
# Helper Tests
# ============================================================================

class TestHelpers:
    """Test small parsing helpers."""

    def test_parse_int(self) -> None:
        """Integers parse, other text does not."""
        assert parse_int(" 12\n") == 12
        assert parse_int("-3") == -3
        assert parse_int("1.5") is None
        assert parse_int("") is None

    def test_parse_action(self) -> None:
        """Only lowercase names are actions."""
        assert parse_action("question") == Action.QUESTION
        assert parse_action("Clear") is None
