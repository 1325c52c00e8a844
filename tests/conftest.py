"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from game import Board, BoardConfig, Cell, CellState


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 9x9 board with 10 mines, seeded."""
    return Board(seed=1234)


@pytest.fixture
def corner_mine_board() -> Board:
    """Create a 2x2 board with its only mine at (0, 0)."""
    return Board(BoardConfig(2, 2, 1), mine_positions=[(0, 0)])


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board(BoardConfig(5, 5, 0))


@pytest.fixture
def wall_board() -> Board:
    """
    Create a 5x5 board with a wall of mines in column 2.

    Columns 0-1 and 3-4 are separate safe regions; column 0 and 4
    are zero-count, columns 1 and 3 border the wall.
    """
    return Board(
        BoardConfig(5, 5, 5),
        mine_positions=[(2, y) for y in range(5)],
    )


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent mines."""
    return Cell(adjacent_mines=3, state=CellState.REVEALED)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)


@pytest.fixture
def small_config() -> BoardConfig:
    """A 3x3 board with a single mine."""
    return BoardConfig(3, 3, 1)
