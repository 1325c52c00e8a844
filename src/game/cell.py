"""
Cell module for Minesweeper game.

Represents individual cells on the game board with their visibility
(hidden/revealed/flagged/questioned) and content (mine/number).
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()
    QUESTIONED = auto()


# ============================================================================
# Cell Data Classes
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Only ``state`` changes during a game; ``is_mine`` and
    ``adjacent_mines`` are fixed once the board has been built.

    Attributes:
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        state: Current visual state.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def is_questioned(self) -> bool:
        """Check if cell is marked with a question."""
        return self.state == CellState.QUESTIONED

    @property
    def is_marked(self) -> bool:
        """Check if the player has annotated this cell (flag or question)."""
        return self.state in (CellState.FLAGGED, CellState.QUESTIONED)

    def view(self) -> "CellView":
        """Take a read-only snapshot of this cell."""
        return CellView(self.state, self.is_mine, self.adjacent_mines)

    def to_observation(self) -> int:
        """
        Convert cell to observation value for an agent.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            -3: Questioned cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine (game over state)
        """
        if self.state == CellState.HIDDEN:
            return -1
        if self.state == CellState.FLAGGED:
            return -2
        if self.state == CellState.QUESTIONED:
            return -3
        if self.is_mine:
            return 9
        return self.adjacent_mines


@dataclass(frozen=True)
class CellView:
    """Immutable copy of a cell's state, handed out to renderers."""

    state: CellState
    is_mine: bool
    adjacent_mines: int
