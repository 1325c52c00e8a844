"""
Board module for Minesweeper game.

Implements the game board with mine placement, move resolution
(reveal, flag, question), flood reveal, and game state management.
"""
from dataclasses import InitVar, dataclass, field
from enum import Enum, auto
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellState, CellView


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


class Action(Enum):
    """Moves a player can make on a cell."""

    CLEAR = "clear"
    FLAG = "flag"
    QUESTION = "question"


class MoveResult(Enum):
    """Outcome of a single call to ``Board.apply_move``."""

    WIN = auto()
    LOSE = auto()
    OK = auto()
    NEEDS_CONFIRMATION = auto()
    REJECT_OUT_OF_BOUNDS = auto()
    REJECT_ALREADY_REVEALED = auto()


_TARGET_STATE = {
    Action.CLEAR: CellState.REVEALED,
    Action.FLAG: CellState.FLAGGED,
    Action.QUESTION: CellState.QUESTIONED,
}


class GameOverError(RuntimeError):
    """Raised when an environment is stepped after its episode ended."""


@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
        exact_mine_counter: Keep the mine counter equal to mines minus
            currently flagged mines. When False, flagging a mine only
            ever decrements the counter.
    """

    width: int = 9
    height: int = 9
    num_mines: int = 10
    exact_mine_counter: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)

PRESETS: Dict[str, BoardConfig] = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


@dataclass(frozen=True)
class BoardSnapshot:
    """Read-only view of a board, rows indexed by y."""

    width: int
    height: int
    remaining_mines: int
    game_state: GameState
    cells: Tuple[Tuple[CellView, ...], ...]

    def cell(self, x: int, y: int) -> CellView:
        return self.cells[y][x]


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Owns the grid of cells, places mines at construction time and
    resolves moves. Cells are addressed as (x, y) with x the column.

    Attributes:
        config: Board dimensions and mine count.
        seed: Seed for the mine placement generator.
        rng: Generator to draw mine positions from; overrides ``seed``.
    """

    config: BoardConfig = field(default_factory=lambda: BoardConfig())
    seed: Optional[int] = None
    rng: Optional[np.random.Generator] = field(default=None, repr=False)
    mine_positions: InitVar[Optional[Iterable[Tuple[int, int]]]] = None
    _grid: List[List[Cell]] = field(default_factory=list, init=False, repr=False)
    _game_state: GameState = field(default=GameState.PLAYING, init=False)
    _remaining_mines: int = field(default=0, init=False)
    _remaining_safe_cells: int = field(default=0, init=False)

    def __post_init__(
        self, mine_positions: Optional[Iterable[Tuple[int, int]]]
    ) -> None:
        """Build the grid, lay mines and compute neighbor counts."""
        if self.rng is None:
            self.rng = np.random.default_rng(self.seed)
        self._init_grid()
        if mine_positions is None:
            self._place_random_mines()
        else:
            self._place_given_mines(mine_positions)
        self._calculate_adjacent_mines()
        self._remaining_mines = self.config.num_mines
        self._remaining_safe_cells = (
            self.config.width * self.config.height - self.config.num_mines
        )

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.config.width)]
            for _ in range(self.config.height)
        ]

    def _place_random_mines(self) -> None:
        """
        Place mines by rejection sampling.

        Draws a uniformly random position until ``num_mines`` distinct
        cells hold a mine. Config validation keeps at least one cell free,
        so the loop terminates.
        """
        remaining = self.config.num_mines
        while remaining > 0:
            x = int(self.rng.integers(self.config.width))
            y = int(self.rng.integers(self.config.height))
            cell = self._grid[y][x]
            if not cell.is_mine:
                cell.is_mine = True
                remaining -= 1

    def _place_given_mines(self, positions: Iterable[Tuple[int, int]]) -> None:
        """Place mines at exact positions."""
        placed = 0
        for x, y in positions:
            if not self._is_valid_position(x, y):
                raise ValueError(f"Mine position ({x}, {y}) is out of bounds")
            cell = self._grid[y][x]
            if cell.is_mine:
                raise ValueError(f"Duplicate mine position ({x}, {y})")
            cell.is_mine = True
            placed += 1
        if placed != self.config.num_mines:
            raise ValueError(
                f"Expected {self.config.num_mines} mine positions, got {placed}"
            )

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for y in range(self.config.height):
            for x in range(self.config.width):
                self._grid[y][x].adjacent_mines = self._count_adjacent_mines(x, y)

    def _count_adjacent_mines(self, x: int, y: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_x, neighbor_y in self._get_neighbors(x, y):
            if self._grid[neighbor_y][neighbor_x].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(self, x: int, y: int) -> List[Tuple[int, int]]:
        """
        Get valid neighboring cell positions.

        Args:
            x: Column of center cell.
            y: Row of center cell.

        Returns:
            List of (x, y) tuples for in-bounds neighbors.
        """
        neighbors = []
        for delta_y in (-1, 0, 1):
            for delta_x in (-1, 0, 1):
                if delta_x == 0 and delta_y == 0:
                    continue
                new_x = x + delta_x
                new_y = y + delta_y
                if self._is_valid_position(new_x, new_y):
                    neighbors.append((new_x, new_y))
        return neighbors

    def _is_valid_position(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self.config.width and 0 <= y < self.config.height

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def apply_move(
        self, x: int, y: int, action: Action, confirmed: bool = False
    ) -> MoveResult:
        """
        Apply a player's move to the cell at (x, y).

        A flagged or questioned cell is only changed when ``confirmed``
        is set; otherwise NEEDS_CONFIRMATION is returned and nothing
        changes. Invalid coordinates are reported, never raised. Moves
        keep resolving after the game ends, but a won or lost game
        stays in that state.

        Args:
            x: Column of the target cell.
            y: Row of the target cell.
            action: What to do with the cell.
            confirmed: Whether the player agreed to overwrite a marking.

        Returns:
            The outcome of the move.
        """
        if not self._is_valid_position(x, y):
            return MoveResult.REJECT_OUT_OF_BOUNDS

        cell = self._grid[y][x]
        if cell.is_revealed:
            return MoveResult.REJECT_ALREADY_REVEALED
        if not confirmed and cell.is_marked:
            return MoveResult.NEEDS_CONFIRMATION

        previous = cell.state
        cell.state = _TARGET_STATE[action]

        if cell.is_mine:
            self._update_mine_counter(previous, action)
            if action == Action.CLEAR:
                self._end_game(GameState.LOST)
                return MoveResult.LOSE
            return MoveResult.OK

        if action == Action.CLEAR:
            self._remaining_safe_cells -= 1
            if cell.adjacent_mines == 0:
                self._flood_reveal(x, y)
            if self._remaining_safe_cells == 0:
                self._end_game(GameState.WON)
                return MoveResult.WIN

        return MoveResult.OK

    def _end_game(self, state: GameState) -> None:
        """Record the first terminal state reached."""
        if self._game_state == GameState.PLAYING:
            self._game_state = state

    def _update_mine_counter(self, previous: CellState, action: Action) -> None:
        """Adjust the displayed mine counter after marking a mine."""
        if not self.config.exact_mine_counter:
            # Flagging a mine decrements; nothing ever restores the count.
            if action == Action.FLAG:
                self._remaining_mines -= 1
            return
        was_flagged = previous == CellState.FLAGGED
        if action == Action.FLAG and not was_flagged:
            self._remaining_mines -= 1
        elif action != Action.FLAG and was_flagged:
            self._remaining_mines += 1

    def _flood_reveal(self, x: int, y: int) -> None:
        """
        Reveal the zero region around an already revealed empty cell.

        Every neighbor not yet revealed is revealed, including marked
        ones; zero-count neighbors are expanded in turn.
        """
        stack = [(x, y)]
        while stack:
            cx, cy = stack.pop()
            for neighbor_x, neighbor_y in self._get_neighbors(cx, cy):
                neighbor = self._grid[neighbor_y][neighbor_x]
                if neighbor.is_revealed:
                    continue
                neighbor.state = CellState.REVEALED
                self._remaining_safe_cells -= 1
                if neighbor.adjacent_mines == 0:
                    stack.append((neighbor_x, neighbor_y))

    def win(self) -> None:
        """
        Force the board into its won display.

        Mines become flagged, everything else revealed, and both
        counters drop to zero. The game is recorded as won.
        """
        for row in self._grid:
            for cell in row:
                cell.state = CellState.FLAGGED if cell.is_mine else CellState.REVEALED
        self._remaining_mines = 0
        self._remaining_safe_cells = 0
        self._game_state = GameState.WON

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._game_state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._game_state == GameState.LOST

    @property
    def remaining_mines(self) -> int:
        """Mine counter shown to the player; may go negative."""
        return self._remaining_mines

    @property
    def remaining_safe_cells(self) -> int:
        """Non-mine cells still to be revealed."""
        return self._remaining_safe_cells

    def get_cell(self, x: int, y: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self._is_valid_position(x, y):
            return None
        return self._grid[y][x]

    def mine_positions_list(self) -> List[Tuple[int, int]]:
        """List (x, y) positions of all mines, row by row."""
        return [
            (x, y)
            for y in range(self.config.height)
            for x in range(self.config.width)
            if self._grid[y][x].is_mine
        ]

    def snapshot(self) -> BoardSnapshot:
        """Capture an immutable copy of the board for rendering."""
        return BoardSnapshot(
            width=self.config.width,
            height=self.config.height,
            remaining_mines=self._remaining_mines,
            game_state=self._game_state,
            cells=tuple(tuple(cell.view() for cell in row) for row in self._grid),
        )

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array for an agent.

        Returns:
            2D int8 array of shape (height, width); see
            ``Cell.to_observation`` for the encoding.
        """
        obs = np.zeros((self.config.height, self.config.width), dtype=np.int8)
        for y in range(self.config.height):
            for x in range(self.config.width):
                obs[y, x] = self._grid[y][x].to_observation()
        return obs
