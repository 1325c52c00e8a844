"""
Minesweeper game module.

Provides the board engine, cell state, text rendering and a
Gymnasium environment over the move API.
"""
from .cell import Cell, CellState, CellView
from .board import (
    Action,
    Board,
    BoardConfig,
    BoardSnapshot,
    GameOverError,
    GameState,
    MoveResult,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    PRESETS,
)
from .renderer import cell_symbol, render_board
from .environment import MinesweeperEnv

__all__ = [
    "Action",
    "Board",
    "BoardConfig",
    "BoardSnapshot",
    "Cell",
    "CellState",
    "CellView",
    "GameOverError",
    "GameState",
    "MoveResult",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "PRESETS",
    "cell_symbol",
    "render_board",
    "MinesweeperEnv",
]
