"""
Text rendering for Minesweeper boards.

Pure functions over a ``BoardSnapshot``; nothing here touches a live board.

Layout::

       Mines: 5
         0  1  2
     0   ·  ·  ·
     1   ·  M  3
"""
from .board import BoardSnapshot
from .cell import CellState, CellView


# ============================================================================
# Symbols
# ============================================================================

MINE_SYMBOL = "X"
FLAG_SYMBOL = "M"
QUESTION_SYMBOL = "?"
CLEARED_SYMBOL = " "
HIDDEN_SYMBOL = "·"


def cell_symbol(view: CellView) -> str:
    """Map a cell snapshot to its display symbol."""
    if view.is_mine and view.state == CellState.REVEALED:
        return MINE_SYMBOL
    if view.state == CellState.FLAGGED:
        return FLAG_SYMBOL
    if view.state == CellState.QUESTIONED:
        return QUESTION_SYMBOL
    if view.state == CellState.REVEALED:
        if view.adjacent_mines == 0:
            return CLEARED_SYMBOL
        return str(view.adjacent_mines)
    return HIDDEN_SYMBOL


# ============================================================================
# Layout
# ============================================================================

def cell_width(width: int, height: int) -> int:
    """Column width that fits the largest row/column label plus padding."""
    return max(len(str(width - 1)), len(str(height - 1))) + 2


def center(text: str, width: int) -> str:
    """Center text in a field, putting the odd space on the right."""
    padding = max(width - len(text), 0)
    left = padding // 2
    return " " * left + text + " " * (padding - left)


def render_board(snapshot: BoardSnapshot) -> str:
    """
    Render a snapshot as an aligned text grid.

    Args:
        snapshot: Board state to draw.

    Returns:
        Multi-line string: mine counter, column header, then one line
        per row prefixed by its index.
    """
    size = cell_width(snapshot.width, snapshot.height)
    counter = f"Mines: {snapshot.remaining_mines}"
    board_width = max(size * (snapshot.width + 1), len(counter))

    lines = [center(counter, board_width).rstrip()]
    header = " " * size + "".join(
        center(str(x), size) for x in range(snapshot.width)
    )
    lines.append(header.rstrip())
    for y, row in enumerate(snapshot.cells):
        line = center(str(y), size) + "".join(
            center(cell_symbol(view), size) for view in row
        )
        lines.append(line.rstrip())
    return "\n".join(lines)
