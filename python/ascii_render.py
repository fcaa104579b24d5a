"""
Coloured text dump of a grid for the developer console.
"""

from __future__ import annotations

import logging
from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from grid_parser import STATE_CHARS
from grid_types import CellState, Grid

logger = logging.getLogger(__name__)

STATE_COLORS: dict[CellState, Callable[[str], str]] = {
    CellState.EMPTY: chalk.white,
    CellState.START: chalk.greenBright,
    CellState.END: chalk.redBright,
    CellState.WALL: chalk.blue,
    CellState.PATH: chalk.yellowBright,
    CellState.VISITED: chalk.cyan,
}


def render_grid(
    grid: Grid,
    cursor: tuple[int, int] | None = None,
    cell_width: int = 2,
    title: str = "grid",
    color: bool = True,
) -> str:
    """
    Render a grid as a bordered block of characters.

    Args:
        grid: The grid to render
        cursor: Optional (x, y) cell to highlight ('@' when colour is off)
        cell_width: Characters per cell (default 2)
        title: Label centred in the top border
        color: Colour cells by state (disable for plain text, e.g. in logs)

    Returns:
        Rendered text, one line per grid row plus borders
    """
    grid_width = grid.cols * cell_width + 2  # +2 for borders

    # Top border with title
    label = f" {title} "
    if len(label) <= grid_width - 2:
        title_start = (grid_width - len(label)) // 2
        top = "┌" + "─" * (title_start - 1) + label + "─" * (grid_width - title_start - len(label) - 1) + "┐"
    else:
        top = "┌" + "─" * (grid_width - 2) + "┐"

    lines = [top]
    for row in grid.cells:
        parts = ["│"]
        for cell in row:
            char = STATE_CHARS[cell.state]
            content = char if cell_width == 1 else char.center(cell_width)
            if cursor is not None and cursor == (cell.x, cell.y):
                content = chalk.bgWhite.black(content) if color else "@".center(cell_width)
            elif color:
                content = STATE_COLORS[cell.state](content)
            parts.append(content)
        parts.append("│")
        lines.append("".join(parts))
    lines.append("└" + "─" * (grid_width - 2) + "┘")

    logger.debug("render_grid: %dx%d cursor=%s", grid.rows, grid.cols, cursor)
    return "\n".join(lines)
