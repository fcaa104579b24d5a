"""
Grid parsing utilities.

Grids are written one character per cell, rows separated by |:

    S_#|_#_|__E

Used for test fixtures, demo layouts and debugging output.
"""

from __future__ import annotations

from grid_ops import grid_from_states
from grid_types import CellState, Grid

__all__ = ["parse_grid", "format_grid", "CELL_CHARS", "STATE_CHARS"]

CELL_CHARS: dict[str, CellState] = {
    "_": CellState.EMPTY,
    ".": CellState.EMPTY,
    "S": CellState.START,
    "E": CellState.END,
    "#": CellState.WALL,
    "*": CellState.PATH,
    "o": CellState.VISITED,
}

STATE_CHARS: dict[CellState, str] = {
    CellState.EMPTY: "_",
    CellState.START: "S",
    CellState.END: "E",
    CellState.WALL: "#",
    CellState.PATH: "*",
    CellState.VISITED: "o",
}


def parse_grid(definition: str) -> Grid:
    """
    Parse a grid from the compact one-character-per-cell format.

    Format:
    - Rows separated by |
    - Surrounding whitespace on each row is ignored
    - Cell characters:
      * '_' or '.': Empty
      * 'S': Start
      * 'E': End
      * '#': Wall
      * '*': Path
      * 'o': Visited

    Example:
        "S_#|_#_|__E" creates a 3x3 grid with start at (0, 0) and end at (2, 2)

    Args:
        definition: Grid definition string

    Returns:
        Parsed grid

    Raises:
        ValueError: On unknown characters or rows of different lengths
    """
    row_strings = [row.strip() for row in definition.strip().split("|")]
    rows: list[list[CellState]] = []

    for row_idx, row_str in enumerate(row_strings):
        cells: list[CellState] = []
        for col_idx, char in enumerate(row_str):
            if char not in CELL_CHARS:
                error_msg = (
                    f"Invalid cell character: '{char}'\n"
                    f"  Row {row_idx}: \"{row_str}\"\n"
                    f"  Position: column {col_idx}\n"
                    f"  Valid characters:\n"
                    f"    - '_' or '.': Empty cell\n"
                    f"    - 'S': Start, 'E': End\n"
                    f"    - '#': Wall\n"
                    f"    - '*': Path, 'o': Visited"
                )
                raise ValueError(error_msg)
            cells.append(CELL_CHARS[char])
        rows.append(cells)

    if not rows or not rows[0]:
        raise ValueError(f"Empty grid definition: {definition!r}")

    # Validate all rows have same length
    cols = len(rows[0])
    mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != cols]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths\n"
            f"  Expected: {cols} columns (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual_cols in mismatched:
            error_msg += f"    Row {row_idx}: {actual_cols} columns - \"{row_strings[row_idx]}\"\n"
        error_msg += "  All rows must have the same number of cells"
        raise ValueError(error_msg)

    return grid_from_states(rows)


def format_grid(grid: Grid) -> str:
    """Inverse of parse_grid, using '_' for empty cells."""
    return "|".join("".join(STATE_CHARS[cell.state] for cell in row) for row in grid.cells)
