"""
Grid construction, lookup and bulk state transitions.

All functions are pure: they return new Grid values and share unchanged rows
with their input.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from grid_types import SEARCH_STATES, Cell, CellState, Grid

__all__ = [
    "create_grid",
    "grid_from_states",
    "state_matrix",
    "is_within_bounds",
    "get_cell",
    "find_special_cells",
    "replace_states",
    "clear_walls",
    "clear_path",
    "reset_grid",
    "prepare_grid",
    "node_id",
    "node_position",
    "wall_bitmap",
    "special_node_ids",
]


def create_grid(rows: int, cols: int) -> Grid:
    """Create an all-empty grid with row-major cell ids."""
    if rows < 1 or cols < 1:
        raise ValueError(
            f"Invalid grid dimensions: {rows}x{cols}\n"
            f"  Rows and columns must both be at least 1"
        )
    return Grid(
        tuple(
            tuple(Cell(y * cols + x, x, y, CellState.EMPTY) for x in range(cols))
            for y in range(rows)
        )
    )


def grid_from_states(states: Iterable[Iterable[CellState]]) -> Grid:
    """
    Build a grid from a matrix of states (indexed states[y][x]).

    Raises:
        ValueError: If the matrix is empty or its rows differ in length
    """
    matrix = [list(row) for row in states]
    if not matrix or not matrix[0]:
        raise ValueError("Cannot build a grid from an empty state matrix")

    cols = len(matrix[0])
    mismatched = [(y, len(row)) for y, row in enumerate(matrix) if len(row) != cols]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths in state matrix\n"
            f"  Expected: {cols} columns (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for y, actual_cols in mismatched:
            error_msg += f"    Row {y}: {actual_cols} columns\n"
        error_msg += "  All rows must have the same number of cells"
        raise ValueError(error_msg)

    return Grid(
        tuple(
            tuple(Cell(y * cols + x, x, y, state) for x, state in enumerate(row))
            for y, row in enumerate(matrix)
        )
    )


def state_matrix(grid: Grid) -> list[list[CellState]]:
    """Mutable copy of the grid's states, indexed [y][x]."""
    return [[cell.state for cell in row] for row in grid.cells]


def is_within_bounds(grid: Grid, x: int, y: int) -> bool:
    return 0 <= y < grid.rows and 0 <= x < grid.cols


def get_cell(grid: Grid, x: int, y: int) -> Cell:
    """Get the cell at (x, y). Raises IndexError when out of bounds."""
    if not is_within_bounds(grid, x, y):
        raise IndexError(f"Cell ({x}, {y}) is outside a {grid.rows}x{grid.cols} grid")
    return grid.cells[y][x]


def find_special_cells(grid: Grid) -> tuple[Cell | None, Cell | None]:
    """Return (start, end); either may be None."""
    start: Cell | None = None
    end: Cell | None = None
    for cell in grid:
        if cell.state is CellState.START:
            start = cell
        elif cell.state is CellState.END:
            end = cell
    return (start, end)


def replace_states(grid: Grid, changes: Mapping[tuple[int, int], CellState]) -> Grid:
    """
    Return a grid with the given (x, y) -> state changes applied.

    Rows without changes are shared with the input grid. Returns the input
    grid itself when no state actually differs.
    """
    by_row: dict[int, dict[int, CellState]] = {}
    for (x, y), state in changes.items():
        if grid.cells[y][x].state is not state:
            by_row.setdefault(y, {})[x] = state

    if not by_row:
        return grid

    rows = list(grid.cells)
    for y, row_changes in by_row.items():
        rows[y] = tuple(
            Cell(cell.id, cell.x, cell.y, row_changes[cell.x]) if cell.x in row_changes else cell
            for cell in rows[y]
        )
    return Grid(tuple(rows))


def _map_states(grid: Grid, targets: tuple[CellState, ...], replacement: CellState) -> Grid:
    return replace_states(
        grid,
        {(cell.x, cell.y): replacement for cell in grid if cell.state in targets},
    )


# =============================================================================
# Bulk Transitions
# =============================================================================


def clear_walls(grid: Grid) -> Grid:
    """Walls and search annotations become empty; start/end survive."""
    return _map_states(grid, (CellState.WALL, *SEARCH_STATES), CellState.EMPTY)


def clear_path(grid: Grid) -> Grid:
    """Search annotations (path, visited) become empty."""
    return _map_states(grid, SEARCH_STATES, CellState.EMPTY)


def reset_grid(grid: Grid) -> Grid:
    """Every cell becomes empty."""
    return _map_states(grid, tuple(s for s in CellState if s is not CellState.EMPTY), CellState.EMPTY)


def prepare_grid(grid: Grid) -> Grid:
    """Clear stray search annotations before a new pathfinding run."""
    return clear_path(grid)


# =============================================================================
# Pathfinding Adapter Views
# =============================================================================


def node_id(x: int, y: int, cols: int) -> int:
    return y * cols + x


def node_position(node: int, cols: int) -> tuple[int, int]:
    """Inverse of node_id: returns (x, y)."""
    return (node % cols, node // cols)


def wall_bitmap(grid: Grid) -> tuple[bool, ...]:
    """Flattened row-major bitmap, True where the cell is a wall."""
    return tuple(cell.state is CellState.WALL for cell in grid)


def special_node_ids(grid: Grid) -> tuple[int | None, int | None]:
    """Linear indices of (start, end); either may be None."""
    start, end = find_special_cells(grid)
    return (
        node_id(start.x, start.y, grid.cols) if start is not None else None,
        node_id(end.x, end.y, grid.cols) if end is not None else None,
    )
