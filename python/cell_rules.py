"""
Cell state machine: decides what a clicked cell becomes.
"""

from __future__ import annotations

import logging
from typing import Sequence

from grid_ops import is_within_bounds, replace_states
from grid_types import SEARCH_STATES, Cell, CellState, EditLike, Grid

logger = logging.getLogger(__name__)


def decide_next_state(
    current: Cell,
    has_start: bool,
    has_end: bool,
    requested_state: CellState | None = None,
) -> CellState:
    """
    Decide the next state of a cell from its current state and grid context.

    Rules, first match wins:
    1. A requested PATH / VISITED state is returned as-is (painting search results)
    2. Clicking START or END removes it
    3. With no START on the grid, the cell becomes START
    4. With no END on the grid, the cell becomes END
    5. Otherwise WALL toggles to EMPTY and anything else to WALL
    """
    if requested_state in SEARCH_STATES:
        return requested_state  # type: ignore[return-value]

    if current.state in (CellState.START, CellState.END):
        return CellState.EMPTY

    if not has_start:
        return CellState.START

    if not has_end:
        return CellState.END

    return CellState.EMPTY if current.state is CellState.WALL else CellState.WALL

def apply_cell_edits(grid: Grid, edits: Sequence[EditLike]) -> Grid:
    """
    Apply the state machine to each edit, in order.

    Special-cell occupancy is tracked across the batch, so each edit sees the
    effect of the ones before it. Planting a START or END first resets every
    other cell holding that state, keeping at most one of each on the grid.
    Out-of-bounds edits are skipped.

    Args:
        grid: Grid to edit
        edits: Objects with x, y and a requested state, possibly None (Cell or CellEdit)

    Returns:
        New grid sharing its untouched rows with the input, or the input grid
        itself if no cell changed
    """
    if not edits:
        return grid

    changes: dict[tuple[int, int], CellState] = {}
    occupied: dict[CellState, set[tuple[int, int]]] = {
        CellState.START: set(),
        CellState.END: set(),
    }
    for cell in grid:
        if cell.state in occupied:
            occupied[cell.state].add((cell.x, cell.y))

    for edit in edits:
        x, y = edit.x, edit.y
        if not is_within_bounds(grid, x, y):
            logger.debug("Ignoring out-of-bounds edit at (%d, %d)", x, y)
            continue

        cell = grid.cells[y][x]
        current_state = changes.get((x, y), cell.state)
        new_state = decide_next_state(
            Cell(cell.id, x, y, current_state),
            bool(occupied[CellState.START]),
            bool(occupied[CellState.END]),
            edit.state,
        )

        if new_state in occupied:
            for position in occupied[new_state] - {(x, y)}:
                changes[position] = CellState.EMPTY
            occupied[new_state] = {(x, y)}

        if current_state in occupied and new_state is not current_state:
            occupied[current_state].discard((x, y))

        changes[(x, y)] = new_state

    return replace_states(grid, changes)
