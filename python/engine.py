"""
Grid editor engine.

Every operation takes an EditorState and returns a new one; nothing is
mutated in place. GridEditor wraps a single EditorState for callers (a UI
layer) that want one mutable owner.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable

import grid_ops
import history
from cell_rules import apply_cell_edits
from grid_types import SPECIAL_STATES, CellEdit, CellState, CommandType, EditLike, Grid, HistoryState
from maze import MazeSettings
from maze import generate_maze as build_maze

logger = logging.getLogger(__name__)

DEFAULT_ROWS = 30
DEFAULT_COLS = 50


class GridValidationError(ValueError):
    """The grid is not ready for a pathfinding run."""


@dataclass(frozen=True)
class EditorState:
    """Grid plus its history. drag_origin is the pre-gesture grid while a drag is open."""

    grid: Grid
    history: HistoryState
    drag_origin: Grid | None = None

    @property
    def dragging(self) -> bool:
        return self.drag_origin is not None


def create_editor(rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS) -> EditorState:
    return EditorState(grid_ops.create_grid(rows, cols), history.create_empty_history())


def resize(state: EditorState, rows: int, cols: int) -> EditorState:
    """
    Replace the grid with an empty one of the new size.

    History is dropped: deltas recorded against another shape cannot be replayed.
    """
    logger.info("resize: %dx%d -> %dx%d, history cleared", state.grid.rows, state.grid.cols, rows, cols)
    return EditorState(grid_ops.create_grid(rows, cols), history.clear_history())


# =============================================================================
# Internal Helpers
# =============================================================================


def _commit(state: EditorState, command_type: CommandType, previous: Grid, new: Grid) -> EditorState:
    """Record previous -> new as one command; a no-op when nothing changed."""
    command = history.create_command(command_type, previous, new)
    if not command.deltas:
        return replace(state, grid=new, drag_origin=None)
    return EditorState(new, history.execute_command(state.history, command))


def _finish_drag(state: EditorState) -> EditorState:
    if state.drag_origin is None:
        return state
    return _commit(state, CommandType.UPDATE_CELLS, state.drag_origin, state.grid)


def _bulk(state: EditorState, command_type: CommandType, new_grid: Grid) -> EditorState:
    state = _finish_drag(state)
    return _commit(state, command_type, state.grid, new_grid)


# =============================================================================
# Operations
# =============================================================================


def update_cell(
    state: EditorState,
    cells: EditLike | Iterable[EditLike],
    commit: bool = True,
) -> EditorState:
    """
    Apply the cell state machine to one or more edited cells.

    Args:
        state: Current editor state
        cells: A single edit or an iterable of edits (CellEdit, Cell, or any
            object with x, y and state)
        commit: True records a history entry now, closing any open drag so the
            whole gesture becomes one command. False opens or continues a drag:
            the grid updates live but history is written only when the drag is
            closed. update_cell(state, [], commit=True) closes a pending drag.

    Returns:
        New editor state
    """
    edits: list[EditLike] = [cells] if hasattr(cells, "x") else list(cells)

    if not edits:
        return _finish_drag(state) if commit else state

    new_grid = apply_cell_edits(state.grid, edits)

    if not commit:
        origin = state.drag_origin if state.drag_origin is not None else state.grid
        return EditorState(new_grid, state.history, origin)

    previous = state.drag_origin if state.drag_origin is not None else state.grid
    return _commit(state, CommandType.UPDATE_CELLS, previous, new_grid)


def clear_walls(state: EditorState) -> EditorState:
    return _bulk(state, CommandType.CLEAR_WALLS, grid_ops.clear_walls(state.grid))


def clear_path(state: EditorState) -> EditorState:
    return _bulk(state, CommandType.CLEAR_PATH, grid_ops.clear_path(state.grid))


def reset_grid(state: EditorState) -> EditorState:
    return _bulk(state, CommandType.RESET_GRID, grid_ops.reset_grid(state.grid))


def generate_maze(
    state: EditorState,
    seed: int | None = None,
    settings: MazeSettings | None = None,
) -> EditorState:
    """Replace the layout with a generated maze, preserving start and end."""
    state = _finish_drag(state)
    return _commit(state, CommandType.GENERATE_MAZE, state.grid, build_maze(state.grid, seed, settings))


def prepare_grid(state: EditorState) -> EditorState:
    """Clear search annotations before a run. Not recorded in history."""
    state = _finish_drag(state)
    return replace(state, grid=grid_ops.prepare_grid(state.grid))


def ready_to_run(state: EditorState) -> EditorState:
    """
    Validate the grid for a pathfinding run and clear stale results.

    Raises:
        GridValidationError: If start or end is missing; the state is left untouched
    """
    start, end = grid_ops.find_special_cells(state.grid)
    if start is None or end is None:
        missing = [name for name, cell in (("start", start), ("end", end)) if cell is None]
        logger.info("ready_to_run: grid is missing %s", " and ".join(missing))
        raise GridValidationError(f"Grid has no {' or '.join(missing)} cell")
    return prepare_grid(state)


def paint_nodes(
    state: EditorState,
    node_ids: Iterable[int],
    paint_state: CellState,
) -> EditorState:
    """
    Paint a pathfinding result (linear node indices) back onto the grid.

    Start and end cells keep their state; indices outside the grid are skipped.
    The whole sequence is recorded as one UPDATE_CELLS command.

    Raises:
        ValueError: If paint_state is not PATH or VISITED
    """
    if paint_state not in (CellState.PATH, CellState.VISITED):
        raise ValueError(
            f"Invalid paint state: {paint_state}\n"
            f"  Only {CellState.PATH.value!r} and {CellState.VISITED.value!r} can be painted"
        )

    grid = state.grid
    edits: list[CellEdit] = []
    for node in node_ids:
        if not 0 <= node < grid.rows * grid.cols:
            logger.debug("Ignoring out-of-range node %d", node)
            continue
        x, y = grid_ops.node_position(node, grid.cols)
        if grid.cells[y][x].state in SPECIAL_STATES:
            continue
        edits.append(CellEdit(x, y, paint_state))

    return update_cell(_finish_drag(state), edits, commit=True)


def undo(state: EditorState) -> EditorState:
    state = _finish_drag(state)
    new_history, deltas = history.undo(state.history)
    if deltas is None:
        return state
    logger.debug("undo: reverting %d cells", len(deltas))
    return EditorState(history.apply_deltas_reverse(state.grid, deltas), new_history)


def redo(state: EditorState) -> EditorState:
    state = _finish_drag(state)
    new_history, deltas = history.redo(state.history)
    if deltas is None:
        return state
    logger.debug("redo: reapplying %d cells", len(deltas))
    return EditorState(history.apply_deltas_forward(state.grid, deltas), new_history)


def can_undo(state: EditorState) -> bool:
    return history.can_undo(state.history)


def can_redo(state: EditorState) -> bool:
    return history.can_redo(state.history)


# =============================================================================
# Mutable Owner
# =============================================================================


class GridEditor:
    """Single mutable owner of an EditorState."""

    def __init__(self, rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS) -> None:
        self.state = create_editor(rows, cols)

    @property
    def grid(self) -> Grid:
        return self.state.grid

    @property
    def rows(self) -> int:
        return self.state.grid.rows

    @property
    def cols(self) -> int:
        return self.state.grid.cols

    def resize(self, rows: int, cols: int) -> None:
        self.state = resize(self.state, rows, cols)

    def update_cell(self, cells: EditLike | Iterable[EditLike], commit: bool = True) -> None:
        self.state = update_cell(self.state, cells, commit)

    def clear_walls(self) -> None:
        self.state = clear_walls(self.state)

    def clear_path(self) -> None:
        self.state = clear_path(self.state)

    def reset_grid(self) -> None:
        self.state = reset_grid(self.state)

    def generate_maze(self, seed: int | None = None, settings: MazeSettings | None = None) -> None:
        self.state = generate_maze(self.state, seed, settings)

    def prepare_grid(self) -> None:
        self.state = prepare_grid(self.state)

    def ready_to_run(self) -> None:
        self.state = ready_to_run(self.state)

    def paint_nodes(self, node_ids: Iterable[int], paint_state: CellState) -> None:
        self.state = paint_nodes(self.state, node_ids, paint_state)

    def undo(self) -> None:
        self.state = undo(self.state)

    def redo(self) -> None:
        self.state = redo(self.state)

    def can_undo(self) -> bool:
        return can_undo(self.state)

    def can_redo(self) -> bool:
        return can_redo(self.state)

    def wall_bitmap(self) -> tuple[bool, ...]:
        return grid_ops.wall_bitmap(self.state.grid)

    def special_node_ids(self) -> tuple[int | None, int | None]:
        return grid_ops.special_node_ids(self.state.grid)
