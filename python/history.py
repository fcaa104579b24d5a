"""
Delta-based undo/redo history.

Commands store only the cells that changed between two grid versions, never
full grid snapshots. All functions are pure and return new HistoryState values.
"""

from __future__ import annotations

import logging
from typing import Sequence

from grid_ops import replace_states
from grid_types import CellDelta, Command, CommandType, Grid, HistoryState

logger = logging.getLogger(__name__)


def create_empty_history() -> HistoryState:
    return HistoryState()


def clear_history() -> HistoryState:
    """Drop both stacks, e.g. when the grid is replaced by one of another shape."""
    return create_empty_history()


def extract_deltas(previous_grid: Grid, new_grid: Grid) -> tuple[CellDelta, ...]:
    """
    Diff two grids cell by cell, in row-major order.

    Raises:
        ValueError: If the grids differ in shape
    """
    if (previous_grid.rows, previous_grid.cols) != (new_grid.rows, new_grid.cols):
        raise ValueError(
            f"Cannot diff grids of different shapes\n"
            f"  Previous: {previous_grid.rows}x{previous_grid.cols}\n"
            f"  New: {new_grid.rows}x{new_grid.cols}"
        )

    deltas: list[CellDelta] = []
    for previous_row, new_row in zip(previous_grid.cells, new_grid.cells):
        if previous_row is new_row:
            continue  # Shared row, nothing changed
        for previous, new in zip(previous_row, new_row):
            if previous.state is not new.state:
                deltas.append(CellDelta(new.x, new.y, previous.state, new.state))
    return tuple(deltas)


def create_command(command_type: CommandType, previous_grid: Grid, new_grid: Grid) -> Command:
    return Command(command_type, extract_deltas(previous_grid, new_grid))


def execute_command(history: HistoryState, command: Command) -> HistoryState:
    """Push the command onto the undo stack. Any new command invalidates redo."""
    logger.debug("Recording %s with %d deltas", command.type.value, len(command.deltas))
    return HistoryState(undo_stack=history.undo_stack + (command,), redo_stack=())


def undo(history: HistoryState) -> tuple[HistoryState, tuple[CellDelta, ...] | None]:
    """
    Move the most recent command to the redo stack.

    Returns:
        (new_history, deltas to apply with apply_deltas_reverse), or
        (history, None) when there is nothing to undo
    """
    if not history.undo_stack:
        return (history, None)

    command = history.undo_stack[-1]
    new_history = HistoryState(
        undo_stack=history.undo_stack[:-1],
        redo_stack=history.redo_stack + (command,),
    )
    return (new_history, command.deltas)


def redo(history: HistoryState) -> tuple[HistoryState, tuple[CellDelta, ...] | None]:
    """
    Move the most recently undone command back to the undo stack.

    Returns:
        (new_history, deltas to apply with apply_deltas_forward), or
        (history, None) when there is nothing to redo
    """
    if not history.redo_stack:
        return (history, None)

    command = history.redo_stack[-1]
    new_history = HistoryState(
        undo_stack=history.undo_stack + (command,),
        redo_stack=history.redo_stack[:-1],
    )
    return (new_history, command.deltas)


def apply_deltas_reverse(grid: Grid, deltas: Sequence[CellDelta]) -> Grid:
    """Restore each delta's previous state (undo)."""
    return replace_states(grid, {(d.x, d.y): d.previous_state for d in deltas})


def apply_deltas_forward(grid: Grid, deltas: Sequence[CellDelta]) -> Grid:
    """Apply each delta's new state (redo)."""
    return replace_states(grid, {(d.x, d.y): d.new_state for d in deltas})


def can_undo(history: HistoryState) -> bool:
    return len(history.undo_stack) > 0


def can_redo(history: HistoryState) -> bool:
    return len(history.redo_stack) > 0


def undo_stack_size(history: HistoryState) -> int:
    return len(history.undo_stack)


def redo_stack_size(history: HistoryState) -> int:
    return len(history.redo_stack)
