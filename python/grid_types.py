"""
Shared type definitions for the grid state engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Protocol


class CellState(Enum):
    """State of a single grid cell."""

    EMPTY = "empty"
    START = "start"
    END = "end"
    WALL = "wall"
    PATH = "path"  # Painted back from a pathfinding run
    VISITED = "visited"  # Painted back from a pathfinding run


SPECIAL_STATES = (CellState.START, CellState.END)
SEARCH_STATES = (CellState.PATH, CellState.VISITED)


# =============================================================================
# Grid Definition Types
# =============================================================================


@dataclass(frozen=True)
class Cell:
    """A grid position with a stable id and a state."""

    id: int
    x: int
    y: int
    state: CellState


@dataclass(frozen=True)
class Grid:
    """A rectangular matrix of cells, indexed as cells[y][x]."""

    cells: tuple[tuple[Cell, ...], ...]

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    def __iter__(self) -> Iterator[Cell]:
        """Iterate cells in row-major order."""
        for row in self.cells:
            yield from row


class EditLike(Protocol):
    """Anything carrying coordinates and a requested state (None for a plain click)."""

    @property
    def x(self) -> int: ...

    @property
    def y(self) -> int: ...

    @property
    def state(self) -> CellState | None: ...


@dataclass(frozen=True)
class CellEdit:
    """A raw coordinate event reported by the caller."""

    x: int
    y: int
    state: CellState | None = None  # Only PATH / VISITED bypass the toggle rules


# =============================================================================
# History Types
# =============================================================================


class CommandType(Enum):
    """Kind of mutation recorded in the history."""

    UPDATE_CELLS = "UPDATE_CELLS"
    CLEAR_WALLS = "CLEAR_WALLS"
    CLEAR_PATH = "CLEAR_PATH"
    RESET_GRID = "RESET_GRID"
    GENERATE_MAZE = "GENERATE_MAZE"


@dataclass(frozen=True)
class CellDelta:
    """One cell's change between two grid versions."""

    x: int
    y: int
    previous_state: CellState
    new_state: CellState


@dataclass(frozen=True)
class Command:
    """An undoable action: only the cells that changed."""

    type: CommandType
    deltas: tuple[CellDelta, ...]


@dataclass(frozen=True)
class HistoryState:
    """Linear undo/redo timeline. The last element of each stack is its top."""

    undo_stack: tuple[Command, ...] = ()
    redo_stack: tuple[Command, ...] = ()
