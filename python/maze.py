"""
Maze generation by recursive backtracking, with connectivity repair.

Generation runs six steps in a fixed order: seed, initialize, carve, open up
the special cells, guarantee a start->end path, braid. Every random draw comes
from one SeededRandom instance, so a seed and an input grid fully determine the
output. Reordering the steps changes the number of draws each step sees and
therefore the resulting maze.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import MutableSequence, TypeVar

from grid_ops import find_special_cells, grid_from_states, state_matrix
from grid_types import CellState, Grid

logger = logging.getLogger(__name__)

T = TypeVar("T")

LCG_MULTIPLIER = 9301
LCG_INCREMENT = 49297
LCG_MODULUS = 233280

# Clockwise from north: up, right, down, left
NEIGHBOUR_OFFSETS: tuple[tuple[int, int], ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))
LATTICE_OFFSETS: tuple[tuple[int, int], ...] = tuple((dx * 2, dy * 2) for dx, dy in NEIGHBOUR_OFFSETS)

StateMatrix = list[list[CellState]]


@dataclass(frozen=True)
class MazeSettings:
    """Tunables for maze generation."""

    opening_chance: float = 0.5  # A wall next to start/end is cleared when a draw exceeds this
    corridor_bias: float = 0.3  # Fallback corridor moves along x when a draw exceeds this
    braid_chance: float = 0.1  # Chance of considering each interior wall for removal
    braid_max_open_neighbours: int = 2


class SeededRandom:
    """
    Linear congruential generator: state = (state * 9301 + 49297) mod 233280.

    Instances are passed explicitly through the generation steps so that
    generation is reentrant and reproducible from a single seed.
    """

    def __init__(self, seed: int) -> None:
        self.seed = seed
        self.state = seed

    def random(self) -> float:
        """Advance the generator and return a float in [0, 1)."""
        self.state = (self.state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self.state / LCG_MODULUS

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Fisher-Yates shuffle in place."""
        for i in range(len(items) - 1, 0, -1):
            j = int(self.random() * (i + 1))
            items[i], items[j] = items[j], items[i]


def generate_maze(grid: Grid, seed: int | None = None, settings: MazeSettings | None = None) -> Grid:
    """
    Generate a maze over the grid, keeping its start and end cells in place.

    Args:
        grid: Source grid; only the positions of START and END are read
        seed: LCG seed (defaults to wall-clock milliseconds)
        settings: Generation tunables

    Returns:
        New grid of walls and passages in which start and end, when both
        exist, are connected
    """
    if seed is None:
        seed = time.time_ns() // 1_000_000
    if settings is None:
        settings = MazeSettings()

    rng = SeededRandom(seed)
    start_cell, end_cell = find_special_cells(grid)
    start = (start_cell.x, start_cell.y) if start_cell is not None else None
    end = (end_cell.x, end_cell.y) if end_cell is not None else None

    states = _initialize(state_matrix(grid))
    origin = _carve_origin(start, grid.rows, grid.cols)
    _carve_passages(states, origin, rng)
    _open_special_cells(states, start, end, rng, settings)
    corridor = _ensure_path(states, start, end, rng, settings)
    _braid(states, rng, settings)

    logger.info(
        "generate_maze: %dx%d seed=%d origin=%s corridor_carved=%s",
        grid.rows,
        grid.cols,
        seed,
        origin,
        corridor,
    )
    return grid_from_states(states)


def has_path(grid: Grid) -> bool:
    """True if START and END both exist and are connected through non-wall cells."""
    start_cell, end_cell = find_special_cells(grid)
    if start_cell is None or end_cell is None:
        return False
    return _is_reachable(
        state_matrix(grid),
        (start_cell.x, start_cell.y),
        (end_cell.x, end_cell.y),
    )


# =============================================================================
# Generation Steps
# =============================================================================


def _in_bounds(states: StateMatrix, x: int, y: int) -> bool:
    return 0 <= y < len(states) and 0 <= x < len(states[0])


def _is_special(state: CellState) -> bool:
    return state is CellState.START or state is CellState.END


def _initialize(states: StateMatrix) -> StateMatrix:
    """Everything becomes a wall except the special cells."""
    return [[s if _is_special(s) else CellState.WALL for s in row] for row in states]


def _snap_to_lattice(value: int, size: int) -> int:
    # Passages live on odd coordinates; tiny grids fall back to the last index
    if value % 2 == 0:
        value = max(1, value - 1)
    return min(value, size - 1)


def _carve_origin(start: tuple[int, int] | None, rows: int, cols: int) -> tuple[int, int]:
    x, y = start if start is not None else (1, 1)
    return (_snap_to_lattice(x, cols), _snap_to_lattice(y, rows))


def _carve_passages(states: StateMatrix, origin: tuple[int, int], rng: SeededRandom) -> None:
    """
    Depth-first carving on the 2-cell lattice.

    Uses an explicit stack of [x, y, shuffled directions, next direction index]
    frames; directions are shuffled when a cell is entered, exactly as a
    recursive implementation would.
    """
    rows, cols = len(states), len(states[0])
    visited = [[False] * cols for _ in range(rows)]

    def enter(x: int, y: int) -> list:
        visited[y][x] = True
        if not _is_special(states[y][x]):
            states[y][x] = CellState.EMPTY
        directions = list(LATTICE_OFFSETS)
        rng.shuffle(directions)
        return [x, y, directions, 0]

    stack = [enter(*origin)]
    while stack:
        frame = stack[-1]
        x, y, directions, index = frame
        if index == len(directions):
            stack.pop()
            continue
        frame[3] = index + 1

        dx, dy = directions[index]
        nx, ny = x + dx, y + dy
        if _in_bounds(states, nx, ny) and not visited[ny][nx]:
            wx, wy = x + dx // 2, y + dy // 2
            if not _is_special(states[wy][wx]):
                states[wy][wx] = CellState.EMPTY
            stack.append(enter(nx, ny))


def _open_special_cells(
    states: StateMatrix,
    start: tuple[int, int] | None,
    end: tuple[int, int] | None,
    rng: SeededRandom,
    settings: MazeSettings,
) -> None:
    """Randomly knock down walls around start and end so neither is boxed in."""
    for position, state in ((start, CellState.START), (end, CellState.END)):
        if position is None:
            continue
        x, y = position
        states[y][x] = state
        for dx, dy in NEIGHBOUR_OFFSETS:
            nx, ny = x + dx, y + dy
            # Draw only for in-bounds walls
            if (
                _in_bounds(states, nx, ny)
                and states[ny][nx] is CellState.WALL
                and rng.random() > settings.opening_chance
            ):
                states[ny][nx] = CellState.EMPTY


def _is_reachable(states: StateMatrix, start: tuple[int, int], end: tuple[int, int]) -> bool:
    """Breadth-first search over non-wall cells."""
    seen = {start}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        if (x, y) == end:
            return True
        for dx, dy in NEIGHBOUR_OFFSETS:
            nx, ny = x + dx, y + dy
            if (
                _in_bounds(states, nx, ny)
                and (nx, ny) not in seen
                and states[ny][nx] is not CellState.WALL
            ):
                seen.add((nx, ny))
                queue.append((nx, ny))
    return False


def _ensure_path(
    states: StateMatrix,
    start: tuple[int, int] | None,
    end: tuple[int, int] | None,
    rng: SeededRandom,
    settings: MazeSettings,
) -> bool:
    """
    Carve a direct corridor from start to end if they are not connected.

    Returns:
        True if a corridor had to be carved
    """
    if start is None or end is None or _is_reachable(states, start, end):
        return False

    cx, cy = start
    ex, ey = end
    while (cx, cy) != (ex, ey):
        # A draw happens only when the x-gap is open in that direction
        if cx < ex and rng.random() > settings.corridor_bias:
            cx += 1
        elif cx > ex and rng.random() > settings.corridor_bias:
            cx -= 1
        elif cy < ey:
            cy += 1
        elif cy > ey:
            cy -= 1
        elif cx < ex:
            cx += 1
        else:
            cx -= 1

        if states[cy][cx] is CellState.WALL:
            states[cy][cx] = CellState.EMPTY

    logger.debug("Carved fallback corridor from %s to %s", start, end)
    return True


def _braid(states: StateMatrix, rng: SeededRandom, settings: MazeSettings) -> None:
    """Remove a few interior walls to create loops, avoiding open rooms."""
    rows, cols = len(states), len(states[0])
    for y in range(1, rows - 1):
        for x in range(1, cols - 1):
            if states[y][x] is not CellState.WALL or rng.random() >= settings.braid_chance:
                continue
            open_neighbours = sum(
                1
                for dx, dy in NEIGHBOUR_OFFSETS
                if states[y + dy][x + dx] is CellState.EMPTY
            )
            if open_neighbours <= settings.braid_max_open_neighbours:
                states[y][x] = CellState.EMPTY
