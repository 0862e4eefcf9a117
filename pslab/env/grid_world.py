"""Editable grid world: layout, legality, rewards and terminal cells."""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Sequence

from pslab.params import SimParams
from pslab.types import CELL_KINDS, CellKind, Position, WALL_PENALTY

LOGGER = logging.getLogger(__name__)

Cells = List[List[CellKind]]


def make_grid(width: int, height: int, preset: str) -> Cells:
    """Build one of the deterministic preset layouts, indexed ``cells[y][x]``."""
    w, h = width, height
    grid: Cells = [["empty" for _ in range(w)] for _ in range(h)]
    if preset == "open":
        grid[0][w - 1] = "goal"
        grid[h - 1][0] = "start"
        grid[h - 1][w - 2] = "lava"
    elif preset == "corridor":
        mid = h // 2
        for y in range(1, h - 1):
            for x in range(1, w - 1):
                grid[y][x] = "empty" if y == mid else "wall"
        grid[h - 1][0] = "start"
        grid[mid][w - 1] = "goal"
    elif preset == "two-rooms":
        door_y = h // 2
        mid = w // 2
        for y in range(h):
            if y == door_y:
                continue
            grid[y][mid] = "wall"
        grid[h - 1][1] = "start"
        grid[0][w - 2] = "goal"
        grid[h - 2][2] = "lava"
    elif preset == "maze":
        for y in range(1, h - 1, 2):
            for x in range(1, w - 1):
                grid[y][x] = "wall"
            gap = 1 + ((y * 3) % (w - 2))
            grid[y][gap] = "empty"
        grid[h - 1][0] = "start"
        grid[0][w - 1] = "goal"
    return grid


class GridWorld:
    """Cell layout plus the reward/terminal/legality rules evaluated on it.

    Edits are accepted at any time and are deliberately permissive: nothing
    checks that exactly one start or goal exists.
    """

    def __init__(self, cells: Sequence[Sequence[CellKind]]):
        if not cells or not cells[0]:
            raise ValueError("Grid must have at least one row and column")
        self.cells: Cells = [list(row) for row in cells]
        self.height = len(self.cells)
        self.width = len(self.cells[0])

    @classmethod
    def from_preset(cls, width: int, height: int, preset: str) -> "GridWorld":
        world = cls(make_grid(width, height, preset))
        if not any(kind == "goal" for _, _, kind in world.iter_cells()):
            LOGGER.warning("Preset %r at %sx%s has no goal cell", preset, width, height)
        return world

    # ------------------------------------------------------------------ queries
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def pick_cell(self, x: int, y: int) -> CellKind:
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell ({x}, {y}) outside {self.width}x{self.height} grid")
        return self.cells[y][x]

    def is_legal(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.cells[y][x] != "wall"

    def is_terminal(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return False
        return self.cells[y][x] in ("goal", "lava")

    def reward(self, x: int, y: int, params: SimParams) -> float:
        kind = self.cells[y][x] if self.in_bounds(x, y) else None
        if kind == "goal":
            return params.goal_reward
        if kind == "lava":
            return params.lava_penalty
        if kind == "wall":
            return WALL_PENALTY
        return params.step_cost

    def find_start(self) -> Optional[Position]:
        found: Optional[Position] = None
        for x, y, kind in self.iter_cells():
            if kind == "start":
                found = (x, y)
        return found

    def iter_cells(self) -> Iterator[tuple[int, int, CellKind]]:
        for y, row in enumerate(self.cells):
            for x, kind in enumerate(row):
                yield x, y, kind

    def copy_cells(self) -> Cells:
        return [list(row) for row in self.cells]

    # ---------------------------------------------------------------- mutations
    def set_cell(self, x: int, y: int, kind: CellKind) -> None:
        if kind not in CELL_KINDS:
            raise ValueError(f"Unknown cell kind {kind!r}")
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell ({x}, {y}) outside {self.width}x{self.height} grid")
        self.cells[y][x] = kind
