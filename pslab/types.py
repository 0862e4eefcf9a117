"""Core data contracts shared across the lab stack."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Literal, Tuple

CellKind = Literal["empty", "wall", "goal", "lava", "start"]
Preset = Literal["open", "corridor", "two-rooms", "maze"]

CELL_KINDS: Tuple[CellKind, ...] = ("empty", "wall", "goal", "lava", "start")
PRESETS: Tuple[Preset, ...] = ("open", "corridor", "two-rooms", "maze")

# Order matters: wind rotates by +/-1 around this cycle.
ACTIONS: Tuple[str, ...] = ("up", "right", "down", "left")
NUM_ACTIONS = len(ACTIONS)
UP, RIGHT, DOWN, LEFT = range(NUM_ACTIONS)

ACTION_DELTAS: Dict[int, Tuple[int, int]] = {
    UP: (0, -1),
    RIGHT: (1, 0),
    DOWN: (0, 1),
    LEFT: (-1, 0),
}

Position = Tuple[int, int]  # (x, y)

WALL_PENALTY = -0.2
H_MIN, H_MAX = 0.1, 10.0
G_MIN, G_MAX = 0.0, 5.0
TAU_FLOOR = 0.01


class RunState(Enum):
    RUNNING = "running"
    PAUSED = "paused"


__all__ = [
    "CellKind",
    "Preset",
    "CELL_KINDS",
    "PRESETS",
    "ACTIONS",
    "NUM_ACTIONS",
    "UP",
    "RIGHT",
    "DOWN",
    "LEFT",
    "ACTION_DELTAS",
    "Position",
    "WALL_PENALTY",
    "H_MIN",
    "H_MAX",
    "G_MIN",
    "G_MAX",
    "TAU_FLOOR",
    "RunState",
]
