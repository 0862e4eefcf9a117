"""Action application with optional wind and bump-into-wall semantics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from pslab.env.grid_world import GridWorld
from pslab.types import ACTION_DELTAS, NUM_ACTIONS, Position

WIND_CLOCKWISE_P = 0.1
WIND_COUNTER_P = 0.1


@dataclass(slots=True)
class Move:
    position: Position
    action: int  # as selected
    realized: int  # after wind
    blocked: bool = False


class TransitionModel:
    def __init__(self, grid: GridWorld, rng: Optional[np.random.Generator] = None):
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()

    def perturb(self, action: int, wind: bool) -> int:
        """Rotate the action one step around the up/right/down/left cycle.

        Clockwise and counter-clockwise misfires each happen with p=0.1; the
        draw is made only when wind is on.
        """
        if not wind:
            return action
        r = self.rng.random()
        if r < WIND_CLOCKWISE_P:
            return (action + 1) % NUM_ACTIONS
        if r < WIND_CLOCKWISE_P + WIND_COUNTER_P:
            return (action + NUM_ACTIONS - 1) % NUM_ACTIONS
        return action

    def step(self, x: int, y: int, action: int, wind: bool = False) -> Move:
        realized = self.perturb(action, wind)
        dx, dy = ACTION_DELTAS[realized]
        nx, ny = x + dx, y + dy
        if not self.grid.is_legal(nx, ny):
            return Move(position=(x, y), action=action, realized=realized, blocked=True)
        return Move(position=(nx, ny), action=action, realized=realized)

    def attempt_move(self, x: int, y: int, action: int, wind: bool = False) -> Position:
        return self.step(x, y, action, wind).position
