"""Epsilon-greedy exploration over a temperature softmax of h-values."""

from __future__ import annotations

from typing import Optional

import numpy as np
import torch

from pslab.memory import MemoryField
from pslab.types import NUM_ACTIONS, TAU_FLOOR


class ActionPolicy:
    def __init__(self, memory: MemoryField, rng: Optional[np.random.Generator] = None):
        self.memory = memory
        self.rng = rng if rng is not None else np.random.default_rng()

    def probabilities(self, x: int, y: int, tau: float) -> torch.Tensor:
        """Temperature softmax over the cell's h-values (torch shifts by the max)."""
        hs = self.memory.action_values(x, y).to(torch.float64)
        t = max(TAU_FLOOR, float(tau))
        return torch.softmax(hs / t, dim=0)

    def select_action(self, x: int, y: int, epsilon: float, tau: float) -> int:
        if self.rng.random() < epsilon:
            return int(self.rng.integers(NUM_ACTIONS))
        probs = self.probabilities(x, y, tau)
        r = self.rng.random()
        acc = 0.0
        for a in range(NUM_ACTIONS):
            acc += float(probs[a])
            if r <= acc:
                return a
        return 0

    def greedy_action(self, x: int, y: int) -> int:
        # torch.argmax picks the first maximum on ties
        return int(torch.argmax(self.memory.action_values(x, y)))
