"""Per-cell, per-action associative memory (h) with a glow eligibility trace (g)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np
import torch

from pslab.types import G_MAX, G_MIN, H_MAX, H_MIN, NUM_ACTIONS


@dataclass(slots=True)
class MemorySnapshot:
    h: np.ndarray  # (H, W, 4) float32
    g: np.ndarray  # (H, W, 4) float32


class MemoryField:
    """Dense (height, width, 4) tensors indexed ``[y, x, action]``.

    ``h`` starts at 1 everywhere (uniform softmax) and ``g`` at 0. Decay and
    reinforcement touch the whole field every tick; ``normalize`` restores the
    h in [0.1, 10], g in [0, 5] bounds afterwards.
    """

    def __init__(self, width: int, height: int, device: Optional[torch.device] = None):
        self.device = device or torch.device("cpu")
        self.width = 0
        self.height = 0
        self.h = torch.empty(0)
        self.g = torch.empty(0)
        self.reset(width, height)

    # ---------------------------------------------------------------- lifecycle
    def reset(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        shape = (height, width, NUM_ACTIONS)
        self.h = torch.ones(shape, dtype=torch.float32, device=self.device)
        self.g = torch.zeros(shape, dtype=torch.float32, device=self.device)

    def reset_episode_trace(self) -> None:
        self.g.zero_()

    # ------------------------------------------------------------------ lookups
    def get_h(self, x: int, y: int, a: int) -> float:
        return float(self.h[y, x, a])

    def get_g(self, x: int, y: int, a: int) -> float:
        return float(self.g[y, x, a])

    def action_values(self, x: int, y: int) -> torch.Tensor:
        return self.h[y, x].clone()

    def preferences(self, x: int, y: int) -> torch.Tensor:
        """h-values of one cell scaled to sum to 1 (inspector view, not the policy)."""
        hs = self.h[y, x].to(torch.float64)
        total = float(hs.sum())
        if total <= 0:
            return torch.full((NUM_ACTIONS,), 1.0 / NUM_ACTIONS, dtype=torch.float64)
        return hs / total

    def max_glow(self, x: int, y: int) -> float:
        return float(self.g[y, x].max())

    # ---------------------------------------------------------------- updates
    def decay_glow(self, eta: float) -> None:
        self.g.mul_(1.0 - eta)

    def add_glow(self, x: int, y: int, a: int, amount: float = 1.0) -> None:
        self.g[y, x, a] += amount

    def reinforce(self, reward: float, gamma: float, lam: float) -> None:
        # h <- h + (-gamma*h + gamma*1 + g*reward*lam)
        delta = self.h.mul(-gamma).add_(gamma).add_(self.g, alpha=reward * lam)
        self.h.add_(delta)

    def normalize(self) -> None:
        self.h.clamp_(H_MIN, H_MAX)
        self.g.clamp_(G_MIN, G_MAX)

    # -------------------------------------------------------------- inspection
    def snapshot(self) -> MemorySnapshot:
        return MemorySnapshot(
            h=self.h.detach().cpu().numpy().copy(),
            g=self.g.detach().cpu().numpy().copy(),
        )

    @property
    def shape(self) -> tuple[int, int, int]:
        return (self.height, self.width, NUM_ACTIONS)
