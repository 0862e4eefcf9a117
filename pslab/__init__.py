"""Projective-simulation grid lab: grid world, glow memory and tick loop."""

from pslab.env import GridWorld, TransitionModel, make_grid
from pslab.memory import MemoryField
from pslab.params import GridConfig, SimParams
from pslab.policy import ActionPolicy
from pslab.training import EpisodeController, LabSnapshot, TickDriver, TickResult

__all__ = [
    "GridWorld",
    "TransitionModel",
    "make_grid",
    "MemoryField",
    "GridConfig",
    "SimParams",
    "ActionPolicy",
    "EpisodeController",
    "LabSnapshot",
    "TickDriver",
    "TickResult",
]
