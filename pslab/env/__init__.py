"""Environment exports."""

from .grid_world import GridWorld, make_grid
from .transition import Move, TransitionModel

__all__ = ["GridWorld", "make_grid", "Move", "TransitionModel"]
