"""Utility exports."""

from .maps import ascii_grid, glow_map

__all__ = ["ascii_grid", "glow_map"]
