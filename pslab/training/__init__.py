"""Simulation loop utilities."""

from .driver import TickDriver
from .episode import EpisodeController, LabSnapshot, TickResult
from .traces import RewardTraces, TracePoint, TraceSeries

__all__ = [
    "TickDriver",
    "EpisodeController",
    "LabSnapshot",
    "TickResult",
    "RewardTraces",
    "TracePoint",
    "TraceSeries",
]
