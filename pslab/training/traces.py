"""Reward/return series kept for display."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Tuple

REWARD_TRACE_CAP = 10
CUMULATIVE_TRACE_CAP = 1000


@dataclass(slots=True)
class TracePoint:
    index: int  # tick t, or episode number for returns
    value: float


class TraceSeries:
    """Append-only series; with a cap, the oldest points fall off the front."""

    def __init__(self, cap: Optional[int] = None) -> None:
        self.cap = cap
        self.points: Deque[TracePoint] = deque(maxlen=cap)

    def append(self, index: int, value: float) -> None:
        self.points.append(TracePoint(index=index, value=float(value)))

    def clear(self) -> None:
        self.points.clear()

    def __len__(self) -> int:
        return len(self.points)

    def last(self) -> Optional[TracePoint]:
        return self.points[-1] if self.points else None

    def to_list(self) -> List[Tuple[int, float]]:
        return [(p.index, p.value) for p in self.points]


class RewardTraces:
    """Instantaneous (t, R), cumulative (t, C) and per-episode (ep, G) series."""

    def __init__(
        self,
        reward_cap: int = REWARD_TRACE_CAP,
        cumulative_cap: int = CUMULATIVE_TRACE_CAP,
    ) -> None:
        self.rewards = TraceSeries(reward_cap)
        self.cumulative = TraceSeries(cumulative_cap)
        self.episode_returns = TraceSeries(None)

    def record_step(self, t: int, reward: float, total: float) -> None:
        self.rewards.append(t, reward)
        self.cumulative.append(t, total)

    def record_episode(self, episode: int, episode_return: float) -> None:
        self.episode_returns.append(episode, episode_return)

    def clear(self) -> None:
        self.rewards.clear()
        self.cumulative.clear()
        self.episode_returns.clear()
