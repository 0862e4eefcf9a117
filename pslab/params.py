"""Parameter snapshots, clamped at the configuration boundary.

Everything the UI (or CLI) hands the lab passes through these dataclasses, so
the core never sees an out-of-range value. Non-numeric input falls back to the
field default rather than raising.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from pslab.types import PRESETS, Preset

LOGGER = logging.getLogger(__name__)


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def coerce_float(value: Any, default: float) -> float:
    try:
        out = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(out):
        return default
    return out


def coerce_int(value: Any, default: int) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


def coerce_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        return default
    if value is None:
        return default
    return bool(value)


# (lo, hi, default) for every numeric learning/reward parameter.
PARAM_RANGES: Dict[str, tuple[float, float, float]] = {
    "step_cost": (-0.2, 0.0, -0.01),
    "goal_reward": (0.1, 10.0, 1.0),
    "lava_penalty": (-10.0, -0.1, -1.0),
    "gamma": (0.01, 1.0, 0.01),
    "lam": (0.0, 10.0, 1.0),
    "eta": (0.0, 1.0, 0.05),
    "epsilon": (0.0, 1.0, 0.1),
    "tau": (0.05, 5.0, 1.0),
}

GRID_WIDTH_RANGE = (4, 30)
GRID_HEIGHT_RANGE = (4, 22)
TICK_RATE_RANGE = (1.0, 40.0)


@dataclass(frozen=True, slots=True)
class SimParams:
    """One consistent set of reward and learning parameters.

    Instances are immutable; a tick reads a single instance from start to end,
    and updates swap in a new one.
    """

    step_cost: float = -0.01
    goal_reward: float = 1.0
    lava_penalty: float = -1.0
    wind: bool = False
    gamma: float = 0.01  # memory damping
    lam: float = 1.0  # reward coupling
    eta: float = 0.05  # glow decay
    epsilon: float = 0.1
    tau: float = 1.0

    def __post_init__(self) -> None:
        for name, (lo, hi, default) in PARAM_RANGES.items():
            raw = getattr(self, name)
            value = clamp(coerce_float(raw, default), lo, hi)
            object.__setattr__(self, name, value)
        object.__setattr__(self, "wind", coerce_bool(self.wind, False))

    def replace(self, **changes: Any) -> "SimParams":
        unknown = set(changes) - {f.name for f in dataclasses.fields(self)}
        if unknown:
            raise KeyError(f"Unknown parameters: {sorted(unknown)}")
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "SimParams":
        data = dict(data or {})
        known = {f.name for f in dataclasses.fields(cls)}
        ignored = sorted(set(data) - known)
        if ignored:
            LOGGER.warning("Ignoring unknown params: %s", ignored)
        return cls(**{k: v for k, v in data.items() if k in known})

    def as_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


@dataclass(frozen=True, slots=True)
class GridConfig:
    width: int = 5
    height: int = 5
    preset: Preset = "open"
    tick_rate: float = 12.0
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        w_lo, w_hi = GRID_WIDTH_RANGE
        h_lo, h_hi = GRID_HEIGHT_RANGE
        width = int(clamp(coerce_int(self.width, 6), w_lo, w_hi))
        height = int(clamp(coerce_int(self.height, 6), h_lo, h_hi))
        rate = clamp(coerce_float(self.tick_rate, 12.0), *TICK_RATE_RANGE)
        preset = self.preset if self.preset in PRESETS else "open"
        if preset != self.preset:
            LOGGER.warning("Unknown preset %r, falling back to 'open'", self.preset)
        seed = None if self.seed is None else coerce_int(self.seed, 0)
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)
        object.__setattr__(self, "tick_rate", rate)
        object.__setattr__(self, "preset", preset)
        object.__setattr__(self, "seed", seed)

    @property
    def tick_interval(self) -> float:
        """Seconds between scheduled ticks (never faster than 20 ms)."""
        return tick_interval(self.tick_rate)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "GridConfig":
        data = dict(data or {})
        return cls(
            width=data.get("width", 5),
            height=data.get("height", 5),
            preset=data.get("preset", "open"),
            tick_rate=data.get("tick_rate", 12.0),
            seed=data.get("seed"),
        )


def tick_interval(rate: float) -> float:
    rate = max(1.0, coerce_float(rate, 1.0))
    return max(0.020, 1.0 / rate)


__all__ = [
    "SimParams",
    "GridConfig",
    "PARAM_RANGES",
    "clamp",
    "coerce_float",
    "coerce_int",
    "coerce_bool",
    "tick_interval",
]
