"""Tick loop and episode bookkeeping.

The controller is the single owner of simulation state: grid, memory, agent
position, counters and traces. Consumers mutate it only through the control
and edit methods below and read it back through :meth:`EpisodeController.snapshot`.
Every public method takes the same re-entrant lock, so a tick never observes a
half-applied edit, parameter change or resize.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, List, Optional

import numpy as np

from pslab.env import GridWorld, TransitionModel
from pslab.memory import MemoryField
from pslab.params import GridConfig, SimParams
from pslab.policy import ActionPolicy
from pslab.training.traces import RewardTraces
from pslab.types import CellKind, Position, Preset, RunState

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class TickResult:
    step: int
    position: Position
    action: int
    realized_action: int
    next_position: Position
    reward: float
    terminal: bool
    episode: int  # episode the tick belonged to
    episode_return: Optional[float] = None  # set when the tick ended the episode


@dataclass(slots=True)
class LabSnapshot:
    """Read-only copy of everything the presentation layer displays."""

    agent: Position
    start: Position
    episode: int
    step: int
    current_return: float
    total_return: float
    reward_trace: List[tuple[int, float]]
    cumulative_trace: List[tuple[int, float]]
    episode_returns: List[tuple[int, float]]
    cells: List[List[CellKind]]
    h: np.ndarray
    g: np.ndarray
    run_state: RunState
    params: SimParams
    width: int = field(init=False)
    height: int = field(init=False)

    def __post_init__(self) -> None:
        self.height = len(self.cells)
        self.width = len(self.cells[0]) if self.cells else 0


class EpisodeController:
    def __init__(
        self,
        config: Optional[GridConfig] = None,
        params: Optional[SimParams] = None,
        rng: Optional[np.random.Generator] = None,
        grid: Optional[GridWorld] = None,
    ):
        self.config = config or GridConfig()
        self.params = params or SimParams()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.lock = threading.RLock()
        self.run_state = RunState.RUNNING
        self.grid = grid or GridWorld.from_preset(
            self.config.width, self.config.height, self.config.preset
        )
        self.memory = MemoryField(self.grid.width, self.grid.height)
        self.policy = ActionPolicy(self.memory, self.rng)
        self.transition = TransitionModel(self.grid, self.rng)
        self.traces = RewardTraces()
        self.start_pos: Position = self._default_start()
        self.agent: Position = self.start_pos
        self.step_idx = 0
        self.episode = 1
        self.current_return = 0.0
        self.total_return = 0.0

    # ------------------------------------------------------------------ tick
    def tick(self) -> TickResult:
        """Advance the simulation by exactly one step."""
        with self.lock:
            params = self.params
            x, y = self.agent
            action = self.policy.select_action(x, y, params.epsilon, params.tau)
            self.memory.decay_glow(params.eta)
            self.memory.add_glow(x, y, action, 1.0)
            move = self.transition.step(x, y, action, params.wind)
            nx, ny = move.position
            reward = self.grid.reward(nx, ny, params)
            self.memory.reinforce(reward, params.gamma, params.lam)
            self.memory.normalize()

            self.step_idx += 1
            self.total_return += reward
            self.current_return += reward
            self.traces.record_step(self.step_idx, reward, self.total_return)
            self.agent = move.position

            result = TickResult(
                step=self.step_idx,
                position=(x, y),
                action=action,
                realized_action=move.realized,
                next_position=move.position,
                reward=reward,
                terminal=False,
                episode=self.episode,
            )
            if self.grid.is_terminal(nx, ny):
                result.terminal = True
                result.episode_return = self._finish_episode()
            return result

    def run(self, steps: int) -> List[TickResult]:
        return [self.tick() for _ in range(max(0, steps))]

    def _finish_episode(self) -> float:
        episode_return = self.current_return
        self.traces.record_episode(self.episode, episode_return)
        LOGGER.debug(
            "Episode %s finished at step=%s return=%.4f",
            self.episode,
            self.step_idx,
            episode_return,
        )
        self.episode += 1
        self.current_return = 0.0
        self.agent = self.start_pos
        self.memory.reset_episode_trace()
        return episode_return

    # --------------------------------------------------------------- control
    def start(self) -> None:
        with self.lock:
            self.run_state = RunState.RUNNING

    def pause(self) -> None:
        with self.lock:
            self.run_state = RunState.PAUSED

    def toggle(self) -> RunState:
        with self.lock:
            if self.run_state is RunState.RUNNING:
                self.run_state = RunState.PAUSED
            else:
                self.run_state = RunState.RUNNING
            return self.run_state

    @property
    def running(self) -> bool:
        return self.run_state is RunState.RUNNING

    def reset(self) -> None:
        """Full reset: fresh memory, agent at start, counters and traces cleared."""
        with self.lock:
            self.memory.reset(self.grid.width, self.grid.height)
            self.agent = self.start_pos
            self.step_idx = 0
            self.episode = 1
            self.current_return = 0.0
            self.total_return = 0.0
            self.traces.clear()
            LOGGER.info("Agent reset (%sx%s grid)", self.grid.width, self.grid.height)

    def configure(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
        preset: Optional[Preset] = None,
    ) -> GridConfig:
        """Regenerate the grid for new dimensions/preset and reset everything.

        Grid, memory, transition model and agent position are rebuilt together
        under the lock.
        """
        with self.lock:
            config = GridConfig(
                width=self.config.width if width is None else width,
                height=self.config.height if height is None else height,
                preset=self.config.preset if preset is None else preset,
                tick_rate=self.config.tick_rate,
                seed=self.config.seed,
            )
            self.config = config
            self.grid = GridWorld.from_preset(config.width, config.height, config.preset)
            self.transition = TransitionModel(self.grid, self.rng)
            self.start_pos = self._default_start()
            LOGGER.info(
                "Grid configured: %sx%s preset=%s", config.width, config.height, config.preset
            )
            self.reset()
            return config

    def set_tick_rate(self, rate: float) -> GridConfig:
        with self.lock:
            self.config = GridConfig(
                width=self.config.width,
                height=self.config.height,
                preset=self.config.preset,
                tick_rate=rate,
                seed=self.config.seed,
            )
            return self.config

    def update_params(self, **changes: Any) -> SimParams:
        with self.lock:
            self.params = self.params.replace(**changes)
            return self.params

    # ------------------------------------------------------------------ edits
    def set_cell(self, x: int, y: int, kind: CellKind) -> None:
        with self.lock:
            self.grid.set_cell(x, y, kind)
            if kind == "start":
                # Latest placed start wins as the spawn point.
                self.start_pos = (x, y)
                self.agent = (x, y)

    def pick_cell(self, x: int, y: int) -> CellKind:
        with self.lock:
            return self.grid.pick_cell(x, y)

    # ------------------------------------------------------------ observation
    def snapshot(self) -> LabSnapshot:
        with self.lock:
            mem = self.memory.snapshot()
            return LabSnapshot(
                agent=self.agent,
                start=self.start_pos,
                episode=self.episode,
                step=self.step_idx,
                current_return=self.current_return,
                total_return=self.total_return,
                reward_trace=self.traces.rewards.to_list(),
                cumulative_trace=self.traces.cumulative.to_list(),
                episode_returns=self.traces.episode_returns.to_list(),
                cells=self.grid.copy_cells(),
                h=mem.h,
                g=mem.g,
                run_state=self.run_state,
                params=self.params,
            )

    # ---------------------------------------------------------------- helpers
    def _default_start(self) -> Position:
        start = self.grid.find_start()
        if start is None:
            return (0, self.grid.height - 1)
        return start
