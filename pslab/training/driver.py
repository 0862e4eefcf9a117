"""Periodic background scheduler for the tick loop.

Runs ``controller.tick()`` on a worker thread at the configured rate while the
controller is RUNNING. Callers poll :meth:`EpisodeController.snapshot` for
display; stopping the driver is the only cancellation needed.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from pslab.params import tick_interval
from pslab.training.episode import EpisodeController, TickResult

LOGGER = logging.getLogger(__name__)

TickCallback = Callable[[TickResult], None]


class TickDriver:
    def __init__(
        self,
        controller: EpisodeController,
        on_tick: Optional[TickCallback] = None,
    ):
        self.controller = controller
        self.on_tick = on_tick
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.ticks = 0

    @property
    def interval(self) -> float:
        return tick_interval(self.controller.config.tick_rate)

    def is_alive(self) -> bool:
        with self._lock:
            return self._thread is not None and self._thread.is_alive()

    def start(self) -> bool:
        """Start the worker thread. Returns False if it is already running."""
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                return False
            self._stop.clear()
            self._thread = threading.Thread(target=self._loop, name="pslab-tick", daemon=True)
            self._thread.start()
            LOGGER.info("Tick driver started interval=%.3fs", self.interval)
            return True

    def stop(self, timeout: Optional[float] = 1.0) -> None:
        with self._lock:
            thread = self._thread
            self._thread = None
        self._stop.set()
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
            LOGGER.info("Tick driver stopped after %s ticks", self.ticks)

    def set_rate(self, rate: float) -> float:
        self.controller.set_tick_rate(rate)
        return self.interval

    # ------------------------------------------------------------------ helpers
    def _loop(self) -> None:
        # Interval is re-read every cycle so rate changes apply on the next tick.
        while not self._stop.wait(self.interval):
            if not self.controller.running:
                continue
            try:
                result = self.controller.tick()
                self.ticks += 1
                if self.on_tick is not None:
                    self.on_tick(result)
            except Exception:
                LOGGER.exception("Tick driver halted after %s ticks", self.ticks)
                self._stop.set()
                break

    def __enter__(self) -> "TickDriver":
        self.start()
        return self

    def __exit__(self, *exc: object) -> None:
        self.stop()
