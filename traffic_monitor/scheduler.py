"""
Background scheduler for the periodic reports.

One daemon thread drives every task. Each task keeps its own monotonic
deadline; a task with a zero interval is disabled and never fires.
Calling stop() sets the stop event and joins the thread, so no callback
runs once stop() has returned.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PeriodicTask:
    """A callback fired every `interval` seconds (0 = disabled)."""
    name: str
    interval: float
    callback: Callable[[], None]

    @property
    def enabled(self) -> bool:
        return self.interval > 0


class Scheduler:
    """Runs periodic tasks on a background thread until stopped."""

    def __init__(self, tasks: Sequence[PeriodicTask], clock: Callable[[], float] = time.monotonic):
        self.tasks: List[PeriodicTask] = list(tasks)
        self._clock = clock
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("scheduler already started")

        for task in self.tasks:
            if task.enabled:
                logger.debug("Scheduling %s every %.3fs", task.name, task.interval)
            else:
                logger.debug("Task %s disabled (interval is 0)", task.name)

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._loop, name="traffic-monitor-scheduler", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Signal the loop to end and wait for it. Safe to call twice."""
        self._stop_event.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()
        logger.debug("Scheduler stopped")

    def __enter__(self) -> "Scheduler":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def _loop(self) -> None:
        start = self._clock()
        deadlines: Dict[int, float] = {
            i: start + task.interval
            for i, task in enumerate(self.tasks)
            if task.enabled
        }

        if not deadlines:
            self._stop_event.wait()
            return

        while not self._stop_event.is_set():
            timeout = max(0.0, min(deadlines.values()) - self._clock())
            if self._stop_event.wait(timeout):
                return

            now = self._clock()
            for i in sorted(deadlines, key=deadlines.get):
                if deadlines[i] > now:
                    continue
                if self._stop_event.is_set():
                    return
                task = self.tasks[i]
                self._fire(task)
                # skip ticks missed while we were busy instead of replaying them
                missed = int((now - deadlines[i]) // task.interval)
                deadlines[i] += (missed + 1) * task.interval

    def _fire(self, task: PeriodicTask) -> None:
        try:
            task.callback()
        except Exception:
            logger.exception("Periodic task %s failed", task.name)
