"""Cancellable repeating task for timer-driven playback.

Fast-forward and rewind are "call step on a fixed cadence" loops. The task
runs its callback on a daemon thread every ``interval`` seconds until it is
cancelled or the callback raises.
"""

import threading
from collections.abc import Callable

from orbitsim.log import get_logger

logger = get_logger("playback")


class RepeatingTask:
    """Run a callback every ``interval`` seconds on a background thread.

    Example:
        >>> task = RepeatingTask(sim.next_frame, interval=0.01)
        >>> task.start()
        >>> ...
        >>> task.cancel()
    """

    def __init__(self, callback: Callable[[], object], interval: float, name: str = "playback") -> None:
        if not interval > 0:
            raise ValueError(f"Interval must be positive, got {interval!r}")
        self.callback = callback
        self.interval = interval
        self.name = name
        self.exception: BaseException | None = None
        self.iterations = 0
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    @property
    def is_running(self) -> bool:
        return self._thread.is_alive() and not self._stop.is_set()

    def start(self) -> "RepeatingTask":
        self._thread.start()
        return self

    def cancel(self, timeout: float | None = 1.0) -> None:
        """Stop scheduling further calls. Safe to call more than once."""
        self._stop.set()
        if self._thread.is_alive() and threading.current_thread() is not self._thread:
            self._thread.join(timeout)

    def _run(self) -> None:
        # wait() returns True once cancelled
        while not self._stop.wait(self.interval):
            try:
                self.callback()
            except Exception as exc:
                self.exception = exc
                self._stop.set()
                logger.warning("%s stopped: %s", self.name, exc)
                return
            self.iterations += 1
