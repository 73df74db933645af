"""Debounced full-snapshot writer."""

import threading
from typing import Callable, Optional, Protocol

from mudir.config import DEFAULT_DEBOUNCE_SECONDS
from mudir.domain.entities import Snapshot
from mudir.logging_config import get_logger

logger = get_logger("storage.debounce")


class TimerHandle(Protocol):
    """The subset of threading.Timer the writer relies on."""

    daemon: bool

    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


class DebouncedWriter:
    """Coalesce bursts of mutations into one write after a quiet window.

    There is at most one pending timer. ``schedule()`` cancels it and arms a
    new one, so a burst of N mutations yields a single write issued
    ``window`` seconds after the last of them. The snapshot is taken when
    the timer fires, i.e. after the last mutation was fully applied. A write
    that has already started is never cancelled.

    Writes are serialized: a flush that arrives while a timer write is in
    progress waits for it, then snapshots and writes, so the newest state
    always lands last.
    """

    def __init__(
        self,
        write: Callable[[Snapshot], bool],
        snapshot: Callable[[], Snapshot],
        window: float = DEFAULT_DEBOUNCE_SECONDS,
        timer_factory: TimerFactory = threading.Timer,
    ):
        """Initialize debounced writer.

        Args:
            write: Persists a snapshot; returns False on a (logged) failure
            snapshot: Captures the current full state
            window: Quiescence window in seconds
            timer_factory: Builds a cancellable timer (threading.Timer by default)
        """
        self.write = write
        self.snapshot = snapshot
        self.window = window
        self.timer_factory = timer_factory
        self._lock = threading.Lock()
        # Held for the whole snapshot-and-write; never taken under _lock
        self._write_lock = threading.Lock()
        self._timer: Optional[TimerHandle] = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        """True if a write is armed and has not started yet."""
        with self._lock:
            return self._timer is not None

    def schedule(self) -> None:
        """Cancel any pending write and re-arm the quiescence window."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            generation = self._generation
            timer = self.timer_factory(self.window, lambda: self._fire(generation))
            timer.daemon = True
            self._timer = timer
            timer.start()

    def cancel(self) -> None:
        """Drop the pending write, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._generation += 1

    def flush(self) -> bool:
        """Run the pending write now instead of waiting for the window.

        Returns:
            True if a write was pending and succeeded
        """
        with self._lock:
            if self._timer is None:
                return False
            self._timer.cancel()
            self._timer = None
            self._generation += 1
        return self._run()

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A newer schedule() or a flush() superseded this timer
            if generation != self._generation:
                return
            self._timer = None
        self._run()

    def _run(self) -> bool:
        with self._write_lock:
            snapshot = self.snapshot()
            logger.debug("Writing snapshot after quiet window")
            return self.write(snapshot)
