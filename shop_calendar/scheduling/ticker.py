"""
NowTicker — periodic re-evaluation of "now".

The scheduling functions never read the clock. The host creates one ticker
per visible calendar; each tick takes a fresh timestamp and hands it to the
callback, which re-invokes the pure functions (time indicator, carry-over).
Stopping the ticker is the whole teardown: a tick runs synchronously, so
there is never work in flight to cancel.
"""

import logging
import threading
from collections.abc import Callable
from datetime import datetime
from typing import Any

from shop_calendar.observability.context import tick_scope

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 60


class NowTicker:
    """Calls `callback(now)` every `interval_seconds` on a background thread."""

    def __init__(
        self,
        callback: Callable[[datetime], Any],
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        clock: Callable[[], datetime] = datetime.now,
    ):
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")
        self.callback = callback
        self.interval_seconds = interval_seconds
        self.clock = clock
        self.tick_count = 0
        self.last_tick: datetime | None = None
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @classmethod
    def from_config(
        cls,
        callback: Callable[[datetime], Any],
        config,
        clock: Callable[[], datetime] = datetime.now,
    ) -> "NowTicker":
        """Build with the `ticker.interval_seconds` of a CalendarConfig."""
        return cls(callback, interval_seconds=config.tick_interval_seconds, clock=clock)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def tick(self) -> Any:
        """Run one evaluation with a fresh timestamp."""
        now = self.clock()
        self.tick_count += 1
        self.last_tick = now
        with tick_scope(self.tick_count, now):
            logger.debug("Recomputing calendar for %s", now.isoformat(timespec="minutes"))
            return self.callback(now)

    def _safe_tick(self) -> None:
        try:
            self.tick()
        except Exception:
            logger.exception("Calendar tick callback failed; ticker keeps running")

    def _run(self) -> None:
        while not self._stop_event.is_set():
            self._safe_tick()
            self._stop_event.wait(timeout=self.interval_seconds)

    def start(self) -> None:
        """Tick immediately, then every interval until stop()."""
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="now-ticker", daemon=True)
        self._thread.start()
        logger.info("Now ticker started (every %ss)", self.interval_seconds)

    def stop(self, timeout: float | None = 5.0) -> None:
        """Clear the interval."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None
        logger.info("Now ticker stopped after %d ticks", self.tick_count)

    def __enter__(self) -> "NowTicker":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
