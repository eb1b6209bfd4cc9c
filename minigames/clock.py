"""Frame clock: monotonic timestamps and capped frame deltas."""

import time
from typing import Callable, Optional

from minigames import config

TimeSource = Callable[[], float]


class Clock:
    """Tracks the previous frame timestamp and hands out capped deltas.

    Timestamps are seconds from a monotonic source. The delta for a frame
    is clamped to ``max_dt`` so that one huge step after the window was
    backgrounded cannot tunnel entities through the player.

    Resuming after a pause calls :meth:`reset` with the resume timestamp,
    which means the paused interval is never charged to the simulation.
    """

    def __init__(
        self,
        max_dt: Optional[float] = None,
        time_source: TimeSource = time.monotonic,
    ) -> None:
        self._max_dt = config.MAX_FRAME_DT if max_dt is None else max_dt
        if self._max_dt <= 0:
            raise ValueError("max_dt must be positive")
        self._time_source = time_source
        self._last: Optional[float] = None

    @property
    def max_dt(self) -> float:
        return self._max_dt

    @property
    def last_timestamp(self) -> Optional[float]:
        return self._last

    def now(self) -> float:
        """Current timestamp from the time source."""
        return self._time_source()

    def reset(self, timestamp: Optional[float] = None) -> None:
        """Set the reference timestamp (round start or resume)."""
        self._last = self.now() if timestamp is None else timestamp

    def delta(self, timestamp: float) -> float:
        """Return the clamped seconds since the previous call and advance.

        The first call after construction (no reference yet) yields 0.
        A timestamp earlier than the reference also yields 0.
        """
        if self._last is None:
            self._last = timestamp
            return 0.0
        dt = timestamp - self._last
        self._last = timestamp
        if dt <= 0:
            return 0.0
        return min(dt, self._max_dt)
