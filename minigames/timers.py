"""
Cancellable fire-once timers.

Every delayed action of a session (intro lead-in, game-over overlay
reveal, game-specific delays) is registered here and gets a handle back.
State transitions sweep the registry with :meth:`TimerRegistry.cancel_all`
so a stale callback can never mutate a stopped session.

Usage:
    timers = TimerRegistry()
    handle = timers.schedule(2.0, start_round, now=clock.now())
    ...
    timers.run_due(clock.now())   # once per frame
    timers.cancel(handle)         # safe even if it already fired
"""
from dataclasses import dataclass, field
from itertools import count
from typing import Callable, List

from minigames.logging import get_logger

log = get_logger('timers')

_handle_ids = count(1)


@dataclass(eq=False)
class TimerHandle:
    """Handle for one scheduled callback."""
    due_at: float
    callback: Callable[[], None]
    label: str = ""
    id: int = field(default_factory=lambda: next(_handle_ids))
    cancelled: bool = False
    fired: bool = False

    @property
    def pending(self) -> bool:
        """True while the timer can still fire."""
        return not (self.cancelled or self.fired)


class TimerRegistry:
    """Tracks every outstanding timer of a session."""

    def __init__(self) -> None:
        self._pending: List[TimerHandle] = []
        self._in_flight: List[TimerHandle] = []

    def __len__(self) -> int:
        return len(self._pending)

    @property
    def pending(self) -> List[TimerHandle]:
        """Outstanding handles, earliest first."""
        return sorted(self._pending, key=lambda h: (h.due_at, h.id))

    def schedule(
        self,
        delay: float,
        callback: Callable[[], None],
        now: float,
        label: str = "",
    ) -> TimerHandle:
        """Register ``callback`` to fire once ``delay`` seconds after ``now``."""
        if delay < 0:
            raise ValueError(f"Timer delay must be non-negative, got {delay}")
        handle = TimerHandle(due_at=now + delay, callback=callback, label=label)
        self._pending.append(handle)
        log.trace("Scheduled timer %d '%s' due at %.3f", handle.id, label, handle.due_at)
        return handle

    def cancel(self, handle: TimerHandle) -> None:
        """Revoke a timer. No-op for fired or already cancelled handles."""
        if not handle.pending:
            return
        handle.cancelled = True
        self._pending = [h for h in self._pending if h is not handle]

    def cancel_all(self) -> int:
        """Revoke every outstanding timer, including the rest of a batch
        currently being fired by :meth:`run_due`.

        Returns:
            Number of timers that were actually cancelled
        """
        cancelled = 0
        for handle in self._pending + self._in_flight:
            if handle.pending:
                handle.cancelled = True
                cancelled += 1
        self._pending = []
        if cancelled:
            log.debug("Cancelled %d pending timer(s)", cancelled)
        return cancelled

    def run_due(self, now: float) -> int:
        """Fire every timer due at or before ``now``, earliest first.

        A callback may schedule or cancel timers; handles of this batch
        cancelled by an earlier callback are skipped.

        Returns:
            Number of callbacks fired
        """
        due = [h for h in self.pending if h.due_at <= now]
        if not due:
            return 0
        self._pending = [h for h in self._pending if h not in due]
        self._in_flight = due

        fired = 0
        try:
            for handle in due:
                if handle.cancelled:
                    continue
                handle.fired = True
                fired += 1
                log.trace("Firing timer %d '%s'", handle.id, handle.label)
                handle.callback()
        finally:
            self._in_flight = []
        return fired
