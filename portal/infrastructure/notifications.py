"""Transient, auto-dismissing notifications.

At most one notification is active at a time. Posting a new message replaces
the current one and restarts the dismissal timer. Timers come from a
:class:`Scheduler`, so tests and alternative front-ends can drive them
without real waiting; call ``configure_scheduler`` during start-up to install
a different implementation.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Protocol

from portal.core import settings


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Contract for deferred callbacks."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once after ``delay`` seconds unless cancelled."""


class ThreadingScheduler:
    """Default scheduler backed by daemon :class:`threading.Timer` objects."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


_scheduler: Scheduler = ThreadingScheduler()


def configure_scheduler(scheduler: Scheduler) -> None:
    """Install the scheduler used by newly created notification centres."""

    global _scheduler
    _scheduler = scheduler


def get_scheduler() -> Scheduler:
    return _scheduler


@dataclass(slots=True)
class Notification:
    message: str
    visible: bool = True


class NotificationCenter:
    def __init__(self, scheduler: Scheduler | None = None, timeout: float | None = None) -> None:
        self._scheduler = scheduler or get_scheduler()
        self._timeout = timeout
        self._lock = threading.Lock()
        self._current: Notification | None = None
        self._timer: TimerHandle | None = None
        self._generation = 0

    def show(self, message: str) -> Notification:
        delay = self._timeout if self._timeout is not None else settings.notification_timeout()
        with self._lock:
            self._cancel_timer()
            self._generation += 1
            generation = self._generation
            self._current = Notification(message=message)
        # Scheduled outside the lock in case the scheduler fires synchronously.
        timer = self._scheduler.call_later(delay, lambda: self._expire(generation))
        with self._lock:
            if self._generation == generation and self._current is not None:
                self._timer = timer
            else:
                timer.cancel()
            return Notification(message=message)

    def dismiss(self) -> None:
        with self._lock:
            self._cancel_timer()
            if self._current is not None:
                self._current.visible = False

    def current(self) -> Notification | None:
        with self._lock:
            if self._current is None:
                return None
            return Notification(message=self._current.message, visible=self._current.visible)

    def reset(self) -> None:
        with self._lock:
            self._cancel_timer()
            self._generation += 1
            self._current = None

    def _expire(self, generation: int) -> None:
        with self._lock:
            # A newer message superseded this timer.
            if generation != self._generation or self._current is None:
                return
            self._current.visible = False
            self._timer = None

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
