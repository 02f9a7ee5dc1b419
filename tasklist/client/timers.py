"""Cancellable delayed callbacks used to expire transient UI messages."""

import asyncio
import threading
from collections.abc import Callable
from typing import Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run a callback after a delay in seconds."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
    """Schedule callbacks on an asyncio event loop.

    Uses ``loop`` when given, otherwise the loop running at scheduling time.
    Outside any running loop (synchronous UI code) the callback runs on a
    daemon ``threading.Timer`` instead.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        loop = self._loop
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                timer = threading.Timer(delay, callback)
                timer.daemon = True
                timer.start()
                return timer
        return loop.call_later(delay, callback)


class ExpiringSlot:
    """One message slot whose value clears itself after ``ttl`` seconds.

    Setting a new value cancels the pending expiry and schedules a fresh one.
    """

    def __init__(self, scheduler: Scheduler, ttl: float, on_expire: Callable[[], None]) -> None:
        self._scheduler = scheduler
        self._ttl = ttl
        self._on_expire = on_expire
        self._handle: TimerHandle | None = None

    def restart(self) -> None:
        self.cancel()
        self._handle = self._scheduler.call_later(self._ttl, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self._on_expire()
