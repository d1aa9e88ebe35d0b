"""Scheduler backed by the asyncio event loop."""

import asyncio
from typing import Callable

from core.interfaces import CancelToken, Scheduler


class LoopTimer(CancelToken):
    """Cancel token wrapping an asyncio TimerHandle."""

    def __init__(self, handle: asyncio.TimerHandle):
        self.handle = handle

    def cancel(self) -> None:
        self.handle.cancel()

    @property
    def cancelled(self) -> bool:
        return self.handle.cancelled()


class AsyncioScheduler(Scheduler):
    """Runs callbacks with loop.call_later.

    Callbacks run on the same loop as the request handlers, so engine
    commands and timer callbacks never interleave.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def after(self, seconds: float, callback: Callable[[], None]) -> LoopTimer:
        loop = self._loop or asyncio.get_running_loop()
        return LoopTimer(loop.call_later(seconds, callback))
