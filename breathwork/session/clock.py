"""Cancellable per-phase countdown clock."""

from __future__ import annotations

import asyncio
from typing import Callable, Optional


TickCallback = Callable[[int], None]


class ClockToken:
    """Handle for one running countdown.

    ``wait()`` resolves with ``True`` once the full duration has elapsed, or
    ``False`` if the clock was cancelled first.
    """

    def __init__(self, duration_sec: int) -> None:
        self.duration_sec = duration_sec
        self._outcome: asyncio.Future[bool] = asyncio.get_running_loop().create_future()
        self._task: Optional[asyncio.Task[None]] = None
        self._cancelled = False

    @property
    def done(self) -> bool:
        return self._outcome.done()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if self._cancelled or self._outcome.done():
            return
        self._cancelled = True
        if self._task is not None:
            self._task.cancel()
        self._outcome.set_result(False)

    async def wait(self) -> bool:
        return await asyncio.shield(self._outcome)

    def _resolve(self) -> None:
        if not self._outcome.done():
            self._outcome.set_result(True)


class PhaseClock:
    def __init__(self, tick_sec: float = 1.0) -> None:
        self._tick_sec = tick_sec
        self._active: Optional[ClockToken] = None

    @property
    def active(self) -> Optional[ClockToken]:
        if self._active is not None and self._active.done:
            return None
        return self._active

    def start(self, duration_sec: int, on_tick: TickCallback) -> ClockToken:
        if duration_sec < 0:
            raise ValueError(f"Clock duration must be >= 0, got {duration_sec}")
        self.cancel()

        loop = asyncio.get_running_loop()
        started = loop.time()
        token = ClockToken(duration_sec)
        self._active = token
        on_tick(duration_sec)
        if duration_sec == 0:
            token._resolve()
            return token

        token._task = loop.create_task(self._countdown(token, on_tick, started))
        return token

    def cancel(self) -> None:
        if self._active is not None:
            self._active.cancel()
            self._active = None

    async def _countdown(self, token: ClockToken, on_tick: TickCallback, started: float) -> None:
        loop = asyncio.get_running_loop()
        try:
            for elapsed in range(1, token.duration_sec + 1):
                # Scheduled against the start time so a slow tick does not push the rest.
                await asyncio.sleep(max(0.0, started + elapsed * self._tick_sec - loop.time()))
                if token.cancelled:
                    return
                on_tick(token.duration_sec - elapsed)
        except Exception as exc:
            if not token._outcome.done():
                token._outcome.set_exception(exc)
            return
        token._resolve()
