"""Terminal runner for a single breathing session."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable

from breathwork.core.state import SessionStatus
from breathwork.session.clock import PhaseClock
from breathwork.session.model import GET_READY_SEC
from breathwork.session.orchestrator import (
    CountdownTick,
    PhaseStarted,
    RoundStarted,
    SessionEvent,
    SessionFinished,
)
from breathwork.ui.controller import SessionController
from breathwork.ui.display import DisplayState, apply_event


class TerminalSession:
    def __init__(
        self,
        controller: SessionController | None = None,
        settings_path: Path | None = None,
        output: Callable[[str], None] = print,
        tick_sec: float = 1.0,
        get_ready_sec: int = GET_READY_SEC,
    ) -> None:
        self._controller = controller or SessionController(
            settings_path=settings_path,
            clock=PhaseClock(tick_sec=tick_sec),
            get_ready_sec=get_ready_sec,
        )
        self._output = output
        self.display = DisplayState(instruction=self._controller.idle_text())

    @property
    def controller(self) -> SessionController:
        return self._controller

    async def run(self) -> bool:
        """Run until completion or ``stop()``; returns True when all rounds completed."""
        finished: list[SessionFinished] = []

        def on_event(event: SessionEvent) -> None:
            apply_event(self.display, event)
            if isinstance(event, SessionFinished):
                finished.append(event)
            self._print_event(event)

        settings = self._controller.settings
        self._output(
            f"Breathing {settings.inhale_sec}-{settings.hold1_sec}-"
            f"{settings.exhale_sec}-{settings.hold2_sec} for {settings.rounds} rounds "
            "(Ctrl+C to stop)"
        )
        if not self._controller.start(on_event):
            self._output("A session is already running")
            return False
        try:
            await self._controller.wait()
        except asyncio.CancelledError:
            self._controller.stop()
            raise
        return bool(finished) and finished[-1].status is SessionStatus.COMPLETED

    def stop(self) -> None:
        self._controller.stop()

    def _print_event(self, event: SessionEvent) -> None:
        if isinstance(event, RoundStarted):
            self._output(f"-- {event.label} --")
        elif isinstance(event, PhaseStarted):
            self._output(f"{event.text} ({event.phase.duration_sec}s)")
        elif isinstance(event, CountdownTick):
            if event.seconds_left > 0:
                self._output(f"  {event.label}")
        elif isinstance(event, SessionFinished):
            self._output(event.text)
