"""Breathing session orchestration: Get Ready, then rounds of timed phases."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

from breathwork.core.services import (
    NO_SOUND,
    AudioPlayer,
    NullAudioPlayer,
    NullWakeLock,
    WakeLock,
    best_effort,
)
from breathwork.core.state import SessionSnapshot, SessionState, SessionStatus
from breathwork.session.clock import PhaseClock
from breathwork.session.model import (
    GET_READY_SEC,
    Message,
    Phase,
    PhaseName,
    SessionConfig,
    build_cycle,
    format_round,
    format_seconds,
)
from breathwork.voice.narrator import Narrator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionStarted:
    total_rounds: int
    sound: str


@dataclass(frozen=True)
class RoundStarted:
    round: int
    total_rounds: int
    label: str


@dataclass(frozen=True)
class PhaseStarted:
    phase: Phase
    text: str
    round: int
    total_rounds: int


@dataclass(frozen=True)
class CountdownTick:
    phase_name: PhaseName
    seconds_left: int
    label: str


@dataclass(frozen=True)
class SessionFinished:
    status: SessionStatus
    message: Message
    text: str
    rounds_completed: int


SessionEvent = Union[SessionStarted, RoundStarted, PhaseStarted, CountdownTick, SessionFinished]
EventCallback = Callable[[SessionEvent], None]


class SessionOrchestrator:
    """Runs one breathing session at a time.

    ``start()`` and ``stop()`` are synchronous and must be called from the
    event loop thread. The run loop suspends only while awaiting the Phase
    Clock of the current phase; ``stop()`` cancels that clock and the run
    task in the same call, so a clock resolving in the same loop iteration
    never advances the session (stop wins).
    """

    def __init__(
        self,
        narrator: Narrator | None = None,
        wake_lock: WakeLock | None = None,
        audio: AudioPlayer | None = None,
        on_event: EventCallback | None = None,
        clock: PhaseClock | None = None,
        get_ready_sec: int = GET_READY_SEC,
    ) -> None:
        self._narrator = narrator or Narrator()
        self._wake_lock: WakeLock = wake_lock or NullWakeLock()
        self._audio: AudioPlayer = audio or NullAudioPlayer()
        self._on_event = on_event
        self._clock = clock or PhaseClock()
        self._get_ready_sec = get_ready_sec
        self._status = SessionStatus.IDLE
        self._state: Optional[SessionState] = None
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def is_running(self) -> bool:
        return self._state is not None and self._state.running

    def set_listener(self, on_event: EventCallback | None) -> None:
        self._on_event = on_event

    def snapshot(self) -> SessionSnapshot:
        state = self._state
        if state is None:
            return SessionSnapshot(
                status=self._status,
                running=False,
                current_round=0,
                total_rounds=0,
                phase_index=None,
            )
        return SessionSnapshot(
            status=self._status,
            running=state.running,
            current_round=state.current_round,
            total_rounds=state.total_rounds,
            phase_index=state.phase_index,
        )

    def start(self, config: SessionConfig, sound: str = NO_SOUND) -> bool:
        if self.is_running:
            return False

        loop = asyncio.get_running_loop()
        state = SessionState(total_rounds=config.rounds, sound=sound)
        self._state = state
        self._status = SessionStatus.GET_READY
        self._emit(SessionStarted(total_rounds=config.rounds, sound=sound))
        if self._state is not state:
            # Stopped by the listener before anything was acquired.
            return False

        state.holds_wake_lock = True
        best_effort("Wake lock acquire", self._wake_lock.acquire)
        if sound != NO_SOUND:
            state.plays_sound = True
            best_effort(f"Ambient sound {sound!r}", self._audio.play, sound, loop=True)

        self._task = loop.create_task(self._run(state, config))
        return True

    def stop(self) -> bool:
        state = self._state
        if state is None or not state.running:
            return False

        state.running = False
        self._clock.cancel()
        self._narrator.cancel()
        if self._task is not None:
            self._task.cancel()
        self._teardown(state, Message.SESSION_STOPPED)
        return True

    async def wait(self) -> None:
        """Wait until the current run loop has exited (stopped or completed)."""
        if self._task is not None:
            await asyncio.wait({self._task})

    async def _run(self, state: SessionState, config: SessionConfig) -> None:
        try:
            get_ready = Phase(PhaseName.GET_READY, self._get_ready_sec)
            if not await self._run_phase(state, get_ready):
                return

            cycle = build_cycle(config)
            while state.running and state.current_round <= state.total_rounds:
                self._status = SessionStatus.RUNNING
                self._emit(
                    RoundStarted(
                        round=state.current_round,
                        total_rounds=state.total_rounds,
                        label=format_round(state.current_round, state.total_rounds),
                    )
                )
                for index, phase in enumerate(cycle):
                    if not state.running:
                        break
                    if phase.skipped:
                        continue
                    state.phase_index = index
                    await self._run_phase(state, phase)

                # A round only counts once all its phases ran uninterrupted.
                if state.running:
                    state.current_round += 1

            if state.running:
                self._teardown(state, Message.MEDITATION_COMPLETE)
        except Exception:
            logger.exception("Breathing session aborted")
            if state.running:
                state.running = False
                self._clock.cancel()
                self._narrator.cancel()
                self._teardown(state, Message.SESSION_STOPPED)

    async def _run_phase(self, state: SessionState, phase: Phase) -> bool:
        if phase.name is not PhaseName.GET_READY:
            self._status = SessionStatus.RUNNING
        text = self._narrator.speak(phase.name)
        self._emit(
            PhaseStarted(
                phase=phase,
                text=text,
                round=state.current_round,
                total_rounds=state.total_rounds,
            )
        )
        if not state.running:
            return False

        def _on_tick(seconds_left: int) -> None:
            if state.running:
                self._emit(
                    CountdownTick(
                        phase_name=phase.name,
                        seconds_left=seconds_left,
                        label=format_seconds(seconds_left),
                    )
                )

        state.clock = self._clock.start(phase.duration_sec, _on_tick)
        resolved = await state.clock.wait()
        return resolved and state.running

    def _teardown(self, state: SessionState, message: Message) -> None:
        if self._state is not state:
            return

        state.running = False
        state.clock = None
        self._state = None
        self._status = (
            SessionStatus.COMPLETED
            if message is Message.MEDITATION_COMPLETE
            else SessionStatus.STOPPED
        )

        text = self._narrator.speak(message)
        self._emit(
            SessionFinished(
                status=self._status,
                message=message,
                text=text,
                rounds_completed=min(state.current_round - 1, state.total_rounds),
            )
        )
        if state.holds_wake_lock:
            best_effort("Wake lock release", self._wake_lock.release)
        if state.plays_sound:
            best_effort("Ambient sound stop", self._audio.stop)

    def _emit(self, event: SessionEvent) -> None:
        if self._on_event is None:
            return
        try:
            self._on_event(event)
        except Exception:
            logger.exception("Session listener failed on %s", type(event).__name__)
