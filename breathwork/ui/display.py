"""Display state derived from session events (instruction, timer, circle)."""

from __future__ import annotations

from dataclasses import dataclass

from breathwork.session.model import Phase, PhaseName, format_seconds
from breathwork.session.orchestrator import (
    CountdownTick,
    PhaseStarted,
    RoundStarted,
    SessionEvent,
    SessionFinished,
    SessionStarted,
)


@dataclass(frozen=True)
class CircleState:
    expanded: bool
    transition_sec: float

    @property
    def css_class(self) -> str:
        return "bw-circle grow" if self.expanded else "bw-circle"

    @property
    def css_style(self) -> str:
        return f"transition-duration: {self.transition_sec:g}s;"


IDLE_CIRCLE = CircleState(expanded=False, transition_sec=0.5)


def circle_for_phase(previous: CircleState, phase: Phase) -> CircleState:
    """Inhale grows the circle over the phase, Exhale shrinks it; holds keep it."""
    if phase.name is PhaseName.INHALE:
        return CircleState(expanded=True, transition_sec=float(phase.duration_sec))
    if phase.name is PhaseName.EXHALE:
        return CircleState(expanded=False, transition_sec=float(phase.duration_sec))
    return previous


@dataclass
class DisplayState:
    instruction: str = ""
    timer: str = format_seconds(0)
    round_label: str = ""
    circle: CircleState = IDLE_CIRCLE
    running: bool = False


def apply_event(display: DisplayState, event: SessionEvent) -> None:
    if isinstance(event, SessionStarted):
        display.running = True
        display.round_label = ""
    elif isinstance(event, RoundStarted):
        display.round_label = event.label
    elif isinstance(event, PhaseStarted):
        display.instruction = event.text
        display.circle = circle_for_phase(display.circle, event.phase)
    elif isinstance(event, CountdownTick):
        display.timer = event.label
    elif isinstance(event, SessionFinished):
        display.running = False
        display.instruction = event.text
        display.timer = format_seconds(0)
        display.round_label = ""
        display.circle = IDLE_CIRCLE
