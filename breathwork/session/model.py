"""Breathing session domain models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PhaseName(str, Enum):
    INHALE = "Inhale"
    HOLD = "Hold"
    EXHALE = "Exhale"
    GET_READY = "Get Ready"


class Message(str, Enum):
    SESSION_STOPPED = "Session Stopped"
    MEDITATION_COMPLETE = "Meditation Complete!"
    PRESS_START = "Press Start to Begin"


GET_READY_SEC = 3


@dataclass(frozen=True)
class Phase:
    name: PhaseName
    duration_sec: int

    def __post_init__(self) -> None:
        if self.duration_sec < 0:
            raise ValueError(f"Phase duration must be >= 0, got {self.duration_sec}")

    @property
    def skipped(self) -> bool:
        return self.duration_sec == 0


@dataclass(frozen=True)
class SessionConfig:
    inhale_sec: int
    hold1_sec: int
    exhale_sec: int
    hold2_sec: int
    rounds: int

    def __post_init__(self) -> None:
        for field_name in ("inhale_sec", "hold1_sec", "exhale_sec", "hold2_sec"):
            value = getattr(self, field_name)
            if not isinstance(value, int) or value < 0:
                raise ValueError(f"{field_name} must be a non-negative integer, got {value!r}")
        if not isinstance(self.rounds, int) or self.rounds < 1:
            raise ValueError(f"rounds must be >= 1, got {self.rounds!r}")

    @property
    def round_duration_sec(self) -> int:
        return self.inhale_sec + self.hold1_sec + self.exhale_sec + self.hold2_sec

    @property
    def total_duration_sec(self) -> int:
        return GET_READY_SEC + self.round_duration_sec * self.rounds


def build_cycle(config: SessionConfig) -> tuple[Phase, ...]:
    return (
        Phase(PhaseName.INHALE, config.inhale_sec),
        Phase(PhaseName.HOLD, config.hold1_sec),
        Phase(PhaseName.EXHALE, config.exhale_sec),
        Phase(PhaseName.HOLD, config.hold2_sec),
    )


def format_round(current_round: int, total_rounds: int) -> str:
    return f"Round {current_round} of {total_rounds}"


def format_seconds(seconds_left: int) -> str:
    return f"{seconds_left}s"
