"""Runtime state of one breathing session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from breathwork.session.clock import ClockToken


class SessionStatus(str, Enum):
    IDLE = "idle"
    GET_READY = "get_ready"
    RUNNING = "running"
    STOPPED = "stopped"
    COMPLETED = "completed"


@dataclass
class SessionState:
    total_rounds: int
    sound: str = "none"
    running: bool = True
    current_round: int = 1
    phase_index: int | None = None
    clock: Optional[ClockToken] = None
    holds_wake_lock: bool = False
    plays_sound: bool = False


@dataclass(frozen=True)
class SessionSnapshot:
    status: SessionStatus
    running: bool
    current_round: int
    total_rounds: int
    phase_index: int | None
