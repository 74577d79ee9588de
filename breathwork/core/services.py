"""External collaborators invoked at session boundaries."""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

logger = logging.getLogger(__name__)

NO_SOUND = "none"
SOUND_TRACKS: tuple[str, ...] = (NO_SOUND, "rain", "forest")


class WakeLock(Protocol):
    def acquire(self) -> None: ...

    def release(self) -> None: ...


class AudioPlayer(Protocol):
    def play(self, track_id: str, loop: bool = True) -> None: ...

    def stop(self) -> None: ...


class NullWakeLock:
    def acquire(self) -> None:
        return None

    def release(self) -> None:
        return None


class NullAudioPlayer:
    def play(self, track_id: str, loop: bool = True) -> None:
        return None

    def stop(self) -> None:
        return None


def best_effort(action: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> bool:
    """Run a collaborator call; failures are logged and reported as ``False``."""
    try:
        fn(*args, **kwargs)
    except Exception as exc:
        logger.error("%s failed: %s", action, exc)
        return False
    return True
