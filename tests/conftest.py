from __future__ import annotations

import pytest


class RecordingSpeech:
    available = True

    def __init__(self) -> None:
        self.spoken: list[tuple[str, str | None]] = []
        self.cancels = 0
        self.speaking = False

    def speak(self, text: str, voice_name: str | None) -> None:
        self.spoken.append((text, voice_name))
        self.speaking = True

    def cancel(self) -> None:
        self.cancels += 1
        self.speaking = False


class RecordingWakeLock:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.acquired = 0
        self.released = 0

    def acquire(self) -> None:
        self.acquired += 1
        if self.fail:
            raise RuntimeError("NotAllowedError: wake lock refused")

    def release(self) -> None:
        self.released += 1
        if self.fail:
            raise RuntimeError("no wake lock held")


class RecordingAudio:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.played: list[tuple[str, bool]] = []
        self.stops = 0

    def play(self, track_id: str, loop: bool = True) -> None:
        self.played.append((track_id, loop))
        if self.fail:
            raise RuntimeError("NotAllowedError: play() failed")

    def stop(self) -> None:
        self.stops += 1


@pytest.fixture
def speech() -> RecordingSpeech:
    return RecordingSpeech()


@pytest.fixture
def wake_lock() -> RecordingWakeLock:
    return RecordingWakeLock()


@pytest.fixture
def audio() -> RecordingAudio:
    return RecordingAudio()
