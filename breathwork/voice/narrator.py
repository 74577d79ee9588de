"""Spoken and displayed prompts for session phases."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Protocol

from breathwork.voice.translations import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES, translate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Voice:
    name: str
    lang: str

    @property
    def language(self) -> str:
        return self.lang[:2].lower()

    @property
    def label(self) -> str:
        return f"{self.name} ({self.lang})"


class Speech(Protocol):
    @property
    def available(self) -> bool: ...

    @property
    def speaking(self) -> bool: ...

    def speak(self, text: str, voice_name: str | None) -> None: ...

    def cancel(self) -> None: ...


class NullSpeech:
    """Stand-in when no speech synthesis is available."""

    available = False
    speaking = False

    def speak(self, text: str, voice_name: str | None) -> None:
        return None

    def cancel(self) -> None:
        return None


def supported_voices(voices: Iterable[Voice]) -> list[Voice]:
    return [voice for voice in voices if voice.lang.lower().startswith(SUPPORTED_LANGUAGES)]


class Narrator:
    def __init__(self, speech: Speech | None = None) -> None:
        self._speech: Speech = speech or NullSpeech()
        self._voice: Optional[Voice] = None

    @property
    def available(self) -> bool:
        return self._speech.available

    @property
    def voice(self) -> Optional[Voice]:
        return self._voice

    @property
    def language(self) -> str:
        if self._voice is None:
            return DEFAULT_LANGUAGE
        return self._voice.language

    def select_voice(self, voice: Voice | None) -> None:
        self._voice = voice

    def translate(self, key: str | Enum) -> str:
        return translate(_key(key), self.language)

    def speak(self, key: str | Enum) -> str:
        text = self.translate(key)
        voice_name = self._voice.name if self._voice is not None else None
        try:
            # Prompts never overlap: the previous utterance is cut off.
            if self._speech.speaking:
                self._speech.cancel()
            self._speech.speak(text, voice_name)
        except Exception as exc:
            logger.warning("Speech failed for %r: %s", text, exc)
        return text

    def cancel(self) -> None:
        try:
            self._speech.cancel()
        except Exception as exc:
            logger.warning("Speech cancel failed: %s", exc)


def _key(key: str | Enum) -> str:
    return str(key.value) if isinstance(key, Enum) else key
