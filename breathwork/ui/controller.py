"""Session controller used by the web UI and the terminal runner."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from breathwork.core.services import NO_SOUND, AudioPlayer, WakeLock
from breathwork.core.settings_store import Settings, load_settings, save_settings, update_settings
from breathwork.session.clock import PhaseClock
from breathwork.session.model import GET_READY_SEC, Message
from breathwork.session.orchestrator import EventCallback, SessionOrchestrator
from breathwork.voice.narrator import Narrator, Voice

logger = logging.getLogger(__name__)


class SessionController:
    def __init__(
        self,
        settings_path: Path | None = None,
        narrator: Narrator | None = None,
        wake_lock: WakeLock | None = None,
        audio: AudioPlayer | None = None,
        clock: PhaseClock | None = None,
        get_ready_sec: int = GET_READY_SEC,
    ) -> None:
        self._settings_path = settings_path
        self._settings = load_settings(settings_path)
        self._narrator = narrator or Narrator()
        self._orchestrator = SessionOrchestrator(
            narrator=self._narrator,
            wake_lock=wake_lock,
            audio=audio,
            clock=clock,
            get_ready_sec=get_ready_sec,
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def narrator(self) -> Narrator:
        return self._narrator

    @property
    def session_running(self) -> bool:
        return self._orchestrator.is_running

    def update_settings(self, **changes: Any) -> Settings:
        self._settings = update_settings(self._settings, **changes)
        self._save()
        return self._settings

    def select_voice(self, voice: Voice | None) -> None:
        self._narrator.select_voice(voice)
        self._settings = update_settings(
            self._settings, voice=voice.name if voice is not None else None
        )
        self._save()

    def restore_voice(self, voices: list[Voice]) -> Voice | None:
        """Pick the saved voice from a freshly loaded list, else the first one."""
        if not voices:
            return None
        chosen = next((v for v in voices if v.name == self._settings.voice), voices[0])
        self._narrator.select_voice(chosen)
        return chosen

    def idle_text(self) -> str:
        return self._narrator.translate(Message.PRESS_START)

    def start(self, on_event: EventCallback | None = None) -> bool:
        if self._orchestrator.is_running:
            return False
        config = self._settings.to_session_config()
        self._save()
        self._orchestrator.set_listener(on_event)
        return self._orchestrator.start(config, sound=self._settings.sound or NO_SOUND)

    def stop(self) -> bool:
        return self._orchestrator.stop()

    async def wait(self) -> None:
        await self._orchestrator.wait()

    def _save(self) -> None:
        try:
            save_settings(self._settings, self._settings_path)
        except OSError as exc:
            logger.error("Could not save settings: %s", exc)
