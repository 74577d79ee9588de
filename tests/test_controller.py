from __future__ import annotations

import asyncio
import json
from pathlib import Path

from breathwork.core.engine import TerminalSession
from breathwork.core.state import SessionStatus
from breathwork.session.clock import PhaseClock
from breathwork.session.orchestrator import SessionEvent, SessionFinished
from breathwork.ui.controller import SessionController
from breathwork.voice.narrator import Narrator, Voice

TICK = 0.01


def _controller(tmp_path: Path, speech=None, wake_lock=None, audio=None) -> SessionController:
    return SessionController(
        settings_path=tmp_path / "settings.json",
        narrator=Narrator(speech),
        wake_lock=wake_lock,
        audio=audio,
        clock=PhaseClock(tick_sec=TICK),
        get_ready_sec=1,
    )


def test_controller_saves_settings_and_runs_session(tmp_path: Path, speech, audio) -> None:
    async def _run() -> None:
        controller = _controller(tmp_path, speech=speech, audio=audio)
        controller.update_settings(
            inhale_sec=1, hold1_sec=0, exhale_sec=1, hold2_sec=0, rounds=2, sound="rain"
        )
        events: list[SessionEvent] = []

        assert controller.start(events.append) is True
        assert controller.start(events.append) is False
        assert controller.session_running
        await controller.wait()

        assert not controller.session_running
        assert controller.stop() is False
        assert isinstance(events[-1], SessionFinished)
        assert events[-1].status is SessionStatus.COMPLETED
        assert audio.played == [("rain", True)]

        saved = json.loads((tmp_path / "settings.json").read_text(encoding="utf-8"))
        assert saved["rounds"] == 2
        assert saved["sound"] == "rain"

    asyncio.run(_run())


def test_invalid_live_edit_keeps_previous_value(tmp_path: Path) -> None:
    controller = _controller(tmp_path)
    controller.update_settings(inhale_sec=3, rounds=5)

    settings = controller.update_settings(inhale_sec=-1, rounds=None)

    assert (settings.inhale_sec, settings.rounds) == (3, 5)
    saved = json.loads((tmp_path / "settings.json").read_text(encoding="utf-8"))
    assert (saved["inhale_sec"], saved["rounds"]) == (3, 5)
    assert controller.settings.to_session_config().inhale_sec == 3


def test_voice_selection_changes_language_and_persists(tmp_path: Path, speech) -> None:
    controller = _controller(tmp_path, speech=speech)
    assert controller.idle_text() == "Press Start to Begin"

    controller.select_voice(Voice(name="Valluvar", lang="ta-IN"))

    assert controller.idle_text() == "தொடங்க ஸ்டார்ட் அழுத்தவும்"
    reloaded = _controller(tmp_path)
    assert reloaded.settings.voice == "Valluvar"

    voices = [Voice("Samantha", "en-US"), Voice("Valluvar", "ta-IN")]
    assert reloaded.restore_voice(voices) == voices[1]
    assert reloaded.narrator.language == "ta"
    assert reloaded.restore_voice([]) is None


def test_restore_voice_defaults_to_first_when_saved_voice_missing(tmp_path: Path) -> None:
    controller = _controller(tmp_path)
    voices = [Voice("Daniel", "en-GB"), Voice("Valluvar", "ta-IN")]

    assert controller.restore_voice(voices) == voices[0]
    assert controller.narrator.language == "en"


def test_terminal_session_prints_rounds_and_completes(tmp_path: Path) -> None:
    async def _run() -> None:
        controller = _controller(tmp_path)
        controller.update_settings(inhale_sec=1, hold1_sec=1, exhale_sec=1, hold2_sec=0, rounds=2)
        lines: list[str] = []
        session = TerminalSession(controller=controller, output=lines.append)

        completed = await session.run()

        assert completed is True
        assert "-- Round 1 of 2 --" in lines
        assert "-- Round 2 of 2 --" in lines
        assert lines[-1] == "Meditation complete."
        assert session.display.running is False

    asyncio.run(_run())


def test_terminal_session_stop_reports_incomplete(tmp_path: Path) -> None:
    async def _run() -> None:
        controller = _controller(tmp_path)
        controller.update_settings(inhale_sec=50, rounds=3)
        lines: list[str] = []
        session = TerminalSession(controller=controller, output=lines.append)

        runner = asyncio.create_task(session.run())
        await asyncio.sleep(TICK * 5)
        session.stop()
        completed = await runner

        assert completed is False
        assert lines[-1] == "Session stopped."

    asyncio.run(_run())
