"""NiceGUI web UI for Breathwork."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from nicegui import Client, app, background_tasks, ui

from breathwork.core.services import SOUND_TRACKS
from breathwork.session.orchestrator import SessionEvent
from breathwork.ui.browser import (
    WAKE_VIDEO_ELEMENT_ID,
    BrowserAudioPlayer,
    BrowserSpeech,
    BrowserWakeLock,
    load_browser_voices,
    probe_speech,
)
from breathwork.ui.controller import SessionController
from breathwork.ui.display import DisplayState, apply_event
from breathwork.voice.narrator import Narrator, Voice, supported_voices

SOUNDS_URL = "/sounds"
WAKE_VIDEO_URL = "/media/wake-lock.mp4"
VOICE_POLL_SEC = 0.5
VOICE_POLL_ATTEMPTS = 20
REFRESH_SEC = 0.2

SOUND_LABELS = {"none": "None", "rain": "Rain", "forest": "Forest"}

_STYLE = """
<style>
  body {
    background: radial-gradient(circle at top, #17323f 0%, #0b1a20 60%);
    color: #e5e7eb;
    font-family: Arial, "Segoe UI", sans-serif;
  }
  .bw-stage { height: 300px; display: flex; align-items: center; justify-content: center; }
  .bw-circle {
    width: 120px;
    height: 120px;
    border-radius: 50%;
    background: radial-gradient(circle, #5eead4 0%, #0d9488 100%);
    box-shadow: 0 0 40px rgba(94, 234, 212, 0.35);
    transform: scale(1);
    transition-property: transform;
    transition-timing-function: ease-in-out;
  }
  .bw-circle.grow { transform: scale(2.2); }
  .bw-instruction { font-size: 2rem; font-weight: 700; }
  .bw-timer { font-size: 1.5rem; color: #99f6e4; }
  .bw-round { min-height: 1.5rem; color: #9caecf; }
  .bw-card {
    background: rgba(15, 35, 45, 0.85);
    border: 1px solid rgba(148, 163, 184, 0.22);
    border-radius: 14px;
  }
</style>
"""


def run_web_ui(
    *,
    host: str = "127.0.0.1",
    port: int = 8090,
    sounds_dir: Path | None = None,
    wake_video: Path | None = None,
    settings_path: Path | None = None,
) -> int:
    if sounds_dir is not None and sounds_dir.is_dir():
        app.add_static_files(SOUNDS_URL, str(sounds_dir))
    if wake_video is not None and wake_video.is_file():
        app.add_media_file(local_file=wake_video, url_path=WAKE_VIDEO_URL)

    @ui.page("/")
    async def index(client: Client) -> None:
        speech = BrowserSpeech(client)
        controller = SessionController(
            settings_path=settings_path,
            narrator=Narrator(speech),
            wake_lock=BrowserWakeLock(client),
            audio=BrowserAudioPlayer(client, base_url=SOUNDS_URL),
        )
        display = DisplayState(instruction=controller.idle_text())
        voices: list[Voice] = []
        settings = controller.settings

        ui.add_head_html(_STYLE)
        with ui.column().classes("w-full items-center gap-2 p-4"):
            with ui.element("div").classes("bw-stage"):
                circle = ui.element("div").classes(display.circle.css_class)
            instruction_label = ui.label(display.instruction).classes("bw-instruction")
            timer_label = ui.label(display.timer).classes("bw-timer")
            round_label = ui.label("").classes("bw-round")
            with ui.row().classes("gap-3"):
                start_btn = ui.button("Start", color="teal")
                stop_btn = ui.button("Stop", color="red")

            with ui.card().classes("bw-card"):
                with ui.row().classes("gap-3"):
                    inhale_input = ui.number("Inhale (s)", value=settings.inhale_sec, min=0, precision=0)
                    hold1_input = ui.number("Hold (s)", value=settings.hold1_sec, min=0, precision=0)
                    exhale_input = ui.number("Exhale (s)", value=settings.exhale_sec, min=0, precision=0)
                    hold2_input = ui.number("Hold (s)", value=settings.hold2_sec, min=0, precision=0)
                    rounds_input = ui.number("Rounds", value=settings.rounds, min=1, precision=0)
                with ui.row().classes("gap-3 w-full"):
                    voice_select = ui.select({}, label="Voice").classes("min-w-[240px]")
                    sound_select = ui.select(
                        {track: SOUND_LABELS.get(track, track) for track in SOUND_TRACKS},
                        value=settings.sound,
                        label="Ambient sound",
                    ).classes("min-w-[160px]")

            if wake_video is not None:
                ui.element("video").props(
                    f"id={WAKE_VIDEO_ELEMENT_ID} src={WAKE_VIDEO_URL} loop muted playsinline"
                ).style("display: none")

        config_inputs = (inhale_input, hold1_input, exhale_input, hold2_input, rounds_input)

        def on_event(event: SessionEvent) -> None:
            apply_event(display, event)

        def refresh_ui() -> None:
            running = controller.session_running
            instruction_label.text = display.instruction
            timer_label.text = display.timer
            round_label.text = display.round_label
            circle.classes(replace=display.circle.css_class)
            circle.style(replace=display.circle.css_style)
            start_btn.set_enabled(not running)
            stop_btn.set_enabled(running)
            for widget in config_inputs:
                widget.set_enabled(not running)
            voice_select.set_enabled(not running and speech.available and bool(voices))
            sound_select.set_enabled(not running)

        def on_config_change() -> None:
            controller.update_settings(
                inhale_sec=inhale_input.value,
                hold1_sec=hold1_input.value,
                exhale_sec=exhale_input.value,
                hold2_sec=hold2_input.value,
                rounds=rounds_input.value,
                sound=sound_select.value,
            )
            # Rejected edits are reverted so the inputs show what the next session runs.
            current = controller.settings
            inhale_input.set_value(current.inhale_sec)
            hold1_input.set_value(current.hold1_sec)
            exhale_input.set_value(current.exhale_sec)
            hold2_input.set_value(current.hold2_sec)
            rounds_input.set_value(current.rounds)
            sound_select.set_value(current.sound)

        def on_voice_change(event: Any) -> None:
            voice = next((v for v in voices if v.name == event.value), None)
            if voice is None:
                return
            controller.select_voice(voice)
            if not controller.session_running:
                display.instruction = controller.idle_text()
            refresh_ui()

        def on_start() -> None:
            if controller.start(on_event):
                refresh_ui()

        def on_stop() -> None:
            if controller.stop():
                refresh_ui()

        async def load_voices() -> None:
            nonlocal voices
            for _ in range(VOICE_POLL_ATTEMPTS):
                loaded = supported_voices(await load_browser_voices(client))
                if loaded:
                    voices = loaded
                    voice_select.options = {voice.name: voice.label for voice in voices}
                    voice_select.update()
                    chosen = controller.restore_voice(voices)
                    if chosen is not None:
                        voice_select.set_value(chosen.name)
                    if not controller.session_running:
                        display.instruction = controller.idle_text()
                    refresh_ui()
                    return
                await asyncio.sleep(VOICE_POLL_SEC)

        for widget in config_inputs:
            widget.on_value_change(lambda _: on_config_change())
        sound_select.on_value_change(lambda _: on_config_change())
        voice_select.on_value_change(on_voice_change)
        start_btn.on_click(on_start)
        stop_btn.on_click(on_stop)
        client.on_disconnect(controller.stop)

        refresh_ui()
        ui.timer(REFRESH_SEC, refresh_ui)

        await client.connected()
        speech.available = await probe_speech(client)
        if not speech.available:
            ui.notify(
                "Sorry, your browser does not support text-to-speech. "
                "The visual guide will still work.",
                color="warning",
            )
            return
        background_tasks.create(load_voices(), name="load-browser-voices")

    ui.run(host=host, port=port, reload=False, title="Breathwork", show=False)
    return 0
