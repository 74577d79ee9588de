"""Browser-side capabilities (speech, ambient sound, wake lock) driven from NiceGUI."""

from __future__ import annotations

import json
import logging
from typing import Any

from nicegui import Client

from breathwork.voice.narrator import Voice

logger = logging.getLogger(__name__)

WAKE_VIDEO_ELEMENT_ID = "bw-wake-video"

_PROBE_SPEECH_JS = "'speechSynthesis' in window"

_LIST_VOICES_JS = """
return ('speechSynthesis' in window)
  ? window.speechSynthesis.getVoices().map(v => ({name: v.name, lang: v.lang}))
  : [];
"""

_SPEAK_JS = """
(() => {
  const synth = window.speechSynthesis;
  if (!synth) return;
  if (synth.speaking) synth.cancel();
  const utterance = new SpeechSynthesisUtterance(__TEXT__);
  const voice = synth.getVoices().find(v => v.name === __VOICE__);
  if (voice) utterance.voice = voice;
  synth.speak(utterance);
})();
"""

_CANCEL_SPEECH_JS = "if ('speechSynthesis' in window) window.speechSynthesis.cancel();"

_PLAY_AUDIO_JS = """
(() => {
  if (window.bwAudio) { window.bwAudio.pause(); }
  window.bwAudio = new Audio(__URL__);
  window.bwAudio.loop = __LOOP__;
  window.bwAudio.play().catch(e => console.error('Audio play failed:', e));
})();
"""

_STOP_AUDIO_JS = """
(() => {
  if (!window.bwAudio) return;
  window.bwAudio.pause();
  window.bwAudio.currentTime = 0;
  window.bwAudio = null;
})();
"""

_ACQUIRE_WAKE_LOCK_JS = """
(async () => {
  const fallback = () => {
    const video = document.getElementById(__VIDEO_ID__);
    if (video) video.play().catch(e => console.error('Wake Lock video fallback failed:', e));
  };
  if (!('wakeLock' in navigator)) { fallback(); return; }
  try {
    window.bwWakeLock = await navigator.wakeLock.request('screen');
    window.bwWakeLock.addEventListener('release', () => console.log('Screen Wake Lock was released'));
    console.log('Screen Wake Lock is active.');
  } catch (err) {
    console.error(`Wake Lock request failed: ${err.name}, ${err.message}`);
    fallback();
  }
})();
"""

_RELEASE_WAKE_LOCK_JS = """
(() => {
  if (window.bwWakeLock) {
    window.bwWakeLock.release().then(() => { window.bwWakeLock = null; });
  }
  const video = document.getElementById(__VIDEO_ID__);
  if (video) video.pause();
})();
"""


def _js(template: str, **values: Any) -> str:
    out = template
    for key, value in values.items():
        out = out.replace(f"__{key}__", json.dumps(value))
    return out


async def probe_speech(client: Client) -> bool:
    try:
        return bool(await client.run_javascript(f"return {_PROBE_SPEECH_JS};", timeout=2.0))
    except Exception as exc:
        logger.warning("Speech capability probe failed: %s", exc)
        return False


async def load_browser_voices(client: Client) -> list[Voice]:
    """Voices load asynchronously in most browsers; an empty list means "not yet"."""
    try:
        raw = await client.run_javascript(_LIST_VOICES_JS, timeout=2.0)
    except Exception as exc:
        logger.warning("Could not list browser voices: %s", exc)
        return []
    out: list[Voice] = []
    for item in raw or []:
        try:
            out.append(Voice(name=str(item["name"]), lang=str(item["lang"])))
        except (KeyError, TypeError):
            continue
    return out


class BrowserSpeech:
    # The speak script cuts off any utterance in progress inside the page, so the
    # narrator never needs to send a separate cancel first.
    speaking = False

    def __init__(self, client: Client, available: bool = False) -> None:
        self._client = client
        self.available = available

    def speak(self, text: str, voice_name: str | None) -> None:
        if not self.available:
            return
        self._client.run_javascript(_js(_SPEAK_JS, TEXT=text, VOICE=voice_name))

    def cancel(self) -> None:
        if not self.available:
            return
        self._client.run_javascript(_CANCEL_SPEECH_JS)


class BrowserAudioPlayer:
    def __init__(self, client: Client, base_url: str = "/sounds", extension: str = "mp3") -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._extension = extension

    def track_url(self, track_id: str) -> str:
        return f"{self._base_url}/{track_id}.{self._extension}"

    def play(self, track_id: str, loop: bool = True) -> None:
        self._client.run_javascript(_js(_PLAY_AUDIO_JS, URL=self.track_url(track_id), LOOP=loop))

    def stop(self) -> None:
        self._client.run_javascript(_STOP_AUDIO_JS)


class BrowserWakeLock:
    """Screen Wake Lock API, falling back to a hidden looping video element."""

    def __init__(self, client: Client, video_element_id: str = WAKE_VIDEO_ELEMENT_ID) -> None:
        self._client = client
        self._video_element_id = video_element_id

    def acquire(self) -> None:
        self._client.run_javascript(_js(_ACQUIRE_WAKE_LOCK_JS, VIDEO_ID=self._video_element_id))

    def release(self) -> None:
        self._client.run_javascript(_js(_RELEASE_WAKE_LOCK_JS, VIDEO_ID=self._video_element_id))
