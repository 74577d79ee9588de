"""Local persistence for the user's session settings."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from breathwork.core.services import NO_SOUND, SOUND_TRACKS
from breathwork.session.model import SessionConfig

logger = logging.getLogger(__name__)


def _default_settings_path() -> Path:
    return Path.home() / ".breathwork" / "settings.json"


@dataclass(frozen=True)
class Settings:
    inhale_sec: int = 6
    hold1_sec: int = 6
    exhale_sec: int = 8
    hold2_sec: int = 4
    rounds: int = 10
    voice: str | None = None
    sound: str = NO_SOUND

    def to_session_config(self) -> SessionConfig:
        return SessionConfig(
            inhale_sec=self.inhale_sec,
            hold1_sec=self.hold1_sec,
            exhale_sec=self.exhale_sec,
            hold2_sec=self.hold2_sec,
            rounds=self.rounds,
        )


DEFAULT_SETTINGS = Settings()

_DURATION_FIELDS = ("inhale_sec", "hold1_sec", "exhale_sec", "hold2_sec")


def load_settings(path: Path | None = None) -> Settings:
    """Read saved settings; anything missing or unreadable falls back to defaults."""
    target = path or _default_settings_path()
    if not target.exists():
        return DEFAULT_SETTINGS

    try:
        payload = json.loads(target.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", target, exc)
        return DEFAULT_SETTINGS
    if not isinstance(payload, dict):
        return DEFAULT_SETTINGS
    return settings_from_dict(payload)


def settings_from_dict(payload: dict[str, Any], base: Settings = DEFAULT_SETTINGS) -> Settings:
    """Build settings from raw values; each invalid field keeps its value from ``base``."""
    values: dict[str, Any] = {}
    for name in _DURATION_FIELDS:
        values[name] = _int_or_default(payload.get(name), getattr(base, name), minimum=0)
    values["rounds"] = _int_or_default(payload.get("rounds"), base.rounds, minimum=1)

    voice = payload.get("voice")
    values["voice"] = str(voice) if voice else None

    sound = payload.get("sound")
    values["sound"] = sound if sound in SOUND_TRACKS else base.sound
    return Settings(**values)


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    target = path or _default_settings_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(asdict(settings), ensure_ascii=True, indent=2), encoding="utf-8")
    return target


def update_settings(settings: Settings, **changes: Any) -> Settings:
    known = {field.name for field in fields(Settings)}
    unknown = set(changes) - known
    if unknown:
        raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")
    merged = {**asdict(settings), **changes}
    return settings_from_dict(merged, base=settings)


def _int_or_default(raw: Any, default: int, *, minimum: int) -> int:
    if raw is None or raw == "" or isinstance(raw, bool):
        return default
    if isinstance(raw, float) and not raw.is_integer():
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError, OverflowError):
        return default
    return value if value >= minimum else default
