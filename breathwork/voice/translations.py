"""Prompt translations keyed by phase/message identifier."""

from __future__ import annotations

from breathwork.session.model import Message, PhaseName

DEFAULT_LANGUAGE = "en"
SUPPORTED_LANGUAGES = ("en", "ta")

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        PhaseName.INHALE.value: "Inhale",
        PhaseName.HOLD.value: "Hold",
        PhaseName.EXHALE.value: "Exhale",
        PhaseName.GET_READY.value: "Get Ready",
        Message.SESSION_STOPPED.value: "Session stopped.",
        Message.MEDITATION_COMPLETE.value: "Meditation complete.",
        Message.PRESS_START.value: "Press Start to Begin",
    },
    "ta": {
        PhaseName.INHALE.value: "மூச்சை உள்ளிழு",
        PhaseName.HOLD.value: "நிறுத்து",
        PhaseName.EXHALE.value: "மூச்சை வெளியிடு",
        PhaseName.GET_READY.value: "தயாராகுங்கள்",
        Message.SESSION_STOPPED.value: "அமர்வு நிறுத்தப்பட்டது",
        Message.MEDITATION_COMPLETE.value: "தியானம் முடிந்தது",
        Message.PRESS_START.value: "தொடங்க ஸ்டார்ட் அழுத்தவும்",
    },
}


def translate(key: str, language: str) -> str:
    """Return the prompt text for ``language``, or the key itself when missing."""
    return TRANSLATIONS.get(language, {}).get(key, key)
