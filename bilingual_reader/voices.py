"""Voice registry and per-language default voice selection."""

import logging

import edge_tts

from bilingual_reader.constants import (
    KOREAN,
    KOREAN_PREFERRED_NAMES,
    LATIN_PREFERRED_NAMES,
)
from bilingual_reader.models import Voice

logger = logging.getLogger(__name__)

# Hardcoded Korean + English voice pool (avoids network call at startup)
VOICE_POOL = [
    Voice(id="ko-KR-SunHiNeural", name="SunHi", lang="ko-KR"),
    Voice(id="ko-KR-InJoonNeural", name="InJoon", lang="ko-KR"),
    Voice(id="ko-KR-HyunsuMultilingualNeural", name="Hyunsu Multilingual", lang="ko-KR"),
    Voice(id="en-US-AriaNeural", name="Aria", lang="en-US"),
    Voice(id="en-US-JennyNeural", name="Jenny", lang="en-US"),
    Voice(id="en-US-GuyNeural", name="Guy", lang="en-US"),
    Voice(id="en-US-DavisNeural", name="Davis", lang="en-US"),
    Voice(id="en-GB-SoniaNeural", name="Sonia", lang="en-GB"),
    Voice(id="en-GB-RyanNeural", name="Ryan", lang="en-GB"),
    Voice(id="en-AU-NatashaNeural", name="Natasha", lang="en-AU"),
]

PREFERRED_NAMES = {
    KOREAN: KOREAN_PREFERRED_NAMES,
}


async def fetch_voices() -> list[Voice]:
    """Fetch the full voice catalogue from the edge-tts service."""
    raw = await edge_tts.list_voices()
    voices = []
    for entry in raw:
        short_name = entry.get("ShortName", "")
        voices.append(Voice(
            id=short_name,
            name=entry.get("FriendlyName") or short_name,
            lang=entry.get("Locale", ""),
        ))
    return voices


def filter_voices(voices: list[Voice], lang_prefix: str) -> list[Voice]:
    """Voices whose locale starts with lang_prefix ("ko", "en-GB", ...)."""
    prefix = lang_prefix.lower()
    return [v for v in voices if v.lang.lower().startswith(prefix)]


def default_voice(
    voices: list[Voice],
    lang_prefix: str,
    preferred_names: tuple[str, ...] | None = None,
) -> Voice | None:
    """Pick the default voice for a language.

    Priority: first voice whose name contains a preferred name → first voice
    in the language → None.
    """
    if preferred_names is None:
        preferred_names = PREFERRED_NAMES.get(lang_prefix, LATIN_PREFERRED_NAMES)

    candidates = filter_voices(voices, lang_prefix)
    if not candidates:
        logger.warning("No %s voices found", lang_prefix)
        return None

    for preferred in preferred_names:
        for voice in candidates:
            if preferred.lower() in voice.name.lower():
                return voice
    return candidates[0]


def resolve_voice(
    requested: str | None,
    lang_prefix: str,
    voices: list[Voice] | None = None,
) -> str | None:
    """Resolve the voice id to use for a language.

    A requested id is used as given; ids missing from the registry are still
    passed through (the service may know voices the pool does not) with a
    warning. Without a request, the language default is used.
    """
    if voices is None:
        voices = VOICE_POOL

    if requested:
        if not any(v.id == requested for v in voices):
            logger.warning("Voice %s not in registry — using it anyway", requested)
        return requested

    voice = default_voice(voices, lang_prefix)
    return voice.id if voice else None
