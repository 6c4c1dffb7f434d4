"""Assemble rendered clips into a single narrated track."""

from pydub import AudioSegment

from bilingual_reader.constants import (
    PAUSE_LANGUAGE_CHANGE_MS,
    PAUSE_SAME_LANGUAGE_MS,
    TARGET_DBFS,
)
from bilingual_reader.models import Clip


def _calculate_pause(prev_language: str, curr_language: str) -> int:
    """Longer breath at a language switch than between same-language clips."""
    if prev_language != curr_language:
        return PAUSE_LANGUAGE_CHANGE_MS
    return PAUSE_SAME_LANGUAGE_MS


def normalize_levels(
    audio: list[AudioSegment],
    target_dbfs: float = TARGET_DBFS,
) -> list[AudioSegment]:
    """Bring every clip to roughly target_dbfs so voices match in loudness.

    Silent clips (dBFS = -inf) are left unchanged.
    """
    result = []
    for clip in audio:
        if clip.dBFS == float("-inf"):
            result.append(clip)
            continue
        result.append(clip + (target_dbfs - clip.dBFS))
    return result


def assemble(
    languages: list[str],
    audio: list[AudioSegment],
    normalize: bool = True,
) -> AudioSegment:
    """Concatenate clips in order with language-aware pauses."""
    if not audio:
        return AudioSegment.silent(duration=0)

    if normalize:
        audio = normalize_levels(audio)

    result = audio[0]
    for i in range(1, len(audio)):
        pause_ms = _calculate_pause(languages[i - 1], languages[i])
        result += AudioSegment.silent(duration=pause_ms) + audio[i]

    return result


def load_clips(clips: list[Clip]) -> tuple[list[str], list[AudioSegment]]:
    """Load rendered clip files, returning (languages, audio) in clip order."""
    ordered = sorted(clips, key=lambda c: c.index)
    languages = [c.language for c in ordered]
    audio = [AudioSegment.from_mp3(c.path) for c in ordered]
    return languages, audio
