"""Split mixed Korean/English text into language-tagged segments."""

from bilingual_reader.constants import (
    KOREAN,
    KOREAN_RANGES,
    LATIN,
    NEUTRAL,
    NEUTRAL_PUNCTUATION,
    SENTENCE_TERMINATORS,
)
from bilingual_reader.models import Segment


def classify_char(ch: str) -> str:
    """Classify a single character as "ko", "en" or "neutral".

    Hangul ranges win, then digits/whitespace/common punctuation are neutral,
    and anything else (Latin letters, other scripts, emoji) counts as "en".
    """
    code = ord(ch)
    for low, high in KOREAN_RANGES:
        if low <= code <= high:
            return KOREAN
    if ch in "0123456789" or ch.isspace() or ch in NEUTRAL_PUNCTUATION:
        return NEUTRAL
    return LATIN


def segment_text(text: str, split_sentences: bool = False) -> list[Segment]:
    """Parse text into an ordered list of Segments.

    Single left-to-right scan. Neutral characters are absorbed into whichever
    segment is open; only a Korean/Latin switch closes a segment. With
    split_sentences=True a segment also closes right after ".", "!", "?" or a
    line break, and the next segment detects its language from scratch.

    Whitespace-only runs are dropped; emitted text is not trimmed.
    """
    segments = []
    buffer = []
    language = None

    def flush():
        chunk = "".join(buffer)
        if chunk.strip():
            segments.append(Segment(text=chunk, language=language))

    for ch in text:
        char_class = classify_char(ch)

        if language is None:
            language = LATIN if char_class == NEUTRAL else char_class
            buffer.append(ch)
        elif char_class == NEUTRAL or char_class == language:
            buffer.append(ch)
        else:
            flush()
            buffer = [ch]
            language = char_class
            continue

        if split_sentences and ch in SENTENCE_TERMINATORS:
            flush()
            buffer = []
            language = None

    if buffer:
        flush()

    return segments
