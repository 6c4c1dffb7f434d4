"""Data models for bilingual segmentation and playback."""

from dataclasses import dataclass, field
from typing import Callable


def _noop(*args) -> None:
    pass


@dataclass(frozen=True)
class Segment:
    text: str          # never whitespace-only
    language: str      # "ko" or "en"


@dataclass
class Voice:
    id: str
    name: str
    lang: str          # locale, e.g. "ko-KR"


@dataclass
class SpeechRequest:
    text: str
    voice: str
    rate: float
    pitch: float
    language: str = ""
    on_start: Callable[[], None] = field(default=_noop, repr=False)
    on_end: Callable[[], None] = field(default=_noop, repr=False)
    on_error: Callable[[Exception], None] = field(default=_noop, repr=False)


@dataclass
class Clip:
    index: int
    language: str
    path: str
