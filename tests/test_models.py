"""Tests for constants and models (Layer 0)."""

import dataclasses

import pytest

from bilingual_reader import constants
from bilingual_reader.models import Segment, SpeechRequest


def test_segment_dataclass():
    """Segment fields exist."""
    seg = Segment(text="안녕", language="ko")
    assert seg.text == "안녕"
    assert seg.language == "ko"


def test_segment_is_immutable():
    """Segments cannot be changed once produced."""
    seg = Segment(text="Hi", language="en")
    with pytest.raises(dataclasses.FrozenInstanceError):
        seg.text = "Bye"


def test_speech_request_default_callbacks():
    """Callbacks default to no-ops."""
    req = SpeechRequest(text="Hi", voice="en-US-AriaNeural", rate=1.0, pitch=1.0)
    req.on_start()
    req.on_end()
    req.on_error(Exception("boom"))


def test_constants_exist():
    """All module-level constants are defined."""
    expected = [
        "KOREAN",
        "LATIN",
        "NEUTRAL",
        "KOREAN_RANGES",
        "NEUTRAL_PUNCTUATION",
        "SENTENCE_TERMINATORS",
        "KOREAN_VOICE",
        "LATIN_VOICE",
        "DEFAULT_RATE",
        "DEFAULT_PITCH",
        "TTS_RETRY_COUNT",
        "TTS_RETRY_BASE_DELAY",
        "PAUSE_SAME_LANGUAGE_MS",
        "PAUSE_LANGUAGE_CHANGE_MS",
        "TRANSLATE_URL",
        "OUTPUT_BITRATE",
        "OUTPUT_DIR",
        "VERSION",
    ]
    for name in expected:
        assert hasattr(constants, name), f"Missing constant: {name}"
