"""Shared fixtures for bilingual reader tests."""

import pytest

from bilingual_reader.models import Segment
from bilingual_reader.playback import SpeechEngine


class FakeEngine(SpeechEngine):
    """Records submissions; tests fire the callbacks by hand."""

    def __init__(self):
        self.requests = []
        self.calls = []
        self._paused = False

    def speak(self, requests):
        self.calls.append("speak")
        self.requests.extend(requests)

    def pause(self):
        self.calls.append("pause")
        self._paused = True

    def resume(self):
        self.calls.append("resume")
        self._paused = False

    def cancel(self):
        self.calls.append("cancel")
        self.requests = []
        self._paused = False

    @property
    def is_speaking(self):
        return bool(self.requests)

    @property
    def is_paused(self):
        return self._paused


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def mixed_text():
    return "Hello 안녕하세요 world"


@pytest.fixture
def sample_segments():
    """Pre-built segments for assembly/exporter tests."""
    return [
        Segment(text="Hello ", language="en"),
        Segment(text="안녕하세요 ", language="ko"),
        Segment(text="world", language="en"),
    ]
