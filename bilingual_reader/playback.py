"""Sequential multi-segment playback: session ownership and the idle/speaking/paused state machine."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import partial
from typing import Callable, Optional

from bilingual_reader.constants import DEFAULT_PITCH, DEFAULT_RATE, KOREAN
from bilingual_reader.models import Segment, SpeechRequest
from bilingual_reader.segmenter import segment_text

logger = logging.getLogger(__name__)

IDLE = "idle"
SPEAKING = "speaking"
PAUSED = "paused"


class SpeechEngine(ABC):
    """External text-to-speech queue.

    Plays submitted requests strictly in FIFO order, one at a time. For each
    request it calls on_start, then exactly one of on_end or on_error.
    """

    @abstractmethod
    def speak(self, requests: list[SpeechRequest]) -> None:
        """Enqueue requests without blocking."""

    @abstractmethod
    def pause(self) -> None:
        pass

    @abstractmethod
    def resume(self) -> None:
        pass

    @abstractmethod
    def cancel(self) -> None:
        """Drop every queued and in-flight request."""

    @property
    @abstractmethod
    def is_speaking(self) -> bool:
        pass

    @property
    @abstractmethod
    def is_paused(self) -> bool:
        pass


@dataclass
class PlaybackSession:
    generation: int
    segments: list[Segment]
    current_index: Optional[int] = None

    @property
    def last_index(self) -> int:
        return len(self.segments) - 1


class PlaybackController:
    """Queue segments on a SpeechEngine and derive aggregate playback state.

    State only changes through start/pause/resume/stop and the per-segment
    callbacks of the live session. Callbacks carry the generation of the
    session that queued them, so anything delivered after stop() (or for an
    older session) is ignored.

    Hooks:
      on_segment_start(index, segment): segment became active (highlight)
      on_segment_end(index, segment): segment finished or failed
      on_state_change(old, new)
    """

    def __init__(
        self,
        engine: SpeechEngine,
        on_segment_start: Callable[[int, Segment], None] | None = None,
        on_segment_end: Callable[[int, Segment], None] | None = None,
        on_state_change: Callable[[str, str], None] | None = None,
    ):
        self.engine = engine
        self.on_segment_start = on_segment_start
        self.on_segment_end = on_segment_end
        self.on_state_change = on_state_change
        self._state = IDLE
        self._session: PlaybackSession | None = None
        self._generation = 0

    @property
    def state(self) -> str:
        return self._state

    @property
    def session(self) -> PlaybackSession | None:
        return self._session

    def start(
        self,
        text: str,
        korean_voice: str,
        latin_voice: str,
        rate: float | None = None,
        pitch: float | None = None,
        split_sentences: bool = False,
    ) -> PlaybackSession | None:
        """Segment text and enqueue every segment on the engine.

        Returns the new session, or None when already active or when the text
        has nothing speakable.
        """
        if self._state != IDLE:
            logger.warning("Already speaking — start ignored")
            return None

        segments = segment_text(text, split_sentences=split_sentences)
        if not segments:
            logger.debug("Nothing to speak")
            return None

        rate = DEFAULT_RATE if rate is None else rate
        pitch = DEFAULT_PITCH if pitch is None else pitch

        self._generation += 1
        session = PlaybackSession(generation=self._generation, segments=segments)
        self._session = session
        self._set_state(SPEAKING)

        requests = []
        for index, seg in enumerate(segments):
            voice = korean_voice if seg.language == KOREAN else latin_voice
            requests.append(SpeechRequest(
                text=seg.text,
                voice=voice,
                rate=rate,
                pitch=pitch,
                language=seg.language,
                on_start=partial(self._segment_started, session.generation, index),
                on_end=partial(self._segment_finished, session.generation, index),
                on_error=partial(self._segment_failed, session.generation, index),
            ))

        logger.info("Queued %d segments (session %d)", len(requests), session.generation)
        self.engine.speak(requests)
        return session

    def pause(self) -> None:
        if self._state != SPEAKING:
            return
        self.engine.pause()
        self._set_state(PAUSED)

    def resume(self) -> None:
        if self._state != PAUSED:
            return
        self.engine.resume()
        self._set_state(SPEAKING)

    def stop(self) -> None:
        if self._state == IDLE:
            return
        self.engine.cancel()
        self._session = None
        self._set_state(IDLE)

    def _live(self, generation: int) -> PlaybackSession | None:
        session = self._session
        if session is None or session.generation != generation:
            logger.debug("Ignoring callback from stale session %d", generation)
            return None
        return session

    def _segment_started(self, generation: int, index: int) -> None:
        session = self._live(generation)
        if session is None:
            return
        session.current_index = index
        if self.on_segment_start:
            self.on_segment_start(index, session.segments[index])

    def _segment_finished(self, generation: int, index: int) -> None:
        session = self._live(generation)
        if session is None:
            return
        if session.current_index == index:
            session.current_index = None
        if self.on_segment_end:
            self.on_segment_end(index, session.segments[index])
        if index == session.last_index:
            if self.engine.is_paused:
                # Paused during the final segment: release so the next start plays.
                self.engine.resume()
            self._session = None
            self._set_state(IDLE)

    def _segment_failed(self, generation: int, index: int, error: Exception) -> None:
        # Same transitions as a normal end; the engine keeps playing the rest.
        if self._live(generation) is None:
            return
        logger.error("Segment %d failed: %s", index, error)
        self._segment_finished(generation, index)

    def _set_state(self, new: str) -> None:
        old = self._state
        if old == new:
            return
        self._state = new
        logger.debug("Playback %s → %s", old, new)
        if self.on_state_change:
            self.on_state_change(old, new)
