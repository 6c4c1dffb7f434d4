"""TTS generation via edge-tts, exposed as an asyncio speech queue."""

import asyncio
import logging
import os
from collections import deque

import edge_tts

from bilingual_reader.constants import (
    PITCH_HZ_PER_UNIT,
    TTS_RETRY_BASE_DELAY,
    TTS_RETRY_COUNT,
)
from bilingual_reader.models import Clip, SpeechRequest
from bilingual_reader.playback import SpeechEngine

logger = logging.getLogger(__name__)


class SegmentEngineError(Exception):
    """A queued request could not be rendered."""


def format_rate(rate: float) -> str:
    """Convert a rate multiplier to edge-tts form: 1.0 → "+0%", 0.5 → "-50%"."""
    return f"{round((rate - 1.0) * 100):+d}%"


def format_pitch(pitch: float) -> str:
    """Convert a pitch multiplier to an edge-tts Hz offset: 1.0 → "+0Hz"."""
    return f"{round((pitch - 1.0) * PITCH_HZ_PER_UNIT):+d}Hz"


async def synthesize_clip(
    text: str,
    voice: str,
    output_path: str,
    rate: str = "+0%",
    pitch: str = "+0Hz",
) -> None:
    """Render a single TTS clip with retry logic.

    Retries on network errors, HTTP errors, or 0-byte output files, backing
    off exponentially. Raises the last error once retries are exhausted.
    """
    last_error = None
    for attempt in range(TTS_RETRY_COUNT):
        try:
            communicate = edge_tts.Communicate(text, voice, rate=rate, pitch=pitch)
            await communicate.save(output_path)

            # Validate output: 0-byte file counts as failure
            if os.path.exists(output_path) and os.path.getsize(output_path) > 0:
                return

            last_error = Exception(f"TTS produced 0-byte file for: {text[:50]}...")
        except Exception as e:
            last_error = e

        if attempt < TTS_RETRY_COUNT - 1:
            delay = TTS_RETRY_BASE_DELAY * (2 ** attempt)
            logger.debug("TTS attempt %d failed (%s), retrying in %.1fs", attempt + 1, last_error, delay)
            await asyncio.sleep(delay)

    raise last_error


class EdgeSpeechEngine(SpeechEngine):
    """Speech queue that "plays" each request by rendering it to an MP3 clip.

    speak() must be called from a running event loop; it only enqueues and
    schedules the drain task. Requests render one at a time in submission
    order. pause() holds the queue before the next request starts; the
    request already rendering finishes first. Rendered clips accumulate in
    self.clips, in order, until cancel() discards them.
    """

    def __init__(self, output_dir: str, synthesize=synthesize_clip):
        self.output_dir = output_dir
        self.clips: list[Clip] = []
        self._synthesize = synthesize
        self._queue: deque[SpeechRequest] = deque()
        self._resumed = asyncio.Event()
        self._resumed.set()
        self._task: asyncio.Task | None = None
        self._current: SpeechRequest | None = None
        self._count = 0

    def speak(self, requests: list[SpeechRequest]) -> None:
        if self._current is None and not self._queue:
            # A pause left over from a finished queue must not hold new work.
            self._resumed.set()
        self._queue.extend(requests)
        if self._task is None or self._task.done():
            self._task = asyncio.get_running_loop().create_task(self._drain())

    def pause(self) -> None:
        self._resumed.clear()

    def resume(self) -> None:
        self._resumed.set()

    def cancel(self) -> None:
        self._queue.clear()
        self._current = None
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self.clips = []
        self._resumed.set()

    @property
    def is_speaking(self) -> bool:
        return self._current is not None or bool(self._queue)

    @property
    def is_paused(self) -> bool:
        return not self._resumed.is_set()

    async def join(self) -> None:
        """Wait until the queue drains or is cancelled."""
        if self._task is not None:
            await asyncio.gather(self._task, return_exceptions=True)

    async def _drain(self) -> None:
        os.makedirs(self.output_dir, exist_ok=True)
        try:
            while self._queue:
                await self._resumed.wait()
                if not self._queue:
                    break
                request = self._queue.popleft()
                self._current = request
                index = self._count
                self._count += 1
                path = os.path.join(self.output_dir, f"{index:03d}_{request.language or 'xx'}.mp3")

                request.on_start()
                try:
                    await self._synthesize(
                        request.text,
                        request.voice,
                        path,
                        rate=format_rate(request.rate),
                        pitch=format_pitch(request.pitch),
                    )
                except Exception as e:
                    self._current = None
                    request.on_error(SegmentEngineError(f"{request.voice}: {e}"))
                    continue

                self.clips.append(Clip(index=index, language=request.language, path=path))
                self._current = None
                request.on_end()
        finally:
            if self._task is None or self._task is asyncio.current_task():
                self._current = None
