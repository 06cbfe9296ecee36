"""Sample stream ABC and the fixed audio format every generator renders in."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np

AUDIO_SAMPLE_RATE = 44100
AUDIO_CHANNELS = 2


@dataclass(frozen=True)
class AudioFormat:
    """Sample rate, channel count and dtype of an interleaved float buffer."""
    sample_rate: int = AUDIO_SAMPLE_RATE
    channels: int = AUDIO_CHANNELS
    dtype: str = "float32"


AUDIO_FORMAT = AudioFormat()


class SampleStream(ABC):
    """Infinite, stateful, pull-based source of audio frames.

    Subclasses implement :meth:`render`, which produces the next ``n_frames``
    of mono signal. :meth:`fill` is what an output sink calls from its audio
    thread: it duplicates the mono signal onto every channel of ``out``.

    A stream owns its state and its random generator, so it must only ever be
    pulled by one caller at a time.

    Usage::

        stream = RainStream(seed=7)
        block = np.empty((2205, 2), dtype=np.float32)
        stream.fill(block, 2205)
    """

    format: AudioFormat = AUDIO_FORMAT

    def __init__(self, seed=None):
        self.rng = np.random.default_rng(seed)

    @property
    def sample_rate(self) -> int:
        return self.format.sample_rate

    def spawn_rng(self) -> np.random.Generator:
        """Independent child generator for one layer of the stream."""
        return self.rng.spawn(1)[0]

    @abstractmethod
    def render(self, n_frames: int) -> np.ndarray:
        """Advance the stream by ``n_frames`` and return mono float64 samples."""
        ...

    def fill(self, out: np.ndarray, frame_count: int) -> int:
        """Write ``frame_count`` frames into ``out`` (shape ``(frames, channels)``).

        Always returns ``frame_count``; the stream never ends.
        """
        if frame_count <= 0:
            return 0
        mono = self.render(frame_count)
        np.clip(mono, -1.0, 1.0, out=mono)
        out[:frame_count] = mono[:, np.newaxis]
        return frame_count

    def read(self, frame_count: int) -> np.ndarray:
        """Return a freshly allocated ``(frame_count, channels)`` block."""
        block = np.empty((frame_count, self.format.channels), dtype=self.format.dtype)
        self.fill(block, frame_count)
        return block
