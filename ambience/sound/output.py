"""Audio sinks — the pull side that drives a SampleStream."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from .base import AUDIO_FORMAT, AudioFormat, SampleStream


def clamp_volume(volume: float) -> float:
    return float(min(max(volume, 0.0), 1.0))


class AudioSink(ABC):
    """Something that repeatedly pulls frames from a stream.

    The sink reads ``self._source`` once per callback, so swapping streams is
    a single attribute assignment and never hands the audio thread a
    half-built generator. Volume is applied by the sink, after the stream
    has rendered, and never changes the stream's own gains.
    """

    def __init__(self, audio_format: AudioFormat = AUDIO_FORMAT, volume: float = 1.0):
        self._format = audio_format
        self._volume = clamp_volume(volume)
        self._source: SampleStream | None = None

    @property
    def format(self) -> AudioFormat:
        return self._format

    @property
    def volume(self) -> float:
        return self._volume

    def set_volume(self, volume: float) -> None:
        self._volume = clamp_volume(volume)

    @property
    def source(self) -> SampleStream | None:
        return self._source

    @property
    @abstractmethod
    def active(self) -> bool:
        ...

    @abstractmethod
    def start(self, stream: SampleStream) -> None:
        """Begin pulling from ``stream``. Raises if the device cannot open."""
        ...

    @abstractmethod
    def stop(self) -> None:
        """Stop pulling. No callback is running or pending once this returns."""
        ...

    def _render_into(self, outdata: np.ndarray, frames: int) -> None:
        source = self._source
        if source is None:
            outdata.fill(0.0)
            return
        source.fill(outdata, frames)
        if self._volume != 1.0:
            outdata *= self._volume


class MemorySink(AudioSink):
    """Offline sink: frames are pulled explicitly with :meth:`pull`.

    Usage::

        sink = MemorySink()
        sink.start(create(Scene.RAIN, seed=1))
        block = sink.pull(44100)  # one second, volume applied
        sink.stop()
    """

    def __init__(self, audio_format: AudioFormat = AUDIO_FORMAT, volume: float = 1.0):
        super().__init__(audio_format, volume)
        self.frames_pulled = 0

    @property
    def active(self) -> bool:
        return self._source is not None

    def start(self, stream: SampleStream) -> None:
        self._source = stream
        self.frames_pulled = 0

    def pull(self, frames: int) -> np.ndarray:
        """Render ``frames`` frames the way a device callback would."""
        block = np.empty((frames, self._format.channels), dtype=self._format.dtype)
        self._render_into(block, frames)
        if self._source is not None:
            self.frames_pulled += frames
        return block

    def stop(self) -> None:
        self._source = None
