"""SoundDeviceSink — sounddevice OutputStream pulling from a SampleStream."""

from __future__ import annotations

import numpy as np
import sounddevice as sd

from .base import AUDIO_FORMAT, AudioFormat, SampleStream
from .output import AudioSink


class SoundDeviceSink(AudioSink):
    """Plays a stream on the default output device.

    PortAudio calls :meth:`_callback` on its own thread every block; the
    callback renders straight into the device buffer.

    Usage::

        sink = SoundDeviceSink(block_size=2205)
        sink.start(create(Scene.OCEAN))
        sink.set_volume(0.4)
        ...
        sink.stop()
    """

    def __init__(
        self,
        audio_format: AudioFormat = AUDIO_FORMAT,
        block_size: int = 2205,
        volume: float = 1.0,
        latency: str | float = "high",
        device: int | str | None = None,
    ):
        super().__init__(audio_format, volume)
        self.block_size = block_size
        self.latency = latency
        self.device = device
        self._stream: sd.OutputStream | None = None

    @property
    def active(self) -> bool:
        return self._stream is not None and self._stream.active

    def _callback(
        self,
        outdata: np.ndarray,
        frames: int,
        time_info: object,
        status: sd.CallbackFlags,
    ) -> None:
        self._render_into(outdata, frames)

    def start(self, stream: SampleStream) -> None:
        """Open the device and start pulling from ``stream``."""
        if self._stream is not None:
            self.stop()

        self._source = stream
        try:
            self._stream = sd.OutputStream(
                samplerate=self._format.sample_rate,
                blocksize=self.block_size,
                channels=self._format.channels,
                dtype=self._format.dtype,
                latency=self.latency,
                device=self.device,
                callback=self._callback,
            )
            self._stream.start()
        except Exception:
            if self._stream is not None:
                self._stream.close(ignore_errors=True)
                self._stream = None
            self._source = None
            raise

    def stop(self) -> None:
        """Stop and close the device stream, then drop the source."""
        if self._stream is not None:
            # stop() returns only after the last callback has finished
            self._stream.stop()
            self._stream.close()
            self._stream = None
        self._source = None
