"""PlaybackSession — owns the active scene stream, its sink and the volume."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .config import AmbienceConfig
from .sound.base import SampleStream
from .sound.factory import Scene, create, list_scenes, preset_for
from .sound.output import AudioSink, clamp_volume

logger = logging.getLogger(__name__)

SinkFactory = Callable[[], AudioSink]


@dataclass(frozen=True)
class SessionStatus:
    scene: Scene
    is_playing: bool
    volume: float


class PlaybackSession:
    """Plays at most one scene at a time on a freshly opened sink.

    Control methods run on the caller's thread and never touch a running
    stream: a scene change stops the sink, builds a new stream and starts
    again, so switching scenes is an audible restart.

    Usage::

        session = PlaybackSession(AmbienceConfig(volume=0.3))
        session.select(Scene.OCEAN)
        session.toggle_play()   # True if the device opened
        session.set_volume(0.6)
        session.close()
    """

    def __init__(
        self,
        config: AmbienceConfig | None = None,
        sink_factory: SinkFactory | None = None,
    ):
        self.config = config or AmbienceConfig()
        self._sink_factory = sink_factory or self._device_sink
        self._scene = self.config.default_scene
        self._volume = clamp_volume(self.config.volume)
        self._stream: SampleStream | None = None
        self._sink: AudioSink | None = None
        self._playing = False

    def _device_sink(self) -> AudioSink:
        # Loads PortAudio on first use
        from .sound.device import SoundDeviceSink

        c = self.config
        return SoundDeviceSink(
            block_size=c.block_size,
            latency=c.latency,
            device=c.device,
        )

    @property
    def scene(self) -> Scene:
        return self._scene

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def volume(self) -> float:
        return self._volume

    @property
    def stream(self) -> SampleStream | None:
        return self._stream

    @property
    def sink(self) -> AudioSink | None:
        return self._sink

    def list_scenes(self) -> list[Scene]:
        return list_scenes()

    def current_status(self) -> SessionStatus:
        return SessionStatus(self._scene, self._playing, self._volume)

    def select(self, scene: Scene | str) -> None:
        """Choose the scene; restarts playback if something is playing."""
        self._scene = Scene.parse(scene) or Scene.WHITE_NOISE
        logger.info("Selected scene: %s", preset_for(self._scene).name)
        if self._playing:
            self._stop()
            self._play()

    def toggle_play(self) -> bool:
        """Start if idle, stop if playing. Returns whether it is now playing."""
        if self._playing:
            self._stop()
        else:
            self._play()
        return self._playing

    def set_volume(self, volume: float) -> None:
        """Clamp to [0, 1] and forward to the sink. Stream gains are untouched."""
        self._volume = clamp_volume(volume)
        if self._sink is not None:
            self._sink.set_volume(self._volume)

    def _play(self) -> None:
        name = preset_for(self._scene).name
        stream = create(self._scene, seed=self.config.seed)
        try:
            sink = self._sink_factory()
            sink.set_volume(self._volume)
            sink.start(stream)
        except Exception:
            logger.exception("Failed to play sound: %s", name)
            return

        self._sink = sink
        self._stream = stream
        self._playing = True
        logger.info("Playing sound: %s", name)

    def _stop(self) -> None:
        sink = self._sink
        if sink is not None:
            try:
                sink.stop()
            except Exception:
                logger.exception("Error stopping sound")
        # The sink has returned from its last callback; the stream can go
        self._sink = None
        self._stream = None
        self._playing = False
        logger.info("Sound stopped")

    def close(self) -> None:
        """Stop playback and release the sink."""
        if self._playing:
            self._stop()

    def __enter__(self) -> PlaybackSession:
        return self

    def __exit__(self, *exc) -> None:
        self.close()
