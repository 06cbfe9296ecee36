"""Ambience configuration — dataclass-based config with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass

from .sound.factory import Scene


@dataclass
class AmbienceConfig:
    # Audio (format itself is fixed: 44100 Hz, stereo, float32)
    block_size: int = 2205              # ~50ms at 44100 Hz
    latency: str | float = "high"       # sounddevice latency hint
    device: int | str | None = None     # None = system default output

    # Playback
    default_scene: Scene = Scene.RAIN
    volume: float = 0.5
    seed: int | None = None             # fixed seed for reproducible streams
