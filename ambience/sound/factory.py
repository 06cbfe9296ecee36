"""Scene catalogue and the factory that builds a fresh stream per scene."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import Enum

from .base import SampleStream
from .noise import NoiseColor, NoiseStream
from .scenes import (
    CafeStream,
    FireStream,
    ForestStream,
    OceanStream,
    RainStream,
    ThunderStream,
    WindStream,
)


class Scene(Enum):
    WHITE_NOISE = "white_noise"
    BROWN_NOISE = "brown_noise"
    PINK_NOISE = "pink_noise"
    RAIN = "rain"
    THUNDER = "thunder"
    OCEAN = "ocean"
    FOREST = "forest"
    FIRE = "fire"
    WIND = "wind"
    CAFE = "cafe"

    @classmethod
    def parse(cls, value: Scene | str) -> Scene | None:
        """Resolve a member, value (``"rain"``), name (``"RAIN"``) or display
        name (``"Café"``, ``"Brown Noise"``); None if unknown.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            # Fold accents so "Café" matches "cafe"
            folded = unicodedata.normalize("NFKD", value)
            folded = "".join(c for c in folded if not unicodedata.combining(c))
            key = folded.strip().lower().replace(" ", "_").replace("-", "_")
            for scene in cls:
                if key == scene.value:
                    return scene
        return None


@dataclass(frozen=True)
class ScenePreset:
    scene: Scene
    name: str
    description: str


PRESETS: tuple[ScenePreset, ...] = (
    ScenePreset(Scene.RAIN, "Rain", "Gentle rain on a window"),
    ScenePreset(Scene.THUNDER, "Thunder", "Thunderstorm with rain"),
    ScenePreset(Scene.OCEAN, "Ocean", "Waves on a beach"),
    ScenePreset(Scene.FOREST, "Forest", "Birds and rustling leaves"),
    ScenePreset(Scene.FIRE, "Fire", "Crackling fireplace"),
    ScenePreset(Scene.WIND, "Wind", "Gentle wind through trees"),
    ScenePreset(Scene.CAFE, "Café", "Coffee shop ambiance"),
    ScenePreset(Scene.WHITE_NOISE, "White Noise", "Pure white noise"),
    ScenePreset(Scene.BROWN_NOISE, "Brown Noise", "Deep brown noise"),
    ScenePreset(Scene.PINK_NOISE, "Pink Noise", "Soft pink noise"),
)

_PRESETS_BY_SCENE = {p.scene: p for p in PRESETS}


def list_scenes() -> list[Scene]:
    """All scenes in catalogue order."""
    return [p.scene for p in PRESETS]


def preset_for(scene: Scene) -> ScenePreset:
    return _PRESETS_BY_SCENE[scene]


def create(scene: Scene | str, seed=None) -> SampleStream:
    """Build a new stream for ``scene`` with all state zeroed.

    Never fails: anything that is not a known scene yields white noise.
    ``seed`` is passed to ``numpy.random.default_rng``.
    """
    resolved = Scene.parse(scene)
    if resolved == Scene.BROWN_NOISE:
        return NoiseStream(NoiseColor.BROWN, seed=seed)
    if resolved == Scene.PINK_NOISE:
        return NoiseStream(NoiseColor.PINK, seed=seed)
    if resolved == Scene.RAIN:
        return RainStream(seed=seed)
    if resolved == Scene.THUNDER:
        return ThunderStream(seed=seed)
    if resolved == Scene.OCEAN:
        return OceanStream(seed=seed)
    if resolved == Scene.FOREST:
        return ForestStream(seed=seed)
    if resolved == Scene.FIRE:
        return FireStream(seed=seed)
    if resolved == Scene.WIND:
        return WindStream(seed=seed)
    if resolved == Scene.CAFE:
        return CafeStream(seed=seed)
    return NoiseStream(NoiseColor.WHITE, seed=seed)
