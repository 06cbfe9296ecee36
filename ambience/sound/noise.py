"""Noise primitives — white noise and its filtered brown/pink colourings."""

from __future__ import annotations

from enum import Enum

import numpy as np

from .base import SampleStream
from .filters import OnePoleFilter

NOISE_GAIN = 0.3        # output level for all three colours
BROWN_FEEDBACK = 0.98
BROWN_MAKEUP = 3.5      # compensates the integrator's amplitude loss
PINK_FEEDBACK = 0.99


def white_noise(rng: np.random.Generator, n: int) -> np.ndarray:
    """Draw ``n`` uniform samples in [-1, 1)."""
    return rng.random(n) * 2.0 - 1.0


class NoiseColor(Enum):
    WHITE = "white"
    BROWN = "brown"
    PINK = "pink"


class NoiseStream(SampleStream):
    """Plain noise in one of three colours.

    White noise is raw uniform noise. Brown and pink are the same white
    noise run through a one-pole filter, brown with extra makeup gain.
    """

    def __init__(self, color: NoiseColor = NoiseColor.WHITE, seed=None):
        super().__init__(seed)
        self.color = color
        if color == NoiseColor.BROWN:
            self._filter = OnePoleFilter(BROWN_FEEDBACK, gain=BROWN_MAKEUP * NOISE_GAIN)
        elif color == NoiseColor.PINK:
            self._filter = OnePoleFilter(PINK_FEEDBACK, gain=NOISE_GAIN)
        else:
            self._filter = None

    def render(self, n_frames: int) -> np.ndarray:
        white = white_noise(self.rng, n_frames)
        if self._filter is None:
            return white * NOISE_GAIN
        return self._filter.process(white)
