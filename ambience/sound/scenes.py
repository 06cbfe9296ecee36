"""Scene generators — noise beds and transients layered into natural ambiences.

Each scene is a one-pole filtered noise bed, optionally shaped by a slow
envelope (ocean, wind) or decorated with sparse events (thunder, birds,
fire pops). The constants are presets tuned by ear.
"""

from __future__ import annotations

import numpy as np

from .base import AUDIO_SAMPLE_RATE, SampleStream
from .events import EventScheduler
from .filters import OnePoleFilter
from .noise import white_noise

TWO_PI = 2.0 * np.pi


class FilteredNoiseStream(SampleStream):
    """White noise through a one-pole filter at a fixed gain."""

    feedback: float = 0.95
    gain: float = 1.0

    def __init__(self, seed=None):
        super().__init__(seed)
        self.bed = OnePoleFilter(self.feedback, gain=self.gain)

    def render(self, n_frames: int) -> np.ndarray:
        return self.bed.process(white_noise(self.rng, n_frames))


class RainStream(FilteredNoiseStream):
    """Gentle rain on a window."""
    feedback = 0.95
    gain = 0.4


class CafeStream(FilteredNoiseStream):
    """Coffee shop murmur."""
    feedback = 0.95
    gain = 0.25


class ThunderStream(SampleStream):
    """Rain with an occasional rumble (about one every ten seconds).

    The rumble is fresh uniform noise at a random intensity in [0.3, 0.8),
    fading out linearly over half a second.
    """

    RUMBLE_SECONDS = 0.5
    MEAN_INTERVAL_SECONDS = 10

    def __init__(self, seed=None):
        super().__init__(seed)
        self.rain = RainStream(seed=int(self.rng.integers(2**32)))
        self.rumble = EventScheduler(
            self.spawn_rng(),
            trigger_range=AUDIO_SAMPLE_RATE * self.MEAN_INTERVAL_SECONDS,
            threshold=1,
            duration=int(AUDIO_SAMPLE_RATE * self.RUMBLE_SECONDS),
            on_arm=self._arm_rumble,
        )
        self.last_envelope = np.zeros(0, dtype=np.float64)

    def _arm_rumble(self, rng: np.random.Generator) -> float:
        return float(rng.random() * 0.5 + 0.3)

    def render(self, n_frames: int) -> np.ndarray:
        audio = self.rain.render(n_frames)
        envelope, intensity = self.rumble.advance(n_frames)
        self.last_envelope = envelope
        audio += white_noise(self.rng, n_frames) * intensity * envelope
        return audio


class OceanStream(SampleStream):
    """Deep filtered noise swelling and receding like waves."""

    PHASE_STEP = 0.00005  # rad/sample, one swell every ~2.85 s

    def __init__(self, seed=None):
        super().__init__(seed)
        self.bed = OnePoleFilter(0.98)
        self._sample = 0

    def render(self, n_frames: int) -> np.ndarray:
        index = np.arange(self._sample + 1, self._sample + n_frames + 1)
        self._sample += n_frames
        phases = self.PHASE_STEP * index
        swell = (np.sin(phases) + 1.0) * 0.5
        return self.bed.process(white_noise(self.rng, n_frames)) * swell * 0.5


class WindStream(SampleStream):
    """Filtered noise in gusts from two superposed slow sines."""

    GUST_PERIOD_SECONDS = 6.98
    GUST_RATIO = 2.3  # second sine, period ~3.03 s

    def __init__(self, seed=None):
        super().__init__(seed)
        self.bed = OnePoleFilter(0.97)
        period = round(self.GUST_PERIOD_SECONDS * self.sample_rate)
        self.phase_step = TWO_PI / period
        # Both sines line up again after 10 base periods
        self.cycle = 10 * period
        self._sample = 0

    def render(self, n_frames: int) -> np.ndarray:
        index = np.arange(self._sample + 1, self._sample + n_frames + 1) % self.cycle
        self._sample = (self._sample + n_frames) % self.cycle
        phases = self.phase_step * index
        gust = (np.sin(phases) + np.sin(phases * self.GUST_RATIO) + 2.0) * 0.25
        return self.bed.process(white_noise(self.rng, n_frames)) * gust * 0.4


class ForestStream(SampleStream):
    """Light wind through leaves with the odd bird chirp (~one every 3 s)."""

    CHIRP_LEVEL = 0.1

    def __init__(self, seed=None):
        super().__init__(seed)
        self.bed = OnePoleFilter(0.99, gain=0.15)
        self.birds = EventScheduler(
            self.spawn_rng(),
            trigger_range=AUDIO_SAMPLE_RATE * 3,
            threshold=1,
            duration=(2000, 8000),
            on_arm=self._arm_chirp,
        )
        self._phase = 0.0

    def _arm_chirp(self, rng: np.random.Generator) -> float:
        return float(rng.integers(2000, 4000))

    def render(self, n_frames: int) -> np.ndarray:
        audio = self.bed.process(white_noise(self.rng, n_frames))
        envelope, freq = self.birds.advance(n_frames)
        if not envelope.any():
            return audio

        # Phase only advances while a chirp is sounding; summed in sample order
        steps = np.concatenate(([self._phase], TWO_PI * freq / self.sample_rate))
        phases = np.cumsum(steps)[1:]
        self._phase = float(phases[-1])
        audio += np.sin(phases) * self.CHIRP_LEVEL * envelope
        return audio


class FireStream(SampleStream):
    """Crackling fireplace: bright noise bed plus short full-band pops."""

    POP_LEVEL = 0.4

    def __init__(self, seed=None):
        super().__init__(seed)
        self.bed = OnePoleFilter(0.8, gain=0.2)
        self.pop_rng = self.spawn_rng()
        self.pops = EventScheduler(
            self.spawn_rng(),
            trigger_range=1000,
            threshold=3,
            duration=(50, 200),
        )

    def render(self, n_frames: int) -> np.ndarray:
        audio = self.bed.process(white_noise(self.rng, n_frames))
        envelope, _ = self.pops.advance(n_frames)
        audio += white_noise(self.pop_rng, n_frames) * self.POP_LEVEL * envelope
        return audio
