"""One-pole smoothing filter — the leaky integrator behind every noise bed."""

from __future__ import annotations

import numpy as np
from scipy.signal import lfilter


class OnePoleFilter:
    """Causal first-order low-pass: ``y = y * a + x * (1 - a)``.

    ``feedback`` is ``a``. A larger feedback smooths harder, giving a deeper,
    duller texture; a smaller one stays close to the raw input. The
    accumulator carries across calls so consecutive blocks join seamlessly.

    Usage::

        filt = OnePoleFilter(0.95, gain=0.4)
        for chunk in chunks:
            hiss = filt.process(chunk)
    """

    def __init__(self, feedback: float, gain: float = 1.0):
        if not 0.0 < feedback < 1.0:
            raise ValueError(f"feedback must be in (0, 1), got {feedback}")
        self.feedback = feedback
        self.gain = gain
        self._b = np.array([1.0 - feedback])
        self._a = np.array([1.0, -feedback])
        self._y = 0.0

    @property
    def value(self) -> float:
        """Current accumulator (unscaled)."""
        return self._y

    def process(self, x: np.ndarray) -> np.ndarray:
        """Filter a chunk, returning ``y * gain`` for every input sample."""
        if len(x) == 0:
            return np.zeros(0, dtype=np.float64)
        # Direct form II transposed: the single delay element holds a * y[n-1]
        y, _ = lfilter(self._b, self._a, x, zi=[self.feedback * self._y])
        self._y = float(y[-1])
        if self.gain != 1.0:
            y *= self.gain
        return y

    def reset(self) -> None:
        """Zero the accumulator."""
        self._y = 0.0
