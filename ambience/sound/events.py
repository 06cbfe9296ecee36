"""EventScheduler — sparse, randomly timed transients with a linear fade-out."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np

ArmHook = Callable[[np.random.Generator], float]


class EventScheduler:
    """Countdown-driven transient events (thunder claps, bird chirps, pops).

    While idle, each sample arms an event with probability
    ``threshold / trigger_range``. An armed event lasts ``duration`` samples
    (an int, or a ``(low, high)`` range drawn per event) and its envelope is
    ``countdown / max_duration``, so it always fades to silence instead of
    cutting off.

    ``on_arm`` is called once per event with the scheduler's event generator
    and returns a value (intensity, frequency, ...) that :meth:`advance`
    reports for every sample of that event.

    Trigger draws and event parameters come from two generators spawned
    from ``rng``, one trigger draw per sample, so the output does not depend
    on how samples are split into blocks.

    Usage::

        sched = EventScheduler(rng, trigger_range=44100 * 10, threshold=1,
                               duration=22050)
        envelope, values = sched.advance(2205)
    """

    def __init__(
        self,
        rng: np.random.Generator,
        trigger_range: int,
        threshold: int,
        duration: int | tuple[int, int],
        max_duration: int | None = None,
        on_arm: ArmHook | None = None,
    ):
        if isinstance(duration, tuple):
            low, high = duration
            if not 0 < low < high:
                raise ValueError(f"invalid duration range {duration}")
        elif duration <= 0:
            raise ValueError(f"duration must be positive, got {duration}")
        if not 0 < threshold <= trigger_range:
            raise ValueError(
                f"threshold {threshold} outside trigger range {trigger_range}"
            )

        self.trigger_rng, self.event_rng = rng.spawn(2)
        self.trigger_range = trigger_range
        self.threshold = threshold
        self.duration = duration
        if max_duration is None:
            max_duration = duration[1] if isinstance(duration, tuple) else duration
        self.max_duration = max_duration
        self.on_arm = on_arm

        self.countdown = 0
        self.value = 0.0
        self.events_armed = 0

    @property
    def probability(self) -> float:
        """Chance of arming on any idle sample."""
        return self.threshold / self.trigger_range

    def _arm(self) -> None:
        if isinstance(self.duration, tuple):
            self.countdown = int(self.event_rng.integers(*self.duration))
        else:
            self.countdown = self.duration
        self.value = self.on_arm(self.event_rng) if self.on_arm is not None else 1.0
        self.events_armed += 1

    def advance(self, n_frames: int) -> tuple[np.ndarray, np.ndarray]:
        """Step ``n_frames`` samples.

        Returns ``(envelope, values)``: the fade envelope (0 while idle) and
        the armed event value for each sample (0 while idle).
        """
        envelope = np.zeros(n_frames, dtype=np.float64)
        values = np.zeros(n_frames, dtype=np.float64)
        triggers = self.trigger_rng.random(n_frames) < self.probability

        pos = 0
        while pos < n_frames:
            if self.countdown > 0:
                k = min(self.countdown, n_frames - pos)
                steps = np.arange(self.countdown, self.countdown - k, -1, dtype=np.float64)
                envelope[pos:pos + k] = steps / self.max_duration
                values[pos:pos + k] = self.value
                self.countdown -= k
                pos += k
                continue

            # Triggers drawn while an event was running are ignored
            hits = np.flatnonzero(triggers[pos:])
            if len(hits) == 0:
                break
            pos += int(hits[0])
            self._arm()

        return envelope, values

    def reset(self) -> None:
        self.countdown = 0
        self.value = 0.0
