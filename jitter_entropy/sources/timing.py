"""Execution-time jitter from deliberately wasteful computation."""

from __future__ import annotations

import time
from typing import Callable, NamedTuple

import numpy as np

from jitter_entropy.config import DEFAULT_CONFIG, JitterConfig
from jitter_entropy.mixer import MASK64, SecondaryMixer
from jitter_entropy.sources.base import EntropySource


class JitterSample(NamedTuple):
    """One busy-work measurement.

    ``duration`` is the elapsed clock time in nanoseconds. ``residue`` is
    the XOR of the two scratch accumulators, for folding into the pool's
    mixin word.
    """

    duration: int
    residue: int


class TimingJitterSource(EntropySource):
    """Entropy from the run time of a variable-length busy loop.

    Two nested loops of randomized length churn a pair of scratch words
    with values from SplitMix64 streams. The second loop reseeds its stream
    whenever one accumulator hits a modulus, so the amount of work depends
    on the data as well as on the iteration count. Scheduling, cache state
    and frequency scaling all leak into the measured duration.
    """

    name = "timing_jitter"
    description = "Duration of randomized busy-work loops"

    def __init__(
        self,
        mixer: SecondaryMixer | None = None,
        clock: Callable[[], int] = time.perf_counter_ns,
        config: JitterConfig = DEFAULT_CONFIG,
    ) -> None:
        self._mixer = mixer or SecondaryMixer()
        self._clock = clock
        self._config = config

    def is_available(self) -> bool:
        return True

    def _cycle_count(self) -> int:
        cfg = self._config
        return cfg.min_cycles + self._mixer.bounded_int(self._mixer.fresh_word(), cfg.cycle_span)

    def measure(self) -> JitterSample:
        """Run the busy work once and report how long it took."""
        mixer = self._mixer
        start = self._clock()

        first = self._cycle_count()
        a = mixer.fresh_word()
        b = mixer.fresh_word()
        inner = mixer.stream(mixer.fresh_word())
        for _ in range(first):
            a ^= (b & inner.next()) | inner.next()
            b ^= inner.next() ^ inner.next()

        second = self._cycle_count()
        modulus = self._config.reseed_modulus
        outer = mixer.stream(mixer.fresh_word())
        for _ in range(second):
            b ^= outer.next()
            a ^= outer.next() | outer.next()
            if b % modulus == 0:
                outer.reseed(mixer.fresh_word() ^ a)

        duration = (self._clock() - start) & MASK64
        return JitterSample(duration, a ^ b)

    def collect(self, n_samples: int = 200) -> np.ndarray:
        durations = np.empty(n_samples, dtype=np.uint64)
        for i in range(n_samples):
            durations[i] = self.measure().duration
        return (durations & 0xFF).astype(np.uint8)
