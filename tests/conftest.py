"""Deterministic stand-ins for the pool's host collaborators."""

import pytest

from jitter_entropy.config import JitterConfig
from jitter_entropy.mixer import MASK64, SecondaryMixer
from jitter_entropy.pool import EntropyPool
from jitter_entropy.sources.timing import TimingJitterSource

FAST = JitterConfig(min_cycles=8, max_cycles=16)


class SteppedClock:
    """Returns *start*, then advances by each of *steps* in turn, cycling."""

    def __init__(self, start=1_000_000, steps=(1234, 977, 3001, 1500, 20)):
        self._now = start
        self._steps = steps
        self._calls = 0

    def __call__(self):
        value = self._now
        self._now += self._steps[self._calls % len(self._steps)]
        self._calls += 1
        return value


class LcgAmbient:
    """64-bit LCG standing in for os.urandom."""

    def __init__(self, seed=7):
        self._x = seed

    def __call__(self):
        self._x = (self._x * 6364136223846793005 + 1442695040888963407) & MASK64
        return self._x


class FixedMemory:
    def __init__(self, value=0x1F2E3D4C):
        self.value = value

    def read(self):
        return self.value


def make_pool(seed=7, config=FAST):
    clock = SteppedClock()
    mixer = SecondaryMixer(LcgAmbient(seed))
    jitter = TimingJitterSource(mixer, clock=clock, config=config)
    return EntropyPool(mixer, jitter, FixedMemory(), clock=clock, config=config)


@pytest.fixture
def pool():
    return make_pool()
