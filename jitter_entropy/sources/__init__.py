"""Host entropy inputs consumed by the pool."""

from jitter_entropy.sources.base import EntropySource
from jitter_entropy.sources.memory import MemoryPressureProbe
from jitter_entropy.sources.timing import JitterSample, TimingJitterSource

ALL_SOURCES: list[type[EntropySource]] = [
    TimingJitterSource,
    MemoryPressureProbe,
]

__all__ = [
    "ALL_SOURCES",
    "EntropySource",
    "JitterSample",
    "MemoryPressureProbe",
    "TimingJitterSource",
]
