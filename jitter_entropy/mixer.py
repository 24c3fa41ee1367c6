"""SplitMix64-based secondary mixer.

Every place that needs "a generator seeded with X" uses :class:`SplitMix64`
so output is defined by an explicit algorithm rather than a platform
generator. The only non-deterministic input is :meth:`SecondaryMixer.fresh_word`,
which reads the host's ambient randomness.
"""

from __future__ import annotations

import os
from typing import Callable

from jitter_entropy.errors import DomainError, EntropyUnavailableError

MASK64 = 0xFFFFFFFFFFFFFFFF
GOLDEN_GAMMA = 0x9E3779B97F4A7C15
_MIX1 = 0xBF58476D1CE4E5B9
_MIX2 = 0x94D049BB133111EB


def _finalize(z: int) -> int:
    z = ((z ^ (z >> 30)) * _MIX1) & MASK64
    z = ((z ^ (z >> 27)) * _MIX2) & MASK64
    return z ^ (z >> 31)


def mix(seed: int) -> int:
    """One SplitMix64 step from *seed*: stretch any value into a full word."""
    return _finalize((seed + GOLDEN_GAMMA) & MASK64)


def bounded_int(seed: int, bound: int) -> int:
    """Map ``mix(seed)`` into ``[0, bound)`` with a multiply-shift reduction."""
    if bound <= 0:
        raise DomainError(f"bound must be positive, got {bound}")
    return (mix(seed & MASK64) * bound) >> 64


class SplitMix64:
    """Seeded SplitMix64 stream. The first ``next()`` equals ``mix(seed)``."""

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        self._state = seed & MASK64

    def reseed(self, seed: int) -> None:
        self._state = seed & MASK64

    def next(self) -> int:
        self._state = (self._state + GOLDEN_GAMMA) & MASK64
        return _finalize(self._state)

    def bounded_int(self, bound: int) -> int:
        if bound <= 0:
            raise DomainError(f"bound must be positive, got {bound}")
        return (self.next() * bound) >> 64


def system_ambient() -> int:
    """64 bits from ``os.urandom``."""
    try:
        return int.from_bytes(os.urandom(8), "big")
    except NotImplementedError as exc:
        raise EntropyUnavailableError("no ambient randomness source on this host") from exc


class SecondaryMixer:
    """Deterministic mixing functions plus one ambient-randomness tap.

    Parameters
    ----------
    ambient:
        Zero-argument callable returning an int; only its low 64 bits are
        used. Defaults to :func:`system_ambient`.
    """

    mix = staticmethod(mix)
    bounded_int = staticmethod(bounded_int)

    def __init__(self, ambient: Callable[[], int] | None = None) -> None:
        self._ambient = ambient or system_ambient

    def fresh_word(self) -> int:
        return self._ambient() & MASK64

    def stream(self, seed: int) -> SplitMix64:
        return SplitMix64(seed)
