"""Typed outputs derived from entropy pool draws."""

from __future__ import annotations

import threading

import numpy as np

from jitter_entropy.errors import DomainError
from jitter_entropy.pool import EntropyPool

MAX_LONG = (1 << 63) - 1
_FLOAT_BELOW_ONE = np.nextafter(np.float32(1.0), np.float32(0.0))


def _signed(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    if value >> (bits - 1):
        value -= 1 << bits
    return value


def _check_limit(limit: int) -> None:
    if limit <= 0:
        raise DomainError(f"limit must be positive, got {limit}")


class JitterRandom:
    """Random values from a timing-jitter entropy pool.

    Not safe for concurrent use; wrap in :class:`LockedJitterRandom` or keep
    one instance per thread.

    Usage::

        rng = JitterRandom()
        rng.next_long()        # signed 64-bit
        rng.next_int(6) + 1    # a die roll
        rng.next_double()      # [0, 1)
    """

    def __init__(self, pool: EntropyPool | None = None, **pool_kwargs) -> None:
        self._pool = pool if pool is not None else EntropyPool(**pool_kwargs)

    def absorb(self, data: bytes | bytearray | memoryview) -> None:
        """Inject external entropy into the underlying pool."""
        self._pool.absorb(data)

    def next_long(self, limit: int | None = None) -> int:
        """Signed 64-bit value, or ``[0, limit)`` when *limit* is given."""
        if limit is not None:
            _check_limit(limit)
            return abs(self.next_long()) % limit
        return _signed(self._pool.draw(), 64)

    def next_int(self, limit: int | None = None) -> int:
        """Signed 32-bit value, or ``[0, limit)`` when *limit* is given."""
        if limit is not None:
            _check_limit(limit)
            return abs(self.next_int()) % limit
        return _signed(self._pool.draw(), 32)

    def next_boolean(self) -> bool:
        return self.next_int(2) == 1

    def next_bytes(self, buf: bytearray | memoryview) -> None:
        """Fill *buf* in place, one draw per byte."""
        for i in range(len(buf)):
            buf[i] = self.next_int(256) & 0xFF

    def random_bytes(self, n_bytes: int) -> bytes:
        """Return *n_bytes* generated bytes."""
        buf = bytearray(n_bytes)
        self.next_bytes(buf)
        return bytes(buf)

    def next_double(self) -> float:
        """Float in ``[0, 1)`` from the magnitude of :meth:`next_long`.

        ``abs(MIN_LONG)`` does not fit in 63 bits and wraps to zero, so the
        one value that would otherwise reach 1.0 yields 0.0.
        """
        magnitude = abs(self.next_long()) & MAX_LONG
        return (magnitude >> 10) / float(1 << 53)

    def next_float(self) -> float:
        """:meth:`next_double` narrowed to single precision, still below 1.0."""
        value = np.float32(self.next_double())
        return float(min(value, _FLOAT_BELOW_ONE))


class LockedJitterRandom(JitterRandom):
    """:class:`JitterRandom` serialized behind one lock for shared use."""

    def __init__(self, pool: EntropyPool | None = None, **pool_kwargs) -> None:
        super().__init__(pool, **pool_kwargs)
        self._lock = threading.RLock()

    def absorb(self, data: bytes | bytearray | memoryview) -> None:
        with self._lock:
            super().absorb(data)

    def next_long(self, limit: int | None = None) -> int:
        with self._lock:
            return super().next_long(limit)

    def next_int(self, limit: int | None = None) -> int:
        with self._lock:
            return super().next_int(limit)
