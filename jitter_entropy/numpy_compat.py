"""NumPy-flavoured generator backed by the jitter entropy pool.

Usage::

    from jitter_entropy import JitterNumpyRandom
    rng = JitterNumpyRandom()
    rng.random(10)
    rng.integers(0, 256, size=100)
"""

from __future__ import annotations

import numpy as np

from jitter_entropy.pool import EntropyPool


class JitterBitGenerator:
    """A BitGenerator-like object drawing 64-bit words from an :class:`EntropyPool`.

    Not a true numpy BitGenerator subclass (that requires C capsules),
    but enough for :class:`JitterGenerator`.
    """

    def __init__(self, pool: EntropyPool | None = None):
        self._pool = pool if pool is not None else EntropyPool()
        self._draws = 0

    def random_raw(self, n: int = 1) -> np.ndarray:
        out = np.empty(n, dtype=np.uint64)
        for i in range(n):
            out[i] = self._pool.draw()
        self._draws += n
        return out

    @property
    def state(self) -> dict:
        return {
            "bit_generator": "JitterBitGenerator",
            "draws": self._draws,
        }


class JitterGenerator:
    """Subset of ``numpy.random.Generator`` computed straight from pool draws."""

    def __init__(self, bit_generator: JitterBitGenerator | None = None):
        self._bg = bit_generator or JitterBitGenerator()

    @staticmethod
    def _count(size) -> int:
        return 1 if size is None else int(np.prod(size))

    def _shape(self, values: np.ndarray, size):
        if size is None:
            return values[0].item()
        return values.reshape(size)

    def random(self, size=None):
        """Random floats in [0, 1) with 53 bits of precision."""
        raw = self._bg.random_raw(self._count(size))
        values = (raw >> np.uint64(11)).astype(np.float64) * (1.0 / (1 << 53))
        return self._shape(values, size)

    def uniform(self, low=0.0, high=1.0, size=None):
        return low + (high - low) * np.asarray(self.random(size))

    def integers(self, low, high=None, size=None):
        """Random integers in ``[low, high)``; ``[0, low)`` if *high* is None."""
        if high is None:
            low, high = 0, low
        span = int(high) - int(low)
        if span <= 0:
            raise ValueError("high must be greater than low")
        raw = self._bg.random_raw(self._count(size))
        values = np.array([int(low) + int(r) % span for r in raw], dtype=np.int64)
        return self._shape(values, size)

    def bytes(self, length: int) -> bytes:
        raw = self._bg.random_raw((length + 7) // 8)
        return raw.astype(">u8").tobytes()[:length]

    def choice(self, a, size=None):
        pool = np.asarray(a)
        idx = self.integers(0, len(pool), size=size)
        return pool[idx]

    def permutation(self, x):
        """Permuted copy of *x* (or of ``arange(x)`` for an int)."""
        arr = np.arange(x) if isinstance(x, (int, np.integer)) else np.array(x)
        keys = self._bg.random_raw(len(arr))
        return arr[np.argsort(keys, kind="stable")]

    @property
    def bit_generator(self):
        return self._bg
