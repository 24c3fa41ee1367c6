"""Self-mixing entropy pool refreshed by execution-timing jitter.

Architecture:
1. Four state words start from fixed balanced constants (32 ones, 32 zeros)
2. Construction folds sixteen jitter durations plus ambient words into them
3. Every draw XOR-combines the words, then re-mixes from a new measurement
4. Diffusion shifts each word and folds in its ring neighbour
5. The words rotate one slot so no slot feeds the same output position twice

All top-level state updates are XOR, shift or rotation. XOR favours neither
zeros nor ones, so repeated mixing does not decay toward a low-entropy state.

The pool holds no lock. Share one instance between threads only behind an
external lock (see :class:`jitter_entropy.generator.LockedJitterRandom`).
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Protocol

from jitter_entropy.config import DEFAULT_CONFIG, JitterConfig
from jitter_entropy.mixer import MASK64, SecondaryMixer, SplitMix64
from jitter_entropy.sources.memory import MemoryPressureProbe
from jitter_entropy.sources.timing import JitterSample, TimingJitterSource

logger = logging.getLogger(__name__)

INITIAL_WORDS = (
    0x967CA962DD134C55,
    0x8E678EC4FA4A3721,
    0x741677F32BF14850,
    0x82359B9BBD5E1708,
)
INITIAL_MIXIN = 0x3955170223037924

# Order in which each seeding round folds its four durations.
SEED_ORDER = (
    (0, 1, 2, 3),
    (1, 2, 0, 3),
    (2, 0, 3, 1),
    (3, 0, 1, 2),
)


class JitterMeter(Protocol):
    def measure(self) -> JitterSample: ...


class MemoryReader(Protocol):
    def read(self) -> int: ...


class EntropyPool:
    """Five-word mixing pool.

    Usage::

        pool = EntropyPool()
        word = pool.draw()          # unsigned 64-bit
        pool.absorb(b"external noise")

    Parameters
    ----------
    mixer:
        Secondary mixer supplying SplitMix64 streams and ambient words.
    jitter:
        Object with ``measure() -> JitterSample``. Defaults to a
        :class:`TimingJitterSource` sharing *mixer* and *config*.
    memory:
        Object with ``read() -> int``. Defaults to :class:`MemoryPressureProbe`.
    clock:
        Nanosecond clock for the start-time salt and absorb routing.
    """

    def __init__(
        self,
        mixer: SecondaryMixer | None = None,
        jitter: JitterMeter | None = None,
        memory: MemoryReader | None = None,
        clock: Callable[[], int] = time.perf_counter_ns,
        config: JitterConfig = DEFAULT_CONFIG,
    ) -> None:
        t0 = time.perf_counter()
        self._mixer = mixer or SecondaryMixer()
        self._jitter = jitter or TimingJitterSource(self._mixer, config=config)
        self._memory = memory or MemoryPressureProbe()
        self._clock = clock
        self._config = config

        self._words = list(INITIAL_WORDS)
        self._mixin = INITIAL_MIXIN
        self._start_time = clock() & MASK64

        self._seed()
        logger.debug("entropy pool seeded in %.3f ms", (time.perf_counter() - t0) * 1e3)

    # ── seeding ──

    def _measure_jitter(self) -> int:
        sample = self._jitter.measure()
        self._mixin ^= sample.residue & MASK64
        return sample.duration & MASK64

    def _seed(self) -> None:
        self._measure_jitter()  # warm-up
        mixer = self._mixer
        for k, order in enumerate(SEED_ORDER):
            durations = [self._measure_jitter() for _ in range(4)]
            mix = 0
            for i in order:
                mix = (mix + (durations[i] << mixer.bounded_int(mixer.fresh_word(), 64))) & MASK64
            if k == 0:
                mix ^= self._memory.read() & MASK64
            self._words[k] ^= mixer.fresh_word() ^ mix

    # ── re-mixing ──

    def entropize(self) -> None:
        """Fold a fresh jitter measurement and a memory reading into the words."""
        w = self._words
        d = self._measure_jitter()
        stream = self._mixer.stream(d)

        w[0] ^= stream.next()
        w[1] ^= stream.next()
        if d % self._config.remix_modulus == 0:
            stream.reseed(self._mixin)
        w[2] ^= stream.next()
        w[3] ^= stream.next()

        route = self._mixer.bounded_int(self._mixer.fresh_word(), 4)
        w[route] ^= (self._memory.read() << stream.bounded_int(64)) & MASK64

    def absorb(self, data: bytes | bytearray | memoryview) -> None:
        """Fold caller-supplied bytes into the pool.

        Complete 8-byte big-endian chunks are salted with their offset,
        stretched through ``mix``, OR-combined with the next word in the ring
        and XORed into a word picked from elapsed clock time and the offset.
        Trailing bytes are salted and stretched the same way, one at a time.
        Every byte is consumed; empty input is a no-op.
        """
        data = bytes(data)
        if not data:
            return
        logger.debug("absorbing %d external bytes", len(data))

        w = self._words
        mix = self._mixer.mix
        start = self._clock()
        full = len(data) - len(data) % 8
        for off in range(0, full, 8):
            chunk = int.from_bytes(data[off:off + 8], "big")
            route = self._route(start, off)
            w[route] ^= mix(chunk ^ off) | w[(route + 1) % 4]
        for off in range(full, len(data)):
            route = self._route(start, off)
            w[route] ^= mix(data[off] ^ (off << 8))

    def _route(self, start: int, off: int) -> int:
        # Offset salt keeps a coarse clock from sending every piece to one word.
        return self._mixer.bounded_int(((self._clock() - start) ^ off) & MASK64, 4)

    # ── output ──

    def draw(self) -> int:
        """Return an unsigned 64-bit value and advance the pool."""
        shifts = self._mixer.stream(self._mixer.fresh_word())
        result = self._combine(shifts)
        self.entropize()
        self._diffuse(shifts)
        self._rotate()
        return result

    def _combine(self, shifts: SplitMix64) -> int:
        w = self._words
        mix = self._mixer.mix
        result = mix((w[2] << shifts.bounded_int(64)) & MASK64)
        result ^= mix((w[0] << shifts.bounded_int(64)) & MASK64)
        result ^= mix(w[1])
        result ^= mix((w[3] << shifts.bounded_int(64)) & MASK64)
        result ^= self._mixin
        result ^= mix((self._mixer.fresh_word() + self._start_time) & MASK64)
        return result

    def _diffuse(self, shifts: SplitMix64) -> None:
        w = self._words
        for k in range(4):
            w[k] = (w[k] << shifts.bounded_int(64)) & MASK64
        w[0] ^= ((w[1] << shifts.bounded_int(64)) & MASK64) | self._mixin
        w[1] ^= ((w[2] << shifts.bounded_int(64)) & MASK64) | self._mixer.fresh_word()
        w[2] ^= ((w[3] << shifts.bounded_int(64)) & MASK64) | self._mixin
        w[3] ^= ((w[0] << shifts.bounded_int(64)) & MASK64) | self._mixer.fresh_word()

    def _rotate(self) -> None:
        w = self._words
        w[0], w[1], w[2], w[3] = w[1], w[2], w[3], w[0]
