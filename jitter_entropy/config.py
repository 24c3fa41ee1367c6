"""Tunables for the jitter busy work and the pool re-mix."""

from __future__ import annotations

from dataclasses import dataclass

from jitter_entropy.errors import ConfigurationError


@dataclass(frozen=True)
class JitterConfig:
    """Knobs shared by :class:`TimingJitterSource` and :class:`EntropyPool`.

    Parameters
    ----------
    min_cycles, max_cycles:
        Each busy-work loop runs a random number of iterations in
        ``[min_cycles, max_cycles)``.
    reseed_modulus:
        The second busy-work loop reseeds its stream whenever the scratch
        accumulator is divisible by this value.
    remix_modulus:
        ``entropize`` reseeds its local stream from the mixin word whenever
        the measured duration is divisible by this value.
    """

    min_cycles: int = 2000
    max_cycles: int = 3000
    reseed_modulus: int = 100
    remix_modulus: int = 10

    def __post_init__(self) -> None:
        if self.min_cycles <= 0:
            raise ConfigurationError(f"min_cycles must be positive, got {self.min_cycles}")
        if self.max_cycles <= self.min_cycles:
            raise ConfigurationError(
                f"max_cycles ({self.max_cycles}) must exceed min_cycles ({self.min_cycles})"
            )
        if self.reseed_modulus < 1 or self.remix_modulus < 1:
            raise ConfigurationError("moduli must be >= 1")

    @property
    def cycle_span(self) -> int:
        return self.max_cycles - self.min_cycles


DEFAULT_CONFIG = JitterConfig()
