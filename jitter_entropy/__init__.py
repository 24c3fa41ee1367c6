"""
jitter-entropy: a pseudorandom generator that keeps reseeding itself
from the run time of deliberately wasteful computation.

Not a cryptographically certified generator.
"""

__version__ = "0.1.0"

from jitter_entropy.config import JitterConfig
from jitter_entropy.errors import (
    ConfigurationError,
    DomainError,
    EntropyUnavailableError,
    JitterEntropyError,
)
from jitter_entropy.generator import JitterRandom, LockedJitterRandom
from jitter_entropy.mixer import SecondaryMixer
from jitter_entropy.pool import EntropyPool

__all__ = [
    "ConfigurationError",
    "DomainError",
    "EntropyPool",
    "EntropyUnavailableError",
    "JitterConfig",
    "JitterEntropyError",
    "JitterNumpyRandom",
    "JitterRandom",
    "LockedJitterRandom",
    "SecondaryMixer",
    "__version__",
]


def JitterNumpyRandom(**kwargs):
    """Create a Generator-like RNG backed by the jitter pool.

    Example::

        from jitter_entropy import JitterNumpyRandom
        rng = JitterNumpyRandom()
        rng.random(10)
        rng.integers(0, 100)
    """
    from jitter_entropy.numpy_compat import JitterGenerator
    return JitterGenerator(**kwargs)
