"""Abstract base class for the pool's entropy inputs."""

from abc import ABC, abstractmethod

import numpy as np

from jitter_entropy import stats


class EntropySource(ABC):
    """Base class for a host entropy input feeding the pool.

    Every source declares metadata and implements ``is_available`` and
    ``collect``. ``entropy_quality`` grades a fresh sample.
    """

    name: str = "unnamed"
    description: str = ""

    @abstractmethod
    def is_available(self) -> bool:
        """Return True if the source can operate on this machine."""
        ...

    @abstractmethod
    def collect(self, n_samples: int = 1000) -> np.ndarray:
        """Collect raw samples reduced to their low byte.

        Returns
        -------
        numpy.ndarray
            1-D uint8 array with *n_samples* entries.
        """
        ...

    def entropy_quality(self, n_samples: int = 1000) -> dict:
        """Collect a sample and run basic quality checks."""
        return self.quality_report(self.collect(n_samples))

    def quality_report(self, data: np.ndarray) -> dict:
        """Grade already collected samples.

        The score weighs byte entropy, compressibility and how many of the
        256 byte values turned up. Fewer than 16 samples grade F.
        """
        data = np.asarray(data, dtype=np.uint8).ravel()
        if data.size < 16:
            return {"grade": "F", "error": "insufficient data", "samples": int(data.size)}

        sh = stats.shannon_entropy(data)
        cr = stats.compression_ratio(data)
        unique = int(np.count_nonzero(stats.byte_histogram(data)))
        score = sh / 8.0 * 60 + min(cr, 1.0) * 20 + unique / 256 * 20
        return {
            "label": self.name,
            "samples": int(data.size),
            "unique_values": unique,
            "shannon_entropy": round(sh, 4),
            "compression_ratio": round(cr, 4),
            "quality_score": round(score, 1),
            "grade": stats.grade_for(score),
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
