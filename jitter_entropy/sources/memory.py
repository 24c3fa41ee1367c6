"""Free-memory probe, a secondary low-bandwidth pool input."""

from __future__ import annotations

import os

import numpy as np

from jitter_entropy.sources.base import EntropySource


class MemoryPressureProbe(EntropySource):
    """Approximate free physical memory of the host, in bytes.

    Reads ``SC_AVPHYS_PAGES * SC_PAGE_SIZE``. The low bits move with every
    allocation anywhere on the machine. Hosts without ``sysconf`` report 0,
    which leaves the pool's other inputs untouched.
    """

    name = "memory_pressure"
    description = "Free physical memory reported by sysconf"

    def is_available(self) -> bool:
        return self.read() > 0

    def read(self) -> int:
        try:
            pages = os.sysconf("SC_AVPHYS_PAGES")
            page_size = os.sysconf("SC_PAGE_SIZE")
        except (AttributeError, ValueError, OSError):
            return 0
        return max(pages, 0) * max(page_size, 0)

    def collect(self, n_samples: int = 1000) -> np.ndarray:
        readings = np.empty(n_samples, dtype=np.uint64)
        for i in range(n_samples):
            readings[i] = self.read() // 4096
        return (readings & 0xFF).astype(np.uint8)
