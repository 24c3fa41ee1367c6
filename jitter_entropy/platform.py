"""Host discovery: which pool inputs work here, and how fine the clock is."""

from __future__ import annotations

import platform as _platform
import time
from typing import Iterable

from jitter_entropy.sources import ALL_SOURCES
from jitter_entropy.sources.base import EntropySource


def detect_available_sources(candidates: Iterable[type] = ALL_SOURCES) -> list[EntropySource]:
    """Instantiate each candidate class and keep the ones that work on this host."""
    return [src for src in (cls() for cls in candidates) if src.is_available()]


def find_source(fragment: str) -> EntropySource | None:
    """First available source whose name contains *fragment*."""
    return next((s for s in detect_available_sources() if fragment in s.name), None)


def platform_info() -> dict:
    """Host description, including the resolution of the jitter clock in ns."""
    clock = time.get_clock_info("perf_counter")
    return {
        "system": _platform.system(),
        "machine": _platform.machine(),
        "python": _platform.python_version(),
        "clock": clock.implementation,
        "clock_resolution_ns": clock.resolution * 1e9,
    }
