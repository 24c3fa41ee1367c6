"""Tests for generator configuration."""

import pytest

from jitter_entropy.config import DEFAULT_CONFIG, JitterConfig
from jitter_entropy.errors import ConfigurationError


def test_defaults():
    assert (DEFAULT_CONFIG.min_cycles, DEFAULT_CONFIG.max_cycles) == (2000, 3000)
    assert DEFAULT_CONFIG.cycle_span == 1000
    assert DEFAULT_CONFIG.reseed_modulus == 100
    assert DEFAULT_CONFIG.remix_modulus == 10


@pytest.mark.parametrize(
    "kwargs",
    [
        {"min_cycles": 0},
        {"min_cycles": 50, "max_cycles": 50},
        {"reseed_modulus": 0},
        {"remix_modulus": 0},
    ],
)
def test_rejects_bad_values(kwargs):
    with pytest.raises(ConfigurationError):
        JitterConfig(**kwargs)


def test_frozen():
    with pytest.raises(AttributeError):
        DEFAULT_CONFIG.min_cycles = 1
