"""Tests for the SplitMix64 secondary mixer."""

import pytest

from jitter_entropy.errors import DomainError, EntropyUnavailableError
from jitter_entropy.mixer import MASK64, SecondaryMixer, SplitMix64, bounded_int, mix, system_ambient


class TestMix:
    def test_reference_vectors(self):
        assert mix(0) == 0xE220A8397B1DCDAF
        assert mix(1) == 0x910A2DEC89025CC1
        assert mix(42) == 0xBDD732262FEB6E95

    def test_stays_in_64_bits(self):
        assert 0 <= mix(MASK64) <= MASK64

    def test_single_bit_seed_change_avalanches(self):
        diff = mix(1 << 20) ^ mix(1 << 21)
        assert 16 <= bin(diff).count("1") <= 48


class TestBoundedInt:
    def test_reference_values(self):
        assert [bounded_int(s, 64) for s in range(4)] == [56, 36, 37, 7]
        assert bounded_int(42, 1000) == 741

    def test_range(self):
        for seed in range(2000):
            assert 0 <= bounded_int(seed, 10) < 10

    def test_masks_oversized_seed(self):
        assert bounded_int(MASK64 + 1, 64) == bounded_int(0, 64)

    @pytest.mark.parametrize("bound", [0, -1])
    def test_rejects_non_positive_bound(self, bound):
        with pytest.raises(DomainError):
            bounded_int(3, bound)


class TestSplitMix64:
    def test_reference_stream(self):
        s = SplitMix64(0)
        assert [s.next() for _ in range(3)] == [
            0xE220A8397B1DCDAF,
            0x6E789E6AA1B965F4,
            0x06C45D188009454F,
        ]

    def test_first_output_equals_mix(self):
        assert SplitMix64(123456789).next() == mix(123456789)

    def test_reseed_restarts_stream(self):
        s = SplitMix64(5)
        s.next()
        s.next()
        s.reseed(0)
        assert s.next() == 0xE220A8397B1DCDAF

    def test_bounded_int(self):
        s = SplitMix64(99)
        values = [s.bounded_int(4) for _ in range(1000)]
        assert set(values) == {0, 1, 2, 3}
        with pytest.raises(DomainError):
            s.bounded_int(0)


class TestSecondaryMixer:
    def test_fresh_word_uses_ambient(self):
        mixer = SecondaryMixer(lambda: (1 << 70) | 5)
        assert mixer.fresh_word() == 5

    def test_default_ambient_varies(self):
        mixer = SecondaryMixer()
        words = {mixer.fresh_word() for _ in range(8)}
        assert len(words) > 1
        assert all(0 <= w <= MASK64 for w in words)

    def test_stream_is_deterministic(self):
        mixer = SecondaryMixer()
        a, b = mixer.stream(77), mixer.stream(77)
        assert [a.next() for _ in range(5)] == [b.next() for _ in range(5)]

    def test_missing_ambient_is_fatal(self, monkeypatch):
        def _no_urandom(n):
            raise NotImplementedError

        monkeypatch.setattr("jitter_entropy.mixer.os.urandom", _no_urandom)
        with pytest.raises(EntropyUnavailableError):
            system_ambient()
