"""Tests for the CLI."""

import base64
import logging

import pytest
from click.testing import CliRunner

from jitter_entropy import __version__
from jitter_entropy.cli import main

FAST = ["--min-cycles", "8", "--max-cycles", "16"]


class TestCLI:
    def test_version(self):
        r = CliRunner().invoke(main, ["--version"])
        assert r.exit_code == 0
        assert __version__ in r.output

    def test_scan(self):
        r = CliRunner().invoke(main, ["scan"])
        assert r.exit_code == 0
        assert "Platform" in r.output
        assert "ns resolution" in r.output
        assert "timing_jitter" in r.output

    def test_probe_timing(self):
        r = CliRunner().invoke(main, ["probe", "timing", "--samples", "50"])
        assert r.exit_code == 0
        assert "Grade" in r.output

    def test_probe_unknown(self):
        r = CliRunner().invoke(main, ["probe", "nonexistent"])
        assert r.exit_code == 1

    def test_sample_bounded_ints(self):
        r = CliRunner().invoke(main, ["sample", "int", "--count", "20", "--limit", "6", *FAST])
        assert r.exit_code == 0
        values = [int(v) for v in r.output.split()]
        assert len(values) == 20
        assert all(0 <= v < 6 for v in values)

    def test_sample_bad_limit(self):
        r = CliRunner().invoke(main, ["sample", "long", "--limit", "0", *FAST])
        assert r.exit_code == 2

    @pytest.mark.parametrize("kind", ["double", "float", "boolean"])
    def test_sample_limit_rejected_for_unbounded_kinds(self, kind):
        r = CliRunner().invoke(main, ["sample", kind, "--limit", "5", *FAST])
        assert r.exit_code == 2
        assert "--limit" in r.output

    def test_sample_doubles(self):
        r = CliRunner().invoke(main, ["sample", "double", "--count", "5", *FAST])
        assert r.exit_code == 0
        assert all(0.0 <= float(v) < 1.0 for v in r.output.split())

    def test_bad_cycle_bounds(self):
        r = CliRunner().invoke(main, ["sample", "int", "--min-cycles", "10", "--max-cycles", "5"])
        assert r.exit_code == 2

    def test_cycles_from_environment(self):
        env = {"JITTER_ENTROPY_MIN_CYCLES": "8", "JITTER_ENTROPY_MAX_CYCLES": "16"}
        r = CliRunner().invoke(main, ["sample", "boolean", "--count", "3"], env=env)
        assert r.exit_code == 0
        assert set(r.output.split()) <= {"True", "False"}

    def test_check(self):
        r = CliRunner().invoke(main, ["check", "--samples", "500", *FAST])
        assert r.exit_code == 0
        assert "Shannon entropy" in r.output
        assert "Worst bit bias" in r.output

    def test_verbose_flag(self, monkeypatch):
        calls = []
        monkeypatch.setattr("jitter_entropy.cli.logging.basicConfig", lambda **kw: calls.append(kw))
        r = CliRunner().invoke(main, ["-v", "sample", "int", "--count", "1", *FAST])
        assert r.exit_code == 0
        assert calls[0]["level"] == logging.DEBUG


def test_stream_hex():
    r = CliRunner().invoke(main, ["stream", "--format", "hex", "--bytes", "32", *FAST])
    assert r.exit_code == 0
    output = r.output.strip()
    assert len(output) == 64
    assert all(c in "0123456789abcdef" for c in output)


def test_stream_base64():
    r = CliRunner().invoke(main, ["stream", "--format", "base64", "--bytes", "32", *FAST])
    assert r.exit_code == 0
    assert len(base64.b64decode(r.output.strip())) == 32
