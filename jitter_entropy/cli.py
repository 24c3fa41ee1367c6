"""CLI for jitter-entropy."""

from __future__ import annotations

import logging
import sys
import time

import click
import numpy as np

from jitter_entropy import __version__


@click.group()
@click.version_option(__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log pool activity to stderr.")
def main(verbose: bool) -> None:
    """⏱  jitter-entropy: randomness from the time wasted computing it."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(message)s")


def cycle_options(fn):
    """Shared busy-work length options for commands that build a generator."""
    fn = click.option(
        "--max-cycles", default=3000, type=int, envvar="JITTER_ENTROPY_MAX_CYCLES",
        show_default=True, help="Upper bound (exclusive) of busy-work loop iterations.",
    )(fn)
    fn = click.option(
        "--min-cycles", default=2000, type=int, envvar="JITTER_ENTROPY_MIN_CYCLES",
        show_default=True, help="Lower bound of busy-work loop iterations.",
    )(fn)
    return fn


# ────────────────────────────────────────────────────────────
# Discovery
# ────────────────────────────────────────────────────────────


@main.command()
def scan() -> None:
    """List the entropy inputs available on this machine."""
    from jitter_entropy.platform import detect_available_sources, platform_info

    info = platform_info()
    click.echo(f"Platform: {info['system']} {info['machine']} (Python {info['python']})")
    click.echo(f"Clock:    {info['clock']} ({info['clock_resolution_ns']:g} ns resolution)")
    click.echo()

    sources = detect_available_sources()
    click.echo(f"Found {len(sources)} available entropy input(s):\n")
    for src in sources:
        click.echo(f"  ✅ {src.name:<20} {src.description}")
    if not sources:
        click.echo("  (none found)")


@main.command()
@click.argument("source_name")
@click.option("--samples", default=200, show_default=True, help="Samples to collect.")
def probe(source_name: str, samples: int) -> None:
    """Collect from one input and show quality stats."""
    from jitter_entropy.platform import find_source

    src = find_source(source_name)
    if src is None:
        click.echo(f"Source '{source_name}' not found. Run 'scan' to list sources.")
        sys.exit(1)

    click.echo(f"Probing: {src.name}")
    click.echo(f"  {src.description}")
    click.echo()

    t0 = time.monotonic()
    quality = src.entropy_quality(samples)
    elapsed = time.monotonic() - t0

    click.echo(f"  Grade:           {quality.get('grade', '?')}")
    click.echo(f"  Samples:         {quality.get('samples', 0):,}")
    click.echo(f"  Shannon entropy: {quality.get('shannon_entropy', 0):.4f} / 8.0 bits")
    click.echo(f"  Compression:     {quality.get('compression_ratio', 0):.4f}")
    click.echo(f"  Unique values:   {quality.get('unique_values', 0)}")
    click.echo(f"  Time:            {elapsed:.3f}s")


# ────────────────────────────────────────────────────────────
# Output
# ────────────────────────────────────────────────────────────


@main.command()
@click.argument("kind", type=click.Choice(["long", "int", "double", "float", "boolean"]))
@click.option("--count", default=10, show_default=True, help="Number of values.")
@click.option("--limit", default=None, type=int, help="Exclusive upper bound (long/int only).")
@cycle_options
def sample(kind: str, count: int, limit: int | None, min_cycles: int, max_cycles: int) -> None:
    """Print generated values, one per line."""
    from jitter_entropy.errors import JitterEntropyError

    if limit is not None and kind not in ("long", "int"):
        raise click.BadParameter(f"not accepted for {kind} values", param_hint="--limit")

    rng = _make_rng(min_cycles, max_cycles)
    draw = {
        "long": lambda: rng.next_long(limit),
        "int": lambda: rng.next_int(limit),
        "double": rng.next_double,
        "float": rng.next_float,
        "boolean": rng.next_boolean,
    }[kind]
    try:
        for _ in range(count):
            click.echo(draw())
    except JitterEntropyError as e:
        raise click.BadParameter(str(e), param_hint="--limit")


@main.command()
@click.option("--format", "fmt", type=click.Choice(["raw", "hex", "base64"]), default="raw",
              help="Output format.")
@click.option("--bytes", "n_bytes", default=0, type=int, help="Total bytes (0 = infinite).")
@cycle_options
def stream(fmt: str, n_bytes: int, min_cycles: int, max_cycles: int) -> None:
    """Stream generated bytes to stdout.

    Examples:

        jitter-entropy stream --format hex --bytes 256

        jitter-entropy stream --format raw --min-cycles 200 --max-cycles 300 > /tmp/jitter.bin
    """
    import base64

    rng = _make_rng(min_cycles, max_cycles)
    chunk_size = 256
    total = 0

    try:
        while True:
            if 0 < n_bytes <= total:
                break
            want = chunk_size if n_bytes == 0 else min(chunk_size, n_bytes - total)
            data = rng.random_bytes(want)

            if fmt == "raw":
                sys.stdout.buffer.write(data)
                sys.stdout.buffer.flush()
            elif fmt == "hex":
                sys.stdout.write(data.hex())
                sys.stdout.flush()
            elif fmt == "base64":
                sys.stdout.write(base64.b64encode(data).decode())
                sys.stdout.flush()

            total += len(data)
    except (BrokenPipeError, KeyboardInterrupt):
        pass


@main.command()
@click.option("--samples", default=10000, show_default=True, help="Draws per check.")
@cycle_options
def check(samples: int, min_cycles: int, max_cycles: int) -> None:
    """Run distribution checks on generator output."""
    from jitter_entropy.stats import full_report, mean_deviation

    rng = _make_rng(min_cycles, max_cycles)

    t0 = time.monotonic()
    doubles = np.array([rng.next_double() for _ in range(samples)])
    booleans = np.array([rng.next_boolean() for _ in range(samples)])
    words = [rng.next_long() for _ in range(samples)]
    data = np.frombuffer(rng.random_bytes(samples), dtype=np.uint8)
    elapsed = time.monotonic() - t0

    r = full_report(data, "bytes", words=words)
    click.echo(f"Samples per check: {samples:,} ({elapsed:.2f}s)")
    click.echo(f"  Double mean:      {doubles.mean():.5f} (deviation {mean_deviation(doubles):.3%})")
    click.echo(f"  Double range:     [{doubles.min():.6f}, {doubles.max():.6f}]")
    click.echo(f"  True fraction:    {booleans.mean():.4f}")
    click.echo(f"  Shannon entropy:  {r['shannon_entropy']:.4f} / 8.0 bits/byte")
    click.echo(f"  Chi-squared p:    {r['chi_squared']['p_value']:.4f}")
    click.echo(f"  Serial corr.:     {r['serial_correlation']:+.5f}")
    click.echo(f"  Worst bit bias:   {r['worst_bit_bias']:.4f}")
    click.echo(f"  Grade:            {r['grade']} ({r['quality_score']})")


# ────────────────────────────────────────────────────────────
# Helpers
# ────────────────────────────────────────────────────────────


def _make_rng(min_cycles: int, max_cycles: int):
    """Build a JitterRandom, turning bad cycle bounds into a usage error."""
    from jitter_entropy.config import JitterConfig
    from jitter_entropy.errors import ConfigurationError
    from jitter_entropy.generator import JitterRandom

    try:
        config = JitterConfig(min_cycles=min_cycles, max_cycles=max_cycles)
    except ConfigurationError as e:
        raise click.BadParameter(str(e), param_hint="--min-cycles/--max-cycles")
    return JitterRandom(config=config)
