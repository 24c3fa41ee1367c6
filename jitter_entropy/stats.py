"""Statistical checks for generator output.

Byte-level checks work on a 256-bin histogram; word-level checks look at
the unsigned 64-bit values the pool draws.
"""

from __future__ import annotations

import zlib

import numpy as np
from scipy import stats as sp_stats

WORD_BITS = 64


def byte_histogram(data) -> np.ndarray:
    """Counts of each byte value, always 256 bins."""
    return np.bincount(np.asarray(data, dtype=np.uint8).ravel(), minlength=256)


def shannon_entropy(data) -> float:
    """Shannon entropy in bits per byte."""
    hist = byte_histogram(data)
    p = hist[hist > 0] / hist.sum()
    return float(-(p * np.log2(p)).sum())


def min_entropy(data) -> float:
    """Min-entropy in bits per byte, set by the most frequent value."""
    hist = byte_histogram(data)
    return float(-np.log2(hist.max() / hist.sum()))


def compression_ratio(data: bytes | np.ndarray) -> float:
    """Deflated size over raw size; near 1.0 for incompressible input."""
    raw = data.astype(np.uint8).tobytes() if isinstance(data, np.ndarray) else bytes(data)
    if len(raw) < 10:
        return 0.0
    return len(zlib.compress(raw, 9)) / len(raw)


def chi_squared_uniformity(data, alpha: float = 0.01) -> dict:
    """Goodness of fit of the byte histogram against a flat one."""
    chi2, p = sp_stats.chisquare(byte_histogram(data))
    return {"chi2": float(chi2), "p_value": float(p), "uniform": bool(p >= alpha)}


def serial_correlation(data, lag: int = 1) -> float:
    """Pearson correlation between the sequence and itself shifted by *lag*."""
    x = np.asarray(data, dtype=float).ravel()
    if len(x) < lag + 2:
        return 0.0
    head, tail = x[:-lag], x[lag:]
    if head.std() == 0 or tail.std() == 0:
        return 0.0
    return float(np.corrcoef(head, tail)[0, 1])


def mean_deviation(samples, expected: float = 0.5) -> float:
    """Relative distance of the sample mean from *expected*."""
    return abs(float(np.mean(samples)) - expected) / expected


def bit_divergence(a: int, b: int, bits: int = WORD_BITS) -> float:
    """Fraction of the low *bits* bits that differ between *a* and *b*."""
    diff = (a ^ b) & ((1 << bits) - 1)
    return bin(diff).count("1") / bits


def bit_balance(words) -> np.ndarray:
    """Fraction of ones at each bit position across unsigned 64-bit words.

    Index 0 is the least significant bit. A healthy generator keeps every
    position close to 0.5.
    """
    arr = np.asarray([w & ((1 << WORD_BITS) - 1) for w in words], dtype=np.uint64)
    if arr.size == 0:
        return np.zeros(WORD_BITS)
    shifts = np.arange(WORD_BITS, dtype=np.uint64)
    ones = (arr[:, None] >> shifts) & np.uint64(1)
    return ones.mean(axis=0)


def grade_for(score: float) -> str:
    """Letter grade for a 0-100 quality score."""
    for grade, floor in (("A", 80), ("B", 60), ("C", 40), ("D", 20)):
        if score >= floor:
            return grade
    return "F"


def full_report(data, label: str = "", words=None) -> dict:
    """Byte-level checks on *data*, plus bit balance when *words* is given."""
    data = np.asarray(data, dtype=np.uint8).ravel()

    sh = shannon_entropy(data)
    cr = compression_ratio(data)
    chi = chi_squared_uniformity(data)
    sc = serial_correlation(data)
    score = (
        sh / 8.0 * 40
        + min(cr, 1.0) * 20
        + (20 if chi["uniform"] else 0)
        + (1 - min(abs(sc) * 10, 1.0)) * 20
    )

    report = {
        "label": label,
        "samples": int(data.size),
        "unique_values": int(np.count_nonzero(byte_histogram(data))),
        "shannon_entropy": round(sh, 4),
        "min_entropy": round(min_entropy(data), 4),
        "compression_ratio": round(cr, 4),
        "chi_squared": chi,
        "serial_correlation": round(sc, 6),
        "quality_score": round(score, 1),
        "grade": grade_for(score),
    }
    if words is not None:
        balance = bit_balance(words)
        report["worst_bit_bias"] = round(float(np.abs(balance - 0.5).max()), 4)
    return report
