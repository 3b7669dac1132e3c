"""
Time estimates for a vanity search.

The estimate benchmarks single-core generation throughput and combines it
with the geometric-distribution attempt count for the requested pattern.
It is advisory only; the search itself runs until enough matches are found.
"""

import math
import time
from typing import Callable, Optional

from aptvanity.core import generate_and_derive

INSTANT = "Should be instant"
DEFAULT_CONFIDENCE = 0.95
BENCHMARK_SAMPLES = 1000


def benchmark_throughput(sample_size: int = BENCHMARK_SAMPLES) -> int:
    """Measure single-thread key generation + derivation rate (keys/sec)."""
    if sample_size < 1:
        raise ValueError(f"Sample size must be at least 1, got {sample_size}")

    start = time.perf_counter()
    for _ in range(sample_size):
        generate_and_derive()
    elapsed = time.perf_counter() - start

    if elapsed <= 0:
        return sample_size
    rate = math.floor(sample_size / elapsed)
    if rate <= 0:
        raise RuntimeError(
            f"Benchmark measured no throughput ({sample_size} keys in {elapsed:.1f}s)"
        )
    return rate


def attempts_needed(match_length: int, confidence: float = DEFAULT_CONFIDENCE) -> int:
    """Attempts after which a match has been found with the given confidence."""
    probability = 16.0 ** -match_length
    return math.ceil(-math.log(1 - confidence) / probability)


def estimate_seconds(match_length: int, rate: int, thread_count: int = 1) -> float:
    return attempts_needed(match_length) / (rate * thread_count)


def format_duration(seconds: float) -> str:
    if seconds < 0.1:
        return f"~{seconds * 1000:.0f} milliseconds"
    elif seconds < 60:
        return f"~{math.ceil(seconds)} seconds"
    elif seconds < 3600:
        return f"~{math.ceil(seconds / 60)} minutes"
    elif seconds < 86400:
        return f"~{seconds / 3600:.1f} hours"
    else:
        return f"~{seconds / 86400:.1f} days"


def estimate_search(
    prefix: Optional[str] = None,
    suffix: Optional[str] = None,
    thread_count: int = 1,
    benchmark: Callable[[], int] = benchmark_throughput,
) -> str:
    """Human-readable estimate of the time to a first match.

    Args:
        prefix: Normalized hex prefix, or None.
        suffix: Normalized hex suffix, or None.
        thread_count: Number of workers the search will run with.
        benchmark: Returns the single-thread rate; only called when a
            pattern is given.
    """
    if not prefix and not suffix:
        return INSTANT

    match_length = len(prefix or "") + len(suffix or "")
    return format_duration(estimate_seconds(match_length, benchmark(), thread_count))
