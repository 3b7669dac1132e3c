import math

import pytest

from aptvanity.estimate import (
    INSTANT,
    attempts_needed,
    benchmark_throughput,
    estimate_seconds,
    estimate_search,
    format_duration,
)


def fail_benchmark():
    raise AssertionError("benchmark should not run")


def test_estimate_without_pattern_is_instant():
    assert estimate_search(None, None, 4, benchmark=fail_benchmark) == INSTANT
    assert estimate_search("", "", 4, benchmark=fail_benchmark) == INSTANT


def test_attempts_needed_for_four_chars():
    assert attempts_needed(4) == math.ceil(-math.log(0.05) / 16 ** -4)
    assert 196000 < attempts_needed(4) < 197000


def test_attempts_needed_grows_with_length():
    assert attempts_needed(0) == 3
    assert attempts_needed(2) < attempts_needed(3)


def test_estimate_seconds_scales_with_threads():
    one = estimate_seconds(4, rate=1000, thread_count=1)
    four = estimate_seconds(4, rate=1000, thread_count=4)
    assert one == pytest.approx(four * 4)


@pytest.mark.parametrize("seconds,expected", [
    (0.05, "~50 milliseconds"),
    (1.2, "~2 seconds"),
    (59, "~59 seconds"),
    (61, "~2 minutes"),
    (5400, "~1.5 hours"),
    (86400 * 3, "~3.0 days"),
])
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


def test_estimate_search_uses_benchmark_and_threads():
    # prefix + suffix = 4 chars, 196,329 attempts at 10,000/sec over 2 threads
    result = estimate_search("ab", "cd", 2, benchmark=lambda: 10000)
    assert result == "~10 seconds"


def test_benchmark_throughput():
    rate = benchmark_throughput(50)
    assert isinstance(rate, int)
    assert rate > 0


def test_benchmark_rejects_empty_sample():
    with pytest.raises(ValueError):
        benchmark_throughput(0)
