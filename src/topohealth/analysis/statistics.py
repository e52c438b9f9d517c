"""Latency sample statistics."""

import math
from collections.abc import Iterable


def median(values: Iterable[float]) -> float:
    """Median of an unordered sample set; 0 for no samples.

    Even-length sets average the two middle values.
    """
    ordered = sorted(values)
    return _sorted_median(ordered)


def percentile(values: Iterable[float], p: float) -> float:
    """Linearly interpolated percentile; 0 for no samples.

    Uses ``index = p / 100 * (n - 1)`` over the sorted samples and
    interpolates between the bracketing order statistics.
    """
    ordered = sorted(values)
    return _sorted_percentile(ordered, p)


def _sorted_median(ordered: list[float]) -> float:
    n = len(ordered)
    if n == 0:
        return 0
    mid = n // 2
    if n % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]


def _sorted_percentile(ordered: list[float], p: float) -> float:
    if not ordered:
        return 0
    index = (p / 100) * (len(ordered) - 1)
    lower = math.floor(index)
    upper = math.ceil(index)
    weight = index - lower
    return ordered[lower] * (1 - weight) + ordered[upper] * weight


class LatencyDistribution:
    """Percentiles over one link's samples, sorting only once.

    Example:
        dist = LatencyDistribution([120.0, 80.0, 100.0])
        dist.p50  # 100.0
    """

    def __init__(self, samples: Iterable[float]):
        self._sorted = sorted(samples)

    @property
    def count(self) -> int:
        return len(self._sorted)

    @property
    def is_empty(self) -> bool:
        return not self._sorted

    def median(self) -> float | None:
        """Median, or None when there are no samples."""
        if self.is_empty:
            return None
        return _sorted_median(self._sorted)

    def percentile(self, p: float) -> float | None:
        """Percentile, or None when there are no samples."""
        if self.is_empty:
            return None
        return _sorted_percentile(self._sorted, p)

    @property
    def p50(self) -> float | None:
        return self.median()

    @property
    def p90(self) -> float | None:
        return self.percentile(90)

    @property
    def p95(self) -> float | None:
        return self.percentile(95)

    @property
    def p99(self) -> float | None:
        return self.percentile(99)
