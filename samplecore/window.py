"""Window functions."""

from __future__ import annotations

import math


def make_hann(n: int) -> list[float]:
    """Symmetric Hann window of length ``n`` (empty for ``n <= 0``)."""
    if n <= 0:
        return []
    if n == 1:
        return [1.0]
    return [0.5 * (1.0 - math.cos(math.tau * i / (n - 1))) for i in range(n)]