"""Linear-interpolating resampler for pitch shifting by playback rate."""

from __future__ import annotations

import math
from collections.abc import Sequence

from samplecore.granular import TimePitchError

_MIN_RATIO = 0.25
_MAX_RATIO = 4.0


def cubic_interpolate(y0: float, y1: float, y2: float, y3: float, frac: float) -> float:
    """Catmull-Rom interpolation between ``y1`` (frac 0) and ``y2`` (frac 1)."""
    a = -0.5 * y0 + 1.5 * y1 - 1.5 * y2 + 0.5 * y3
    b = y0 - 2.5 * y1 + 2.0 * y2 - 0.5 * y3
    c = -0.5 * y0 + 0.5 * y2
    return ((a * frac + b) * frac + c) * frac + y1


class Resampler:
    """Reads each input block at ``ratio`` samples per output sample.

    A ratio above 1 raises the pitch and shortens the block; below 1 lowers
    it. Each block is resampled on its own from position 0.
    """

    def __init__(self) -> None:
        self._sample_rate = 44100.0
        self._ratio = 1.0

    def prepare(self, sample_rate: float) -> None:
        """Set the sample rate and reset."""
        self._sample_rate = float(sample_rate)
        self.reset()

    @property
    def ratio(self) -> float:
        """Resampling ratio, clamped to 0.25..4; invalid values raise TimePitchError."""
        return self._ratio

    @ratio.setter
    def ratio(self, value: float) -> None:
        value = float(value)
        if not math.isfinite(value) or value <= 0.001:
            raise TimePitchError(f"ratio must be a finite number above 0.001, got {value}")
        self._ratio = max(_MIN_RATIO, min(_MAX_RATIO, value))

    def reset(self) -> None:
        """Blocks are independent, so there is no running state to clear."""

    def process(self, samples: Sequence[float], out_capacity: int) -> list[float]:
        """Resample one block, producing at most ``out_capacity`` samples."""
        count = len(samples)
        if count <= 0 or out_capacity <= 0:
            return []
        if abs(self._ratio - 1.0) < 0.001:
            return [float(s) for s in samples[:out_capacity]]

        last = count - 1
        out: list[float] = []
        pos = 0.0
        while len(out) < out_capacity:
            idx0 = int(pos)
            i0 = max(0, min(idx0, last))
            i1 = max(0, min(idx0 + 1, last))
            if i0 == i1:
                value = samples[i0]
            else:
                frac = max(0.0, min(1.0, pos - i0))
                value = samples[i0] * (1.0 - frac) + samples[i1] * frac
            out.append(value if math.isfinite(value) else 0.0)
            pos += self._ratio
            if pos >= count:
                break
        return out