"""Second-order low-pass filter in direct form I."""

from __future__ import annotations

import math
from collections.abc import Iterable

_MIN_CUTOFF = 20.0
_MAX_CUTOFF = 20000.0
_MIN_RESONANCE = 0.1
_MAX_RESONANCE = 10.0


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class BiquadFilter:
    """Standard biquad low-pass filter with cutoff and resonance (Q) controls.

    Until :meth:`prepare` is called or a parameter is set, the filter passes
    its input through unchanged.
    """

    def __init__(self) -> None:
        self._sample_rate = 44100.0
        self._cutoff = 1000.0
        self._resonance = 1.0
        self._a0, self._a1, self._a2 = 1.0, 0.0, 0.0
        self._b1, self._b2 = 0.0, 0.0
        self._x1 = self._x2 = 0.0
        self._y1 = self._y2 = 0.0

    def prepare(self, sample_rate: float) -> None:
        """Set the sample rate, recompute coefficients and clear the state."""
        self._sample_rate = float(sample_rate)
        self._update_coefficients()
        self.reset()

    @property
    def cutoff(self) -> float:
        """Cutoff frequency in Hz, clamped to 20..20000."""
        return self._cutoff

    @cutoff.setter
    def cutoff(self, value: float) -> None:
        self._cutoff = _clamp(float(value), _MIN_CUTOFF, _MAX_CUTOFF)
        self._update_coefficients()

    @property
    def resonance(self) -> float:
        """Resonance (Q factor), clamped to 0.1..10."""
        return self._resonance

    @resonance.setter
    def resonance(self, value: float) -> None:
        self._resonance = _clamp(float(value), _MIN_RESONANCE, _MAX_RESONANCE)
        self._update_coefficients()

    def _update_coefficients(self) -> None:
        w0 = 2.0 * 3.14159265 * self._cutoff / self._sample_rate
        cos_w0 = math.cos(w0)
        alpha = math.sin(w0) / (2.0 * self._resonance)

        b0 = (1.0 - cos_w0) / 2.0
        b1 = 1.0 - cos_w0
        b2 = (1.0 - cos_w0) / 2.0
        norm = 1.0 / (1.0 + alpha)

        self._a0 = b0 * norm
        self._a1 = b1 * norm
        self._a2 = b2 * norm
        self._b1 = -2.0 * cos_w0 * norm
        self._b2 = (1.0 - alpha) * norm

    def process(self, sample: float) -> float:
        """Filter one sample."""
        out = (
            self._a0 * sample
            + self._a1 * self._x1
            + self._a2 * self._x2
            - self._b1 * self._y1
            - self._b2 * self._y2
        )
        self._x2, self._x1 = self._x1, sample
        self._y2, self._y1 = self._y1, out
        return out

    def process_block(self, samples: Iterable[float]) -> list[float]:
        """Filter a sequence of samples and return the filtered samples."""
        return [self.process(s) for s in samples]

    def reset(self) -> None:
        """Clear the input and output history."""
        self._x1 = self._x2 = 0.0
        self._y1 = self._y2 = 0.0