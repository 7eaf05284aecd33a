"""Soft-saturation drive effect."""

from __future__ import annotations

from collections.abc import Iterable


def tanh_approx(x: float) -> float:
    """Rational tanh approximation, input clamped to -3..3 so output stays in -1..1."""
    x = max(-3.0, min(3.0, x))
    x2 = x * x
    return x * (27.0 + x2) / (27.0 + 9.0 * x2)


class DriveEffect:
    """Multiplies the input by ``drive`` and soft-clips it.

    A drive of 1.0 passes the signal through untouched.
    """

    def __init__(self) -> None:
        self._drive = 1.0

    @property
    def drive(self) -> float:
        """Drive amount, never below 1.0."""
        return self._drive

    @drive.setter
    def drive(self, value: float) -> None:
        self._drive = max(1.0, float(value))

    def process(self, sample: float) -> float:
        """Saturate one sample."""
        if self._drive <= 0.0:
            return 0.0
        if abs(self._drive - 1.0) < 0.001:
            return sample
        return tanh_approx(sample * self._drive)

    def process_block(self, samples: Iterable[float]) -> list[float]:
        """Saturate a sequence of samples."""
        return [self.process(s) for s in samples]

    def reset(self) -> None:
        """The effect keeps no state; present for a uniform interface."""