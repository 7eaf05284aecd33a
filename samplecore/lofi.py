"""Bit-crushing and sample-rate reduction effect."""

from __future__ import annotations

import math
from collections.abc import Iterable


def _round_half_away(x: float) -> float:
    return math.copysign(math.floor(abs(x) + 0.5), x)


class LofiEffect:
    """Sample-and-hold rate reduction followed by amplitude quantisation."""

    def __init__(self) -> None:
        self._sample_rate = 44100.0
        self._bit_depth = 16.0
        self._reduction = 1.0
        self._hold_sample = 0.0
        self._hold_counter = 0.0
        self._hold_interval = 1.0

    def prepare(self, sample_rate: float) -> None:
        """Set the sample rate and clear state."""
        self._sample_rate = float(sample_rate)
        self._update_hold_interval()
        self.reset()

    @property
    def bit_depth(self) -> float:
        """Quantisation depth in bits, clamped to 1..16."""
        return self._bit_depth

    @bit_depth.setter
    def bit_depth(self, value: float) -> None:
        self._bit_depth = max(1.0, min(16.0, float(value)))

    @property
    def sample_rate_reduction(self) -> float:
        """Fraction of the original rate kept, clamped to 0.01..1."""
        return self._reduction

    @sample_rate_reduction.setter
    def sample_rate_reduction(self, value: float) -> None:
        self._reduction = max(0.01, min(1.0, float(value)))
        self._update_hold_interval()

    def _update_hold_interval(self) -> None:
        if self._sample_rate <= 0.0 or self._reduction <= 0.0:
            self._hold_interval = 1.0
            return
        self._hold_interval = max(1.0, min(100.0, 1.0 / self._reduction))

    def _step(self) -> float:
        if self._bit_depth <= 0.0:
            return 1.0
        levels = max(2, int(2.0 ** self._bit_depth))
        return 2.0 / (levels - 1)

    def _quantize(self, sample: float) -> float:
        sample = max(-1.0, min(1.0, sample))
        step = self._step()
        return _round_half_away(sample / step) * step

    def process(self, sample: float) -> float:
        """Process one sample."""
        self._hold_counter += 1.0
        if self._hold_counter >= self._hold_interval:
            self._hold_sample = sample
            self._hold_counter = 0.0
        return self._quantize(self._hold_sample)

    def process_block(self, samples: Iterable[float]) -> list[float]:
        """Process a sequence of samples."""
        return [self.process(s) for s in samples]

    def reset(self) -> None:
        """Clear the held sample and the hold counter."""
        self._hold_sample = 0.0
        self._hold_counter = 0.0