"""Pitch shifter that resamples each block at the pitch ratio.

It keeps the frame and hop layout of a phase vocoder (used for latency
and transient detection) but shifts pitch by resampling.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

DEFAULT_FRAME_SIZE = 1024
DEFAULT_HOP_SIZE = 256

_MIN_RATIO = 0.25
_MAX_RATIO = 4.0


def unwrap_phase(phases: Sequence[float], last_phases: Sequence[float]) -> list[float]:
    """Return ``phases`` moved by whole turns to lie within pi of ``last_phases``."""
    if len(phases) != len(last_phases):
        raise ValueError(
            f"phase sequences differ in length: {len(phases)} and {len(last_phases)}"
        )
    result = []
    for phase, last in zip(phases, last_phases):
        diff = float(phase) - float(last)
        if not math.isfinite(diff):
            raise ValueError(f"cannot unwrap non-finite phase difference {diff}")
        while diff > math.pi:
            diff -= math.tau
        while diff < -math.pi:
            diff += math.tau
        result.append(last + diff)
    return result


class PitchShiftTSM:
    """Block pitch shifter with a read head that carries over between blocks.

    A ratio of 1.0 passes blocks through unchanged. Otherwise each output
    sample is read by linear interpolation at the read head, which advances
    by the pitch ratio and wraps to the start once it passes the block end.
    """

    def __init__(self) -> None:
        self._frame_size = DEFAULT_FRAME_SIZE
        self._hop_size = DEFAULT_HOP_SIZE
        self._sample_rate = 44100.0
        self._pitch_ratio = 1.0
        self._read_head = 0.0
        self._num_bins = 0
        self._last_magnitudes: list[float] | None = None

    def prepare(self, sample_rate: float, max_block_size: int) -> None:
        """Set the sample rate, lay out the analysis frame and reset."""
        self._sample_rate = float(sample_rate)
        self._frame_size = DEFAULT_FRAME_SIZE
        self._hop_size = DEFAULT_HOP_SIZE
        self._num_bins = self._frame_size // 2 + 1
        self._last_magnitudes = [0.0] * self._num_bins
        self.reset()

    @property
    def pitch_ratio(self) -> float:
        """Pitch ratio (2.0 is an octave up), clamped to 0.25..4."""
        return self._pitch_ratio

    @pitch_ratio.setter
    def pitch_ratio(self, value: float) -> None:
        self._pitch_ratio = max(_MIN_RATIO, min(_MAX_RATIO, float(value)))

    @property
    def latency(self) -> int:
        """Latency in samples implied by the frame and hop sizes."""
        return self._frame_size - self._hop_size

    def process(self, samples: Sequence[float]) -> list[float]:
        """Pitch shift one block; the result is as long as the input."""
        count = len(samples)
        if count <= 0:
            return []
        if abs(self._pitch_ratio - 1.0) < 0.001:
            return [float(s) for s in samples]

        out = []
        for _ in range(count):
            idx0 = int(self._read_head)
            idx1 = idx0 + 1
            frac = self._read_head - idx0
            if idx0 >= count:
                out.append(0.0)
            elif idx1 >= count:
                out.append(float(samples[idx0]))
            else:
                out.append(samples[idx0] * (1.0 - frac) + samples[idx1] * frac)
            self._read_head += self._pitch_ratio
            if self._read_head >= count:
                self._read_head = 0.0
        return out

    def spectral_flux(self, magnitudes: Sequence[float]) -> float:
        """Mean positive magnitude rise over the previous frame, skipping DC.

        Returns 0.0 before :meth:`prepare`.
        """
        if self._last_magnitudes is None:
            return 0.0
        if len(magnitudes) < self._num_bins:
            raise ValueError(
                f"expected {self._num_bins} magnitudes, got {len(magnitudes)}"
            )
        flux = sum(
            max(0.0, magnitudes[i] - self._last_magnitudes[i])
            for i in range(1, self._num_bins)
        )
        return flux / self._num_bins

    def reset(self) -> None:
        """Move the read head to the start and clear the stored magnitudes."""
        self._read_head = 0.0
        if self._last_magnitudes is not None:
            self._last_magnitudes = [0.0] * self._num_bins