"""Four-pole ladder low-pass filter with integrated drive."""

from __future__ import annotations

from collections.abc import Iterable

_MIN_CUTOFF = 20.0
_MAX_CUTOFF = 20000.0
_MAX_RESONANCE = 4.0
_DENORMAL = 1e-10


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _pade_tanh(x: float) -> float:
    x2 = x * x
    return x * (27.0 + x2) / (27.0 + 9.0 * x2)


def _map_drive(amount: float) -> float:
    if amount <= 1.0:
        return 1.0 + amount * 9.0
    return 10.0 + (amount - 1.0) * 5.0


class MoogLadderFilter:
    """24 dB/octave ladder low-pass with resonance feedback and saturation.

    ``drive`` is the user amount (0.0 and up); it maps to an internal gain of
    1..10 for amounts up to 1.0 and grows faster beyond.
    """

    def __init__(self) -> None:
        self._sample_rate = 44100.0
        self._cutoff = _MAX_CUTOFF
        self._resonance = 0.0
        self._drive = 0.0
        self._drive_gain = 1.0
        self._g = 0.0
        self._feedback = 0.0
        self._stages = [0.0, 0.0, 0.0, 0.0]

    def prepare(self, sample_rate: float) -> None:
        """Set the sample rate, clear state and load initial parameters."""
        self._sample_rate = float(sample_rate)
        self._update_coefficients()
        self.reset()
        if self._sample_rate > 0.0:
            self.cutoff = _MAX_CUTOFF
            self.resonance = 0.0
            self.drive = 1.0

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
        """Resonance, clamped to 0..4."""
        return self._resonance

    @resonance.setter
    def resonance(self, value: float) -> None:
        self._resonance = _clamp(float(value), 0.0, _MAX_RESONANCE)
        self._update_coefficients()

    @property
    def drive(self) -> float:
        """Drive amount, never below 0."""
        return self._drive

    @drive.setter
    def drive(self, value: float) -> None:
        self._drive = max(0.0, float(value))
        self._drive_gain = _map_drive(self._drive)

    def _update_coefficients(self) -> None:
        if self._sample_rate <= 0.0:
            return
        fc = _clamp(self._cutoff, _MIN_CUTOFF, _MAX_CUTOFF)
        w = 2.0 * 3.14159265 * fc / self._sample_rate
        self._g = _clamp(0.5 * w, 0.0, 1.0)
        self._feedback = _clamp(self._resonance, 0.0, _MAX_RESONANCE) * 0.25

    def _apply_drive(self, sample: float) -> float:
        gain = self._drive_gain
        if gain <= 1.0:
            return sample
        return _pade_tanh(sample * gain) / gain

    def process(self, sample: float) -> float:
        """Filter one sample."""
        x = self._apply_drive(sample)
        s = self._stages
        u = _clamp(x - self._feedback * (s[3] - s[2]), -4.0, 4.0)

        g = self._g
        keep = 1.0 - g
        signal = u
        for i in range(4):
            s[i] = g * signal + keep * s[i]
            signal = s[i]

        for i, value in enumerate(s):
            if abs(value) < _DENORMAL:
                s[i] = 0.0
        return s[3]

    def process_block(self, samples: Iterable[float]) -> list[float]:
        """Filter a sequence of samples and return the filtered samples."""
        return [self.process(s) for s in samples]

    def reset(self) -> None:
        """Clear the four stage states."""
        self._stages = [0.0, 0.0, 0.0, 0.0]