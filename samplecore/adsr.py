"""Piecewise-linear ADSR envelope and offline checks of its smoothness."""

from __future__ import annotations

import math
from collections.abc import Sequence

from samplecore.amp_envelope import Stage

_SMOOTHING_TIME_SEC = 0.02
_DENORMAL = 1e-12
_INSTANT_SEC = 0.0005
_SMOOTHING_THRESHOLD = 0.001


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class AmpEnvelopeADSR:
    """ADSR amplitude envelope with linear segments.

    Times are in seconds and sustain is a level in 0..1. Parameter changes
    glide over about 20 ms. A retrigger continues the attack from the current
    value, and a release ramps linearly from the current value to zero.
    """

    def __init__(self) -> None:
        self._sample_rate = 44100.0
        self._value = 0.0
        self._vel_gain = 1.0
        self._last_value = 0.0

        self._attack_sec = 0.001
        self._decay_sec = 0.0
        self._sustain = 1.0
        self._release_sec = 0.02

        self._cur_attack_sec = 0.001
        self._cur_decay_sec = 0.0
        self._cur_sustain = 1.0
        self._cur_release_sec = 0.02

        self._attack_inc = 0.0
        self._decay_inc = 0.0
        self._release_inc = 0.0

        self._stage = Stage.IDLE
        self._smoothing_coeff = 0.0
        self._needs_smoothing = False
        self._max_delta = 0.0

    def prepare(self, sample_rate: float) -> None:
        """Set the sample rate and snap the smoothed parameters to their targets."""
        self._sample_rate = float(sample_rate)
        self._smoothing_coeff = math.exp(-1.0 / (_SMOOTHING_TIME_SEC * self._sample_rate))
        self._cur_attack_sec = self._attack_sec
        self._cur_decay_sec = self._decay_sec
        self._cur_sustain = self._sustain
        self._cur_release_sec = self._release_sec
        self._update_increments()

    def set_params(
        self, attack_sec: float, decay_sec: float, sustain: float, release_sec: float
    ) -> None:
        """Set new ADSR targets; times below 0 become 0, sustain is clamped to 0..1."""
        self._attack_sec = max(0.0, float(attack_sec))
        self._decay_sec = max(0.0, float(decay_sec))
        self._sustain = _clamp(float(sustain), 0.0, 1.0)
        self._release_sec = max(0.0, float(release_sec))
        self._needs_smoothing = True

    def note_on(self, velocity: float) -> None:
        """Start the attack from the current value; velocity is clamped to 0..1."""
        self._vel_gain = _clamp(float(velocity), 0.0, 1.0)
        self._stage = Stage.ATTACK
        self._update_increments()

    def note_off(self) -> None:
        """Enter the release from the current value unless idle."""
        if self._stage is not Stage.IDLE:
            self._stage = Stage.RELEASE
            self._update_increments()

    def reset(self) -> None:
        """Go idle at zero with unit velocity gain."""
        self._value = 0.0
        self._vel_gain = 1.0
        self._last_value = 0.0
        self._stage = Stage.IDLE

    def process_sample(self) -> float:
        """Advance one sample and return the envelope value times the velocity gain."""
        if self._needs_smoothing:
            self._smooth_parameters()

        previous = self._value
        stage = self._stage
        if stage is Stage.IDLE:
            self._value = 0.0
        elif stage is Stage.ATTACK:
            self._value += self._attack_inc
            if self._value >= 1.0:
                self._value = 1.0
                self._stage = Stage.DECAY
                self._update_increments()
        elif stage is Stage.DECAY:
            self._value -= self._decay_inc
            if self._value <= self._cur_sustain:
                self._value = self._cur_sustain
                self._stage = Stage.SUSTAIN
        elif stage is Stage.SUSTAIN:
            self._value = self._cur_sustain
        else:
            self._value -= self._release_inc
            if self._value <= 0.0:
                self._value = 0.0
                self._stage = Stage.IDLE

        self._max_delta = max(self._max_delta, abs(self._value - previous))

        if abs(self._value) < _DENORMAL:
            self._value = 0.0
        if not math.isfinite(self._value):
            self._value = 0.0
            self._stage = Stage.IDLE

        output = self._value * self._vel_gain
        if abs(output) < _DENORMAL or not math.isfinite(output):
            output = 0.0
        return output

    @property
    def is_active(self) -> bool:
        """True unless the envelope is idle."""
        return self._stage is not Stage.IDLE

    @property
    def value(self) -> float:
        """Current envelope value before velocity scaling."""
        return self._value

    @property
    def stage(self) -> Stage:
        """Current stage."""
        return self._stage

    @property
    def velocity_gain(self) -> float:
        """Gain applied for the last note's velocity."""
        return self._vel_gain

    @property
    def max_delta_per_block(self) -> float:
        """Largest change between consecutive values since the last reset_max_delta."""
        return self._max_delta

    def reset_max_delta(self) -> None:
        """Start a new block for delta tracking."""
        self._max_delta = 0.0
        self._last_value = self._value

    def _update_increments(self) -> None:
        sr = self._sample_rate

        if self._cur_attack_sec <= _INSTANT_SEC:
            self._attack_inc = 1.0 - self._value
        else:
            self._attack_inc = (1.0 - self._value) / max(1.0, self._cur_attack_sec * sr)

        if self._cur_decay_sec <= _INSTANT_SEC:
            self._decay_inc = 1.0 - self._cur_sustain
        else:
            self._decay_inc = (1.0 - self._cur_sustain) / max(1.0, self._cur_decay_sec * sr)

        if self._cur_release_sec <= _INSTANT_SEC:
            self._release_inc = self._value
        else:
            self._release_inc = self._value / max(1.0, self._cur_release_sec * sr)

    def _smooth_parameters(self) -> None:
        c = self._smoothing_coeff
        k = 1.0 - c
        self._cur_attack_sec = self._cur_attack_sec * c + self._attack_sec * k
        self._cur_decay_sec = self._cur_decay_sec * c + self._decay_sec * k
        self._cur_sustain = self._cur_sustain * c + self._sustain * k
        self._cur_release_sec = self._cur_release_sec * c + self._release_sec * k

        self._update_increments()

        pairs = (
            (self._cur_attack_sec, self._attack_sec),
            (self._cur_decay_sec, self._decay_sec),
            (self._cur_sustain, self._sustain),
            (self._cur_release_sec, self._release_sec),
        )
        if all(abs(cur - target) < _SMOOTHING_THRESHOLD for cur, target in pairs):
            self._needs_smoothing = False


def find_jump(values: Sequence[float], threshold: float) -> int | None:
    """Index of the first value differing from its predecessor by more than ``threshold``."""
    for index in range(1, len(values)):
        if abs(values[index] - values[index - 1]) > threshold:
            return index
    return None


def basic_cycle_values(sample_rate: float = 44100.0) -> list[float]:
    """Run a note for 1 s and its release for 2 s; return every output value."""
    env = AmpEnvelopeADSR()
    env.prepare(sample_rate)
    env.set_params(0.1, 0.1, 0.5, 0.2)

    total = int(sample_rate * 3.0)
    note_off_at = int(sample_rate * 1.0)
    env.note_on(1.0)
    values = []
    for i in range(total):
        if i == note_off_at:
            env.note_off()
        values.append(env.process_sample())
    return values


def rapid_retrigger_values(sample_rate: float = 44100.0) -> list[float]:
    """Play 20 cycles of 50 ms on and 50 ms off; return every output value."""
    env = AmpEnvelopeADSR()
    env.prepare(sample_rate)
    env.set_params(0.01, 0.01, 0.5, 0.01)

    on_samples = int(sample_rate * 0.05)
    off_samples = int(sample_rate * 0.05)
    values = []
    for _ in range(20):
        env.note_on(1.0)
        values.extend(env.process_sample() for _ in range(on_samples))
        env.note_off()
        values.extend(env.process_sample() for _ in range(off_samples))
    return values