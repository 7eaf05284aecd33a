"""Click-free ADSR envelope built on one-pole exponential segments."""

from __future__ import annotations

import enum
import math

_SMOOTHING_TIME_SEC = 0.03
_DENORMAL = 1e-12
_TIME_CONSTANT_FACTOR = 6.908  # -ln(0.001): reach 99.9% of the target in the set time
_MAX_COEFF = 0.9999
_SMOOTHING_THRESHOLD = 0.001


class Stage(enum.Enum):
    """Phase of an ADSR envelope."""

    IDLE = enum.auto()
    ATTACK = enum.auto()
    DECAY = enum.auto()
    SUSTAIN = enum.auto()
    RELEASE = enum.auto()


def _clamp_coeff(coeff: float) -> float:
    return max(0.0, min(_MAX_COEFF, coeff))


class AmpEnvelope:
    """ADSR amplitude envelope whose segments approach their targets exponentially.

    Times are in seconds and sustain is a level in 0..1. Parameter changes
    are glided over about 30 ms. Retriggering and releasing start from the
    current value, so the output never jumps.
    """

    def __init__(self) -> None:
        self._sample_rate = 44100.0
        self._value = 0.0
        self._vel_gain = 1.0

        self._attack_sec = 0.001
        self._decay_sec = 0.0
        self._sustain = 1.0
        self._release_sec = 0.02

        self._cur_attack_sec = 0.001
        self._cur_decay_sec = 0.0
        self._cur_sustain = 1.0
        self._cur_release_sec = 0.02

        self._attack_coeff = 0.0
        self._decay_coeff = 0.0
        self._release_coeff = 0.0

        self._attack_target = 1.0
        self._decay_target = 1.0
        self._release_target = 0.0
        self._release_start_value = 1.0

        self._stage = Stage.IDLE
        self._smoothing_coeff = 0.0
        self._needs_smoothing = False

    def prepare(self, sample_rate: float) -> None:
        """Set the sample rate and snap the smoothed parameters to their targets."""
        self._sample_rate = float(sample_rate)
        self._smoothing_coeff = _clamp_coeff(
            math.exp(-1.0 / (_SMOOTHING_TIME_SEC * self._sample_rate))
        )
        self._cur_attack_sec = self._attack_sec
        self._cur_decay_sec = self._decay_sec
        self._cur_sustain = self._sustain
        self._cur_release_sec = self._release_sec
        self._update_coefficients()

    def set_params(
        self, attack_sec: float, decay_sec: float, sustain: float, release_sec: float
    ) -> None:
        """Set new ADSR targets; times below 0 become 0, sustain is clamped to 0..1."""
        self._attack_sec = max(0.0, float(attack_sec))
        self._decay_sec = max(0.0, float(decay_sec))
        self._sustain = max(0.0, min(1.0, float(sustain)))
        self._release_sec = max(0.0, float(release_sec))
        self._needs_smoothing = True
        self._decay_target = self._sustain

    def note_on(self, velocity: float) -> None:
        """Start the attack; velocity is clamped to 0..1.

        An idle or nearly silent envelope starts from zero; otherwise the
        attack continues from the current value.
        """
        self._vel_gain = max(0.0, min(1.0, float(velocity)))
        if self._stage is Stage.IDLE or self._value < 0.001:
            self._value = 0.0
        self._attack_target = 1.0
        self._decay_target = self._cur_sustain
        self._release_target = 0.0
        self._stage = Stage.ATTACK
        self._update_coefficients()

    def note_off(self) -> None:
        """Enter the release from the current value; no effect if idle or releasing."""
        if self._stage in (Stage.IDLE, Stage.RELEASE):
            return
        self._stage = Stage.RELEASE
        self._release_target = 0.0
        self._release_start_value = self._value
        self._release_coeff = self._coeff_for(self._cur_release_sec)

    def reset(self) -> None:
        """Go idle at zero with unit velocity gain."""
        self._value = 0.0
        self._vel_gain = 1.0
        self._stage = Stage.IDLE

    def process_sample(self) -> float:
        """Advance one sample and return the envelope value times the velocity gain."""
        if self._needs_smoothing:
            self._smooth_parameters()

        stage = self._stage
        if stage is Stage.IDLE:
            self._value = 0.0
        elif stage is Stage.ATTACK:
            self._value += (self._attack_target - self._value) * (1.0 - self._attack_coeff)
            if self._value >= 0.999:
                self._value = 1.0
                self._stage = Stage.DECAY
                self._decay_target = self._cur_sustain
                self._release_start_value = 1.0
        elif stage is Stage.DECAY:
            self._value += (self._decay_target - self._value) * (1.0 - self._decay_coeff)
            if abs(self._value - self._decay_target) < 0.001:
                self._value = self._decay_target
                self._stage = Stage.SUSTAIN
                self._release_start_value = self._value
        elif stage is Stage.SUSTAIN:
            self._value = self._decay_target
            self._release_start_value = self._value
        else:
            self._value += (self._release_target - self._value) * (1.0 - self._release_coeff)
            if self._value < 1e-6:
                self._value = 0.0
                self._stage = Stage.IDLE

        if abs(self._value) < _DENORMAL or not math.isfinite(self._value):
            self._value = 0.0

        output = self._value * self._vel_gain
        if abs(output) < _DENORMAL:
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

    def _coeff_for(self, seconds: float) -> float:
        if seconds > 0.0 and self._sample_rate > 0.0:
            time_samples = seconds * self._sample_rate
            if time_samples > 0.1:
                return _clamp_coeff(math.exp(-_TIME_CONSTANT_FACTOR / time_samples))
        return 0.0

    def _update_attack_decay_coefficients(self) -> None:
        self._attack_coeff = self._coeff_for(self._cur_attack_sec)
        self._decay_coeff = self._coeff_for(self._cur_decay_sec)

    def _update_coefficients(self) -> None:
        self._update_attack_decay_coefficients()
        self._release_coeff = self._coeff_for(self._cur_release_sec)

    def _smooth_parameters(self) -> None:
        c = self._smoothing_coeff
        k = 1.0 - c
        self._cur_attack_sec = self._cur_attack_sec * c + self._attack_sec * k
        self._cur_decay_sec = self._cur_decay_sec * c + self._decay_sec * k
        self._cur_sustain = self._cur_sustain * c + self._sustain * k
        self._cur_release_sec = self._cur_release_sec * c + self._release_sec * k

        if self._stage is Stage.RELEASE:
            # the release coefficient was fixed when the release began
            self._update_attack_decay_coefficients()
        else:
            self._update_coefficients()

        if self._stage in (Stage.DECAY, Stage.SUSTAIN):
            self._decay_target = self._cur_sustain

        pairs = (
            (self._cur_attack_sec, self._attack_sec),
            (self._cur_decay_sec, self._decay_sec),
            (self._cur_sustain, self._sustain),
            (self._cur_release_sec, self._release_sec),
        )
        if all(abs(cur - target) < _SMOOTHING_THRESHOLD for cur, target in pairs):
            self._needs_smoothing = False