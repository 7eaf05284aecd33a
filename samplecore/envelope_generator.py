"""Linear attack/release envelope for modulation."""

from __future__ import annotations

import enum


class EnvelopeState(enum.Enum):
    """Phase the envelope is in."""

    IDLE = enum.auto()
    ATTACK = enum.auto()
    RELEASE = enum.auto()


class EnvelopeGenerator:
    """Attack/release envelope producing values in 0..1.

    The attack rises linearly to 1.0 and then goes idle; a release falls
    linearly to 0. Releasing an idle envelope has no effect.
    """

    def __init__(self) -> None:
        self._sample_rate = 44100.0
        self._attack_ms = 10.0
        self._release_ms = 100.0
        self._state = EnvelopeState.IDLE
        self._value = 0.0
        self._attack_samples = 1
        self._release_samples = 1
        self._phase_counter = 0

    def prepare(self, sample_rate: float) -> None:
        """Set the sample rate, recompute phase lengths and reset."""
        self._sample_rate = float(sample_rate)
        self._update_phase_counts()
        self.reset()

    @property
    def attack_ms(self) -> float:
        """Attack time in milliseconds, never negative."""
        return self._attack_ms

    @attack_ms.setter
    def attack_ms(self, value: float) -> None:
        self._attack_ms = max(0.0, float(value))
        self._update_phase_counts()

    @property
    def release_ms(self) -> float:
        """Release time in milliseconds, never negative."""
        return self._release_ms

    @release_ms.setter
    def release_ms(self, value: float) -> None:
        self._release_ms = max(0.0, float(value))
        self._update_phase_counts()

    def _update_phase_counts(self) -> None:
        if self._sample_rate <= 0.0:
            self._attack_samples = 1
            self._release_samples = 1
            return
        self._attack_samples = max(1, int(self._sample_rate * self._attack_ms / 1000.0))
        self._release_samples = max(1, int(self._sample_rate * self._release_ms / 1000.0))

    def trigger(self) -> None:
        """Start the attack from the current value."""
        self._state = EnvelopeState.ATTACK
        self._phase_counter = 0

    def release(self) -> None:
        """Start the release unless the envelope is idle."""
        if self._state is not EnvelopeState.IDLE:
            self._state = EnvelopeState.RELEASE
            self._phase_counter = 0

    def process(self) -> float:
        """Advance one sample and return the envelope value."""
        if self._state is EnvelopeState.IDLE:
            self._value = 0.0
        elif self._state is EnvelopeState.ATTACK:
            self._value += 1.0 / self._attack_samples
            self._phase_counter += 1
            if self._value >= 1.0 or self._phase_counter >= self._attack_samples:
                self._value = 1.0
                self._state = EnvelopeState.IDLE
        else:
            self._value -= 1.0 / self._release_samples
            self._phase_counter += 1
            if self._value <= 0.0 or self._phase_counter >= self._release_samples:
                self._value = 0.0
                self._state = EnvelopeState.IDLE

        self._value = max(0.0, min(1.0, self._value))
        return self._value

    def process_block(self, count: int) -> list[float]:
        """Advance ``count`` samples and return their values."""
        return [self.process() for _ in range(count)]

    @property
    def value(self) -> float:
        """Current value without advancing."""
        return self._value

    @property
    def is_active(self) -> bool:
        """True while the value is above zero or a phase is running."""
        return self._value > 0.001 or self._state is not EnvelopeState.IDLE

    def reset(self) -> None:
        """Return to idle at zero."""
        self._state = EnvelopeState.IDLE
        self._value = 0.0
        self._phase_counter = 0