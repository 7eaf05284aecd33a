from samplecore.envelope_generator import EnvelopeGenerator


def _prepared(rate=1000.0):
    env = EnvelopeGenerator()
    env.prepare(rate)
    return env


def test_idle_envelope_outputs_zero():
    env = _prepared()
    assert env.process_block(5) == [0.0] * 5
    assert env.is_active is False


def test_attack_rises_monotonically_to_one():
    env = _prepared()
    env.attack_ms = 10.0
    env.trigger()
    assert env.is_active
    values = env.process_block(10)
    assert all(a < b for a, b in zip(values, values[1:]))
    assert values[-1] == 1.0
    assert env.value == 1.0


def test_attack_completion_stays_active_by_value():
    env = _prepared()
    env.attack_ms = 10.0
    env.trigger()
    env.process_block(10)
    assert env.is_active


def test_release_falls_to_zero():
    env = _prepared()
    env.attack_ms = 10.0
    env.release_ms = 20.0
    env.trigger()
    env.process_block(5)
    start = env.value
    env.release()
    values = env.process_block(20)
    assert values[0] < start
    assert all(b <= a for a, b in zip(values, values[1:]))
    assert values[-1] == 0.0
    assert env.is_active is False


def test_release_on_idle_does_nothing():
    env = _prepared()
    env.release()
    assert env.process() == 0.0
    assert env.is_active is False


def test_values_stay_in_unit_range():
    env = _prepared()
    env.attack_ms = 3.0
    env.release_ms = 7.0
    env.trigger()
    values = env.process_block(2)
    env.release()
    values += env.process_block(10)
    assert all(0.0 <= v <= 1.0 for v in values)


def test_negative_times_clamp_to_zero():
    env = _prepared()
    env.attack_ms = -5.0
    env.release_ms = -1.0
    assert env.attack_ms == 0.0
    assert env.release_ms == 0.0
    env.trigger()
    assert env.process() == 1.0


def test_non_positive_sample_rate_uses_single_sample_phases():
    env = _prepared(0.0)
    env.trigger()
    assert env.process() == 1.0


def test_reset_returns_to_zero():
    env = _prepared()
    env.attack_ms = 10.0
    env.trigger()
    env.process_block(4)
    env.reset()
    assert env.value == 0.0
    assert env.is_active is False


def test_process_block_zero_count():
    env = _prepared()
    assert env.process_block(0) == []