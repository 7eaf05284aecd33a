import pytest

from samplecore.lofi import LofiEffect


@pytest.fixture
def lofi():
    fx = LofiEffect()
    fx.prepare(44100.0)
    return fx


def test_parameter_clamping(lofi):
    lofi.bit_depth = 0.0
    assert lofi.bit_depth == 1.0
    lofi.bit_depth = 24.0
    assert lofi.bit_depth == 16.0
    lofi.sample_rate_reduction = 0.0
    assert lofi.sample_rate_reduction == 0.01
    lofi.sample_rate_reduction = 3.0
    assert lofi.sample_rate_reduction == 1.0


def test_default_is_nearly_transparent(lofi):
    data = [i / 50.0 - 1.0 for i in range(101)]
    out = lofi.process_block(data)
    assert all(abs(a - b) < 1e-4 for a, b in zip(data, out))


def test_input_is_clamped(lofi):
    out = lofi.process_block([5.0, -5.0])
    assert abs(out[0] - 1.0) < 1e-4
    assert abs(out[1] + 1.0) < 1e-4


def test_one_bit_has_few_levels(lofi):
    lofi.bit_depth = 1.0
    out = lofi.process_block([i / 20.0 - 1.0 for i in range(41)])
    assert set(out) <= {-2.0, 0.0, 2.0}


def test_lower_bit_depth_gives_fewer_levels(lofi):
    data = [i / 500.0 - 1.0 for i in range(1001)]
    lofi.bit_depth = 4.0
    coarse = set(lofi.process_block(data))
    lofi.bit_depth = 8.0
    fine = set(lofi.process_block(data))
    assert len(coarse) < len(fine)


def test_sample_and_hold(lofi):
    lofi.sample_rate_reduction = 0.25
    data = [0.1 * (i + 1) for i in range(8)]
    out = lofi.process_block(data)
    expected = [0.0, 0.0, 0.0, data[3], data[3], data[3], data[3], data[7]]
    assert all(abs(a - b) < 1e-4 for a, b in zip(out, expected))


def test_reset_drops_held_sample(lofi):
    lofi.sample_rate_reduction = 0.1
    lofi.process_block([0.5] * 10)
    lofi.reset()
    assert lofi.process(0.9) == 0.0
    lofi.prepare(44100.0)
    assert lofi.process(0.0) == 0.0