import math

import pytest

from samplecore.moog import MoogLadderFilter


@pytest.fixture
def prepared():
    f = MoogLadderFilter()
    f.prepare(44100.0)
    return f


def test_prepare_loads_initial_parameters(prepared):
    assert prepared.cutoff == 20000.0
    assert prepared.resonance == 0.0
    assert prepared.drive == 1.0


def test_parameter_clamping():
    f = MoogLadderFilter()
    f.cutoff = 1.0
    assert f.cutoff == 20.0
    f.cutoff = 1e6
    assert f.cutoff == 20000.0
    f.resonance = -2.0
    assert f.resonance == 0.0
    f.resonance = 9.0
    assert f.resonance == 4.0
    f.drive = -3.0
    assert f.drive == 0.0


def test_clean_open_filter_tracks_input(prepared):
    prepared.drive = 0.0
    out = prepared.process_block([0.3] * 8)
    assert all(math.isclose(v, 0.3, rel_tol=1e-9) for v in out)


def test_low_cutoff_smooths_step(prepared):
    prepared.drive = 0.0
    prepared.cutoff = 100.0
    out = prepared.process_block([0.5] * 50)
    assert all(b >= a for a, b in zip(out, out[1:]))
    assert out[-1] < 0.5


def test_output_bounded_under_heavy_settings(prepared):
    prepared.resonance = 4.0
    prepared.drive = 3.0
    prepared.cutoff = 1000.0
    data = [50.0 * math.sin(i * 0.1) for i in range(2000)]
    out = prepared.process_block(data)
    assert max(abs(v) for v in out) <= 4.0


def test_tiny_values_flushed(prepared):
    prepared.drive = 0.0
    assert prepared.process(1e-12) == 0.0


def test_reset_clears_state(prepared):
    prepared.process_block([1.0] * 20)
    prepared.reset()
    assert prepared.process_block([0.0] * 5) == [0.0] * 5


def test_block_matches_sample_by_sample():
    a = MoogLadderFilter()
    b = MoogLadderFilter()
    for f in (a, b):
        f.prepare(48000.0)
        f.cutoff = 800.0
        f.resonance = 2.5
    data = [math.sin(i * 0.2) for i in range(300)]
    assert a.process_block(data) == [b.process(x) for x in data]