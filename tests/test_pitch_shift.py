import math

import pytest

from samplecore.pitch_shift import PitchShiftTSM, unwrap_phase


@pytest.fixture
def shifter():
    p = PitchShiftTSM()
    p.prepare(44100.0, 512)
    return p


def test_unity_ratio_passes_through(shifter):
    block = [0.1, -0.2, 0.3, 0.4]
    assert shifter.process(block) == block


def test_ratio_is_clamped(shifter):
    shifter.pitch_ratio = 10.0
    assert shifter.pitch_ratio == 4.0
    shifter.pitch_ratio = 0.1
    assert shifter.pitch_ratio == 0.25


def test_octave_up_reads_every_other_sample_and_wraps(shifter):
    shifter.pitch_ratio = 2.0
    block = [float(i) for i in range(8)]
    assert shifter.process(block) == [0.0, 2.0, 4.0, 6.0, 0.0, 2.0, 4.0, 6.0]


def test_read_head_carries_over_between_blocks(shifter):
    shifter.pitch_ratio = 0.5
    block = [0.0, 2.0, 4.0, 6.0]
    assert shifter.process(block) == pytest.approx([0.0, 1.0, 2.0, 3.0])
    assert shifter.process(block) == pytest.approx([4.0, 5.0, 6.0, 6.0])


def test_reset_restarts_read_head(shifter):
    shifter.pitch_ratio = 0.5
    block = [0.0, 2.0, 4.0, 6.0]
    first = shifter.process(block)
    shifter.reset()
    assert shifter.process(block) == first


def test_output_length_matches_input(shifter):
    shifter.pitch_ratio = 1.5
    block = [math.sin(i * 0.1) for i in range(100)]
    out = shifter.process(block)
    assert len(out) == len(block)
    assert max(abs(v) for v in out) <= 1.0


def test_empty_block(shifter):
    shifter.pitch_ratio = 2.0
    assert shifter.process([]) == []


def test_latency():
    assert PitchShiftTSM().latency == 1024 - 256


def test_unwrap_phase_identity():
    assert unwrap_phase([0.5, -1.0], [0.5, -1.0]) == [0.5, -1.0]


def test_unwrap_phase_moves_by_whole_turns():
    phases = [3 * math.pi, -5.0, 7.0, 0.2]
    last = [0.0, 1.0, -2.0, 0.1]
    result = unwrap_phase(phases, last)
    assert result[0] == pytest.approx(math.pi)
    for r, p, lp in zip(result, phases, last):
        assert -math.pi - 1e-9 <= r - lp <= math.pi + 1e-9
        turns = (p - r) / math.tau
        assert turns == pytest.approx(round(turns))


def test_unwrap_phase_length_mismatch():
    with pytest.raises(ValueError):
        unwrap_phase([0.0, 1.0], [0.0])


def test_unwrap_phase_non_finite():
    with pytest.raises(ValueError):
        unwrap_phase([math.inf], [0.0])


def test_spectral_flux_before_prepare_is_zero():
    assert PitchShiftTSM().spectral_flux([1.0] * 513) == 0.0


def test_spectral_flux_ignores_dc_and_falls(shifter):
    mags = [0.0] * 513
    mags[0] = 5.0
    assert shifter.spectral_flux(mags) == 0.0
    assert shifter.spectral_flux([-1.0] * 513) == 0.0


def test_spectral_flux_scales_linearly(shifter):
    mags = [0.5] * 513
    single = shifter.spectral_flux(mags)
    double = shifter.spectral_flux([2 * m for m in mags])
    assert single > 0.0
    assert double == pytest.approx(2 * single)


def test_spectral_flux_requires_all_bins(shifter):
    with pytest.raises(ValueError):
        shifter.spectral_flux([1.0] * 10)