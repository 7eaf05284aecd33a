import pytest

from samplecore.window import make_hann


def test_empty_for_non_positive_length():
    assert make_hann(0) == []
    assert make_hann(-4) == []


def test_single_point_window():
    assert make_hann(1) == [1.0]


def test_length_matches_request():
    assert len(make_hann(256)) == 256


def test_endpoints_zero_and_centre_one():
    w = make_hann(9)
    assert w[0] == pytest.approx(0.0, abs=1e-12)
    assert w[-1] == pytest.approx(0.0, abs=1e-12)
    assert w[4] == pytest.approx(1.0)


def test_symmetric_and_bounded():
    w = make_hann(64)
    assert w == pytest.approx(list(reversed(w)))
    assert all(0.0 <= v <= 1.0 for v in w)


def test_rises_to_centre():
    w = make_hann(11)
    first_half = w[:6]
    assert all(a < b for a, b in zip(first_half, first_half[1:]))