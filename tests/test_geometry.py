from __future__ import annotations

import math

import pytest

from heartbeat.geometry import beat_wave, heart_curve, outward_force, scatter_inside, shrink


def test_heart_curve_at_zero_matches_literal_formula():
    # y = -(16 - 5 - 2 - 1) * 11 + 300
    x, y = heart_curve(0.0, 400, 300)
    assert x == pytest.approx(400.0)
    assert y == pytest.approx(212.0)


def test_heart_curve_keeps_both_cos3t_terms():
    t = 0.7
    x, y = heart_curve(t, 0, 0)
    expected = -(16 * math.cos(t) - 5 * math.cos(2 * t) - 3 * math.cos(3 * t)) * 11
    assert x == pytest.approx(17 * math.sin(t) ** 3 * 11)
    assert y == pytest.approx(expected)


@pytest.mark.parametrize("t", [0.0, 0.3, 1.9, 3.5, 6.1])
def test_heart_curve_is_periodic(t):
    a = heart_curve(t, 120, 80)
    b = heart_curve(t + 2 * math.pi, 120, 80)
    assert a.x == pytest.approx(b.x, abs=1e-9)
    assert a.y == pytest.approx(b.y, abs=1e-9)


def test_beat_wave_period_and_bounds():
    assert beat_wave(0.0) == 0.0
    for i in range(200):
        phase = i * 0.037
        value = beat_wave(phase)
        assert abs(value) <= 2 / math.pi + 1e-12
        assert beat_wave(phase + math.pi / 2) == pytest.approx(value, abs=1e-9)
    assert beat_wave(math.pi / 8) == pytest.approx(2 / math.pi)


def test_outward_force_is_finite_at_center():
    force = outward_force(0.0, 0.0, 0.42)
    assert math.isfinite(force)
    assert force > 0


def test_shrink_at_center_is_finite():
    x, y = shrink(50.0, 60.0, 50.0, 60.0, 10.0)
    assert (x, y) == (50.0, 60.0)


def test_shrink_displacement_follows_inverse_power():
    x, y = shrink(110.0, 100.0, 100.0, 100.0, 10.0)
    assert x == pytest.approx(110.0 + 10.0 * 10.0 / 100.0 ** 0.6)
    assert y == pytest.approx(100.0)


def test_scatter_inside_at_center_is_finite(sequence_source):
    x, y = scatter_inside(5.0, 5.0, 5.0, 5.0, 0.27, sequence_source([0.3, 0.9]))
    assert math.isfinite(x) and math.isfinite(y)
    assert (x, y) == (5.0, 5.0)


def test_scatter_inside_pulls_toward_center(sequence_source):
    x, y = scatter_inside(200.0, 100.0, 100.0, 50.0, 0.05, sequence_source([0.5]))
    ratio = -0.05 * math.log(0.5)
    assert x == pytest.approx(200.0 - ratio * 100.0)
    assert y == pytest.approx(100.0 - ratio * 50.0)


def test_scatter_inside_tolerates_zero_draw(sequence_source):
    # random() == 0.0 must not reach log(0)
    x, y = scatter_inside(30.0, 40.0, 0.0, 0.0, 0.27, sequence_source([0.0]))
    assert (x, y) == (30.0, 40.0)
