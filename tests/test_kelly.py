"""Tests for Kelly sizing helpers."""

import pytest

from backend.core.kelly import kelly_fraction, kelly_risk_level, kelly_sizing


def test_kelly_fraction_minus_110_at_55():
    # b = 0.909, (0.909*0.55 - 0.45) / 0.909 ≈ 0.055
    assert kelly_fraction(0.55, -110) == pytest.approx(0.055, abs=1e-3)

def test_kelly_fraction_no_edge_is_negative():
    assert kelly_fraction(0.45, -110) < 0

def test_kelly_fraction_break_even_is_zero():
    # Even money, 50% → exactly no edge
    assert kelly_fraction(0.5, 100) == pytest.approx(0.0)

def test_kelly_fraction_underdog():
    # +150: b = 1.5, (1.5*0.5 - 0.5)/1.5 = 0.1667
    assert kelly_fraction(0.5, 150) == pytest.approx(1 / 6)

def test_kelly_sizing_fractions():
    sizing = kelly_sizing(1000, 0.08)
    assert sizing.full_stake == pytest.approx(80.0)
    assert sizing.half_stake == pytest.approx(40.0)
    assert sizing.quarter_stake == pytest.approx(20.0)

@pytest.mark.parametrize("fraction, expected", [
    (0.10,  "high"),
    (0.051, "high"),
    (0.05,  "medium"),   # > 0.05 is strict
    (0.03,  "medium"),
    (0.02,  "low"),      # > 0.02 is strict
    (0.005, "low"),
])
def test_kelly_risk_level(fraction, expected):
    assert kelly_risk_level(fraction) == expected
