"""Tests for odds_math: conversions, payout and expected value."""

import pytest

from backend.core.odds_math import (
    american_to_decimal,
    decimal_to_american,
    expected_value,
    implied_prob,
    payout,
    profit,
)


# ---------------------------------------------------------------------------
# payout
# ---------------------------------------------------------------------------

def test_payout_favourite():
    assert payout(100, -110) == pytest.approx(190.909, abs=1e-3)

def test_payout_underdog():
    assert payout(100, 150) == pytest.approx(250.0)

def test_payout_even_money():
    assert payout(50, 100) == pytest.approx(100.0)
    assert payout(50, -100) == pytest.approx(100.0)

@pytest.mark.parametrize("odds", [-500, -110, 100, 150, 1200])
def test_payout_strictly_increasing_in_stake(odds):
    stakes = [1, 5, 10, 50, 100, 1000]
    payouts = [payout(s, odds) for s in stakes]
    assert all(a < b for a, b in zip(payouts, payouts[1:]))

def test_profit_is_payout_minus_stake():
    assert profit(100, -110) == pytest.approx(90.909, abs=1e-3)
    assert profit(100, 150) == pytest.approx(150.0)


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("american, expected", [
    (-110, 1.9091),
    (150,  2.5),
    (100,  2.0),
    (-200, 1.5),
])
def test_american_to_decimal(american, expected):
    assert american_to_decimal(american) == pytest.approx(expected, abs=1e-4)

@pytest.mark.parametrize("decimal_odds, expected", [
    (2.5, 150),
    (1.5, -200),
    (2.0, 100),
])
def test_decimal_to_american(decimal_odds, expected):
    assert decimal_to_american(decimal_odds) == expected

def test_decimal_to_american_rejects_one():
    with pytest.raises(ValueError):
        decimal_to_american(1.0)

def test_implied_prob_favourite():
    assert implied_prob(-110) == pytest.approx(0.5238, abs=1e-4)

def test_implied_prob_underdog():
    assert implied_prob(150) == pytest.approx(0.4)

@pytest.mark.parametrize("x", [105, 110, 120, 200])
def test_mirrored_odds_sum_to_one(x):
    # +x/-x is a margin-free market
    assert implied_prob(x) + implied_prob(-x) == pytest.approx(1.0)

@pytest.mark.parametrize("side_a, side_b", [(-110, -110), (-120, 100), (-150, 130)])
def test_two_sided_market_carries_vig(side_a, side_b):
    assert implied_prob(side_a) + implied_prob(side_b) > 1.0

def test_implied_prob_matches_decimal_inverse():
    for odds in (-300, -110, 120, 450):
        assert implied_prob(odds) == pytest.approx(1 / american_to_decimal(odds))


# ---------------------------------------------------------------------------
# expected_value
# ---------------------------------------------------------------------------

def test_ev_positive_at_55_percent():
    result = expected_value(100, -110, 0.55)
    assert result.is_positive_ev
    assert result.ev == pytest.approx(0.55 * 90.909 - 0.45 * 100, abs=1e-2)

def test_ev_negative_at_45_percent():
    result = expected_value(100, -110, 0.45)
    assert not result.is_positive_ev
    assert result.ev < 0

def test_ev_percentage_relative_to_stake():
    result = expected_value(200, 150, 0.5)
    # profit 300 on win, lose 200: 0.5*300 - 0.5*200 = 50 → 25%
    assert result.ev == pytest.approx(50.0)
    assert result.ev_percentage == pytest.approx(25.0)

def test_ev_zero_is_not_positive():
    # Fair coin at even money
    assert not expected_value(100, 100, 0.5).is_positive_ev
