"""Tests for strategy.py recommendations and the quick verdict."""

import pytest

from backend.services.strategy import (
    StrategyInputs,
    confidence_based,
    flat_betting,
    get_all_recommendations,
    kelly_criterion,
    martingale_warning,
    quick_verdict,
)
from conftest import make_bet


def _statuses(*statuses):
    return [make_bet(s, placed_day=-i) for i, s in enumerate(statuses)]


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------

def test_only_flat_without_optional_inputs():
    recs = get_all_recommendations(StrategyInputs(bankroll=1000, odds=-110))
    assert [r.title for r in recs] == ["Flat Betting"]

def test_full_ordering():
    inputs = StrategyInputs(
        bankroll=1000, odds=-110, win_probability=0.55, confidence=3,
        recent_bets=_statuses("won"),
    )
    titles = [r.title for r in get_all_recommendations(inputs)]
    assert titles == [
        "Flat Betting",
        "Kelly Criterion",
        "Confidence-Based Betting",
        "Martingale System",
    ]

def test_empty_history_skips_martingale():
    inputs = StrategyInputs(bankroll=1000, odds=-110, recent_bets=[])
    assert len(get_all_recommendations(inputs)) == 1


# ---------------------------------------------------------------------------
# Individual strategies
# ---------------------------------------------------------------------------

def test_flat_betting_two_percent():
    rec = flat_betting(StrategyInputs(bankroll=1000, odds=-110))
    assert rec.suggested_stake == pytest.approx(20.0)
    assert rec.risk_level == "low"
    assert "$10.00" in rec.reasoning
    assert "$30.00" in rec.reasoning

def test_kelly_half_stake():
    rec = kelly_criterion(StrategyInputs(bankroll=1000, odds=-110, win_probability=0.55))
    # Full Kelly 5.5% → half Kelly 2.75%
    assert rec.suggested_stake == pytest.approx(27.5, abs=0.01)
    assert rec.risk_level == "high"

def test_kelly_medium_risk():
    # +100 at 52%: full Kelly 4%
    rec = kelly_criterion(StrategyInputs(bankroll=1000, odds=100, win_probability=0.52))
    assert rec.suggested_stake == pytest.approx(20.0)
    assert rec.risk_level == "medium"

def test_kelly_no_edge():
    rec = kelly_criterion(StrategyInputs(bankroll=1000, odds=-110, win_probability=0.45))
    assert rec.title == "Kelly Criterion - No Edge"
    assert rec.suggested_stake == 0.0
    assert rec.risk_level == "high"

def test_kelly_without_probability_prompts():
    rec = kelly_criterion(StrategyInputs(bankroll=1000, odds=-110))
    assert rec.suggested_stake is None
    assert "win probability" in rec.reasoning

@pytest.mark.parametrize("confidence, stake, risk", [
    (1, 10.0, "low"),
    (2, 20.0, "low"),
    (3, 30.0, "medium"),
    (4, 40.0, "high"),
    (5, 50.0, "high"),
])
def test_confidence_based(confidence, stake, risk):
    rec = confidence_based(StrategyInputs(bankroll=1000, odds=-110), confidence)
    assert rec.suggested_stake == pytest.approx(stake)
    assert rec.risk_level == risk

def test_martingale_with_recent_losses():
    inputs = StrategyInputs(
        bankroll=1000, odds=-110, recent_bets=_statuses("lost", "won", "lost"),
    )
    rec = martingale_warning(inputs)
    assert rec.title == "Martingale System - High Risk"
    assert rec.suggested_stake == 0.0
    assert rec.risk_level == "high"

def test_martingale_only_looks_at_last_five():
    inputs = StrategyInputs(
        bankroll=1000, odds=-110,
        recent_bets=_statuses("won", "won", "won", "won", "lost", "lost", "lost"),
    )
    rec = martingale_warning(inputs)
    assert rec.title == "Martingale System"
    assert rec.suggested_stake is None

def test_martingale_never_positive():
    for history in ([], _statuses("won"), _statuses("lost", "lost")):
        rec = martingale_warning(StrategyInputs(bankroll=1000, odds=-110, recent_bets=history))
        assert not rec.suggested_stake
        assert rec.risk_level == "high"

def test_martingale_accepts_plain_statuses():
    inputs = StrategyInputs(bankroll=1000, odds=-110, recent_bets=["lost", "won", "lost"])
    assert martingale_warning(inputs).title == "Martingale System - High Risk"


# ---------------------------------------------------------------------------
# Quick verdict
# ---------------------------------------------------------------------------

def test_verdict_positive_ev():
    v = quick_verdict(StrategyInputs(bankroll=1000, odds=150, win_probability=0.5))
    assert v.verdict == "recommended"
    assert v.suggested_stake == pytest.approx(30.0)  # default confidence 3
    assert v.implied_probability == pytest.approx(0.4)
    assert v.edge == pytest.approx(0.1)
    assert v.ev == pytest.approx(7.5)

def test_verdict_marginal_edge():
    v = quick_verdict(StrategyInputs(bankroll=1000, odds=-110, win_probability=0.51))
    assert v.verdict == "caution"
    assert v.headline == "Marginal edge"
    assert v.ev < 0

def test_verdict_negative_ev():
    v = quick_verdict(StrategyInputs(bankroll=1000, odds=-110, win_probability=0.45))
    assert v.verdict == "skip"
    assert v.headline == "Negative expected value"

@pytest.mark.parametrize("confidence, verdict, headline", [
    (5, "caution", "High confidence play"),
    (4, "caution", "High confidence play"),
    (3, "caution", "Standard play"),
    (2, "caution", "Standard play"),
    (1, "skip", "Low confidence"),
    (None, "caution", "Standard play"),
])
def test_verdict_without_probability(confidence, verdict, headline):
    v = quick_verdict(StrategyInputs(bankroll=1000, odds=-110, confidence=confidence))
    assert (v.verdict, v.headline) == (verdict, headline)
    assert v.edge is None
    assert v.ev is None

def test_verdict_stake_scales_with_confidence():
    v = quick_verdict(StrategyInputs(bankroll=500, odds=-110, confidence=5))
    assert v.suggested_stake == pytest.approx(25.0)
