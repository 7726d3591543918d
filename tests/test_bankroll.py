"""Tests for bankroll reconstruction."""

import pytest

from backend.services.bankroll import BankrollCurve, BankrollPoint, max_drawdown, reconstruct_bankroll
from conftest import make_bet


def _values(curve):
    return [p.bankroll for p in curve.points]


def test_win_then_loss():
    bets = [
        make_bet("won", stake=50, actual_payout=90, settled_day=1),
        make_bet("lost", stake=30, settled_day=2),
    ]
    curve = reconstruct_bankroll(bets, starting_bankroll=1000)
    assert _values(curve) == pytest.approx([1000, 1040, 1010])
    assert curve.final_bankroll == pytest.approx(1010)
    assert curve.settled_count == 2

def test_sorted_by_settlement_not_input_order():
    bets = [
        make_bet("lost", stake=30, settled_day=2),
        make_bet("won", stake=50, actual_payout=90, settled_day=1),
    ]
    curve = reconstruct_bankroll(bets, starting_bankroll=1000)
    assert _values(curve) == pytest.approx([1000, 1040, 1010])

def test_labels_start_then_dates():
    bets = [make_bet("won", stake=10, actual_payout=20, settled_day=4)]
    curve = reconstruct_bankroll(bets, starting_bankroll=100)
    assert [p.label for p in curve.points] == ["Start", "Jan 5"]

def test_push_leaves_bankroll_unchanged():
    bets = [make_bet("push", stake=25, actual_payout=25, settled_day=1)]
    curve = reconstruct_bankroll(bets, starting_bankroll=500)
    assert _values(curve) == pytest.approx([500, 500])

def test_win_without_payout_counts_as_zero_return():
    bets = [make_bet("won", stake=20, actual_payout=None, settled_day=1)]
    curve = reconstruct_bankroll(bets, starting_bankroll=100)
    assert curve.final_bankroll == pytest.approx(80)

def test_pending_cancelled_and_unsettled_are_ignored():
    bets = [
        make_bet("pending", stake=40),
        make_bet("cancelled", stake=40, settled_day=1),
        make_bet("lost", stake=40, settled_day=None),  # no settlement time
        make_bet("lost", stake=10, settled_day=3),
    ]
    curve = reconstruct_bankroll(bets, starting_bankroll=100)
    assert _values(curve) == pytest.approx([100, 90])

def test_no_settled_bets_returns_none():
    assert reconstruct_bankroll([], starting_bankroll=1000) is None
    assert reconstruct_bankroll([make_bet("pending")], starting_bankroll=1000) is None

def test_ties_keep_collection_order():
    first = make_bet("won", stake=10, actual_payout=30, settled_day=1, bet_id="a")
    second = make_bet("lost", stake=100, settled_day=1, bet_id="b")
    curve = reconstruct_bankroll([first, second], starting_bankroll=100)
    assert _values(curve) == pytest.approx([100, 120, 20])
    curve = reconstruct_bankroll([second, first], starting_bankroll=100)
    assert _values(curve) == pytest.approx([100, 0, 20])

def test_deterministic():
    bets = [
        make_bet("won", stake=50, actual_payout=90, settled_day=1),
        make_bet("lost", stake=30, settled_day=2),
    ]
    assert reconstruct_bankroll(bets, 1000) == reconstruct_bankroll(bets, 1000)


# ---------------------------------------------------------------------------
# max_drawdown
# ---------------------------------------------------------------------------

def _curve(values):
    points = tuple(BankrollPoint(str(i), v) for i, v in enumerate(values))
    return BankrollCurve(points=points, final_bankroll=values[-1])

def test_max_drawdown_none():
    assert max_drawdown(None) == 0.0

def test_max_drawdown_monotonic_up():
    assert max_drawdown(_curve([100, 110, 120])) == 0.0

def test_max_drawdown_peak_to_trough():
    # Peak 120, trough 90 → 25%
    assert max_drawdown(_curve([100, 120, 90, 110])) == pytest.approx(0.25)
