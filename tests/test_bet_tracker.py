"""Tests for the bet record store (bet_tracker.py)."""

from datetime import datetime

import pytest

from backend.core.bets import BetSnapshot, BetStatus, Sport
from backend.services.bet_tracker import (
    BetNotFoundError,
    add_bet,
    delete_bet,
    get_bet,
    list_bets,
    load_snapshots,
    settle_bet,
    update_bet,
)


def _data(**overrides):
    data = {
        "sport": Sport.NBA,
        "bet_type": "spread",
        "description": "Lakers -5.5",
        "stake": 50.0,
        "odds": -110,
        "placed_at": datetime(2024, 1, 1, 12),
    }
    data.update(overrides)
    return data


# ---------------------------------------------------------------------------
# add_bet
# ---------------------------------------------------------------------------

def test_add_bet_derives_payout(db):
    bet = add_bet(db, _data())
    assert bet.id
    assert bet.sport == "nba"
    assert bet.status == "pending"
    assert bet.potential_payout == pytest.approx(95.4545, abs=1e-3)
    assert bet.settled_at is None

def test_add_bet_ignores_supplied_potential_payout(db):
    bet = add_bet(db, _data(odds=150, stake=10.0, potential_payout=999.0))
    assert bet.potential_payout == pytest.approx(25.0)

def test_add_closed_bet_gets_settled_at(db):
    bet = add_bet(db, _data(status=BetStatus.LOST))
    assert bet.status == "lost"
    assert bet.settled_at is not None

def test_add_bet_keeps_given_settled_at(db):
    when = datetime(2024, 1, 3)
    bet = add_bet(db, _data(status="won", actual_payout=95.45, settled_at=when))
    assert bet.settled_at == when

def test_ids_are_unique(db):
    assert add_bet(db, _data()).id != add_bet(db, _data()).id


# ---------------------------------------------------------------------------
# update / delete
# ---------------------------------------------------------------------------

def test_update_recomputes_payout(db):
    bet = add_bet(db, _data())
    updated = update_bet(db, bet.id, {"stake": 10.0, "odds": 200})
    assert updated.potential_payout == pytest.approx(30.0)

def test_update_leaves_payout_when_money_unchanged(db):
    bet = add_bet(db, _data())
    before = bet.potential_payout
    updated = update_bet(db, bet.id, {"notes": "sharp line", "id": "hijack"})
    assert updated.notes == "sharp line"
    assert updated.id == bet.id
    assert updated.potential_payout == before

def test_update_missing_bet(db):
    with pytest.raises(BetNotFoundError):
        update_bet(db, "nope", {"notes": "x"})

def test_delete_bet(db):
    bet = add_bet(db, _data())
    delete_bet(db, bet.id)
    with pytest.raises(BetNotFoundError) as exc:
        get_bet(db, bet.id)
    assert exc.value.bet_id == bet.id


# ---------------------------------------------------------------------------
# settle_bet
# ---------------------------------------------------------------------------

def test_settle_win_defaults_to_potential_payout(db):
    bet = add_bet(db, _data(stake=10.0, odds=150))
    settled = settle_bet(db, bet.id, BetStatus.WON)
    assert settled.status == "won"
    assert settled.actual_payout == pytest.approx(25.0)
    assert settled.settled_at is not None

def test_settle_push_returns_stake(db):
    bet = add_bet(db, _data(stake=10.0))
    settled = settle_bet(db, bet.id, "push")
    assert settled.actual_payout == pytest.approx(10.0)

def test_settle_explicit_payout_and_time(db):
    bet = add_bet(db, _data())
    when = datetime(2024, 1, 2, 22)
    settled = settle_bet(db, bet.id, "won", actual_payout=90.0, settled_at=when)
    assert settled.actual_payout == 90.0
    assert settled.settled_at == when

def test_settle_loss_has_no_payout(db):
    bet = add_bet(db, _data())
    assert settle_bet(db, bet.id, "lost").actual_payout is None

def test_settle_as_pending_rejected(db):
    bet = add_bet(db, _data())
    with pytest.raises(ValueError):
        settle_bet(db, bet.id, "pending")


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def test_list_bets_newest_first_and_filtered(db):
    old = add_bet(db, _data(placed_at=datetime(2024, 1, 1)))
    new = add_bet(db, _data(placed_at=datetime(2024, 1, 5)))
    settle_bet(db, old.id, "lost")

    assert [b.id for b in list_bets(db)] == [new.id, old.id]
    assert [b.id for b in list_bets(db, status=BetStatus.LOST)] == [old.id]
    assert [b.id for b in list_bets(db, limit=1)] == [new.id]

def test_load_snapshots(db):
    bet = add_bet(db, _data(confidence=4, location="DraftKings"))
    snaps = load_snapshots(db)
    assert len(snaps) == 1
    snap = snaps[0]
    assert isinstance(snap, BetSnapshot)
    assert snap.id == bet.id
    assert snap.confidence == 4
    assert snap.location == "DraftKings"
    assert not snap.is_settled


# ---------------------------------------------------------------------------
# Result fields stay consistent with status
# ---------------------------------------------------------------------------

def test_pending_bet_drops_settlement_fields(db):
    bet = add_bet(db, _data(settled_at=datetime(2024, 1, 2), actual_payout=80.0))
    assert bet.status == "pending"
    assert bet.settled_at is None
    assert bet.actual_payout is None

def test_logged_win_defaults_to_potential_payout(db):
    bet = add_bet(db, _data(stake=10.0, odds=150, status="won"))
    assert bet.actual_payout == pytest.approx(25.0)
    assert load_snapshots(db)[0].actual_payout == pytest.approx(25.0)

def test_logged_push_defaults_to_stake(db):
    bet = add_bet(db, _data(stake=10.0, status=BetStatus.PUSH))
    assert bet.actual_payout == pytest.approx(10.0)

def test_update_cannot_change_result_fields(db):
    bet = add_bet(db, _data())
    updated = update_bet(db, bet.id, {
        "status": "won", "actual_payout": 500.0, "settled_at": datetime(2024, 1, 2),
    })
    assert updated.status == "pending"
    assert updated.actual_payout is None
    assert updated.settled_at is None

def test_update_skips_null_required_fields(db):
    bet = add_bet(db, _data())
    updated = update_bet(db, bet.id, {"stake": None, "placed_at": None, "notes": "kept"})
    assert updated.stake == 50.0
    assert updated.placed_at == datetime(2024, 1, 1, 12)
    assert updated.potential_payout == pytest.approx(95.4545, abs=1e-3)
    assert updated.notes == "kept"

def test_update_clears_nullable_field(db):
    bet = add_bet(db, _data(notes="old"))
    assert update_bet(db, bet.id, {"notes": None}).notes is None
