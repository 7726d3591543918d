"""
Bet record store.

CRUD and settlement for the ``bets`` table:
  add_bet()     - log a new bet, deriving its potential payout
  update_bet()  - partial edit, keeping potential payout in step with stake/odds
  delete_bet()  - remove a bet
  settle_bet()  - record the result and settlement time
  list_bets()   - rows newest-placed first
  load_snapshots() - immutable copies for the stats/strategy functions
"""

import logging
import uuid
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from backend.core.bets import BetSnapshot, BetStatus, CLOSED_STATUSES, status_value
from backend.core.odds_math import payout
from backend.models import Bet

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = frozenset({
    "sport", "bet_type", "description", "stake", "odds", "teams", "event_date",
    "placed_at", "notes", "location", "confidence",
})

# Columns that are NOT NULL; a None in an update leaves them unchanged
_REQUIRED_FIELDS = frozenset({
    "sport", "bet_type", "description", "stake", "odds", "placed_at",
})


class BetNotFoundError(LookupError):
    def __init__(self, bet_id: str):
        super().__init__(f"Bet {bet_id} not found")
        self.bet_id = bet_id


# ---------------------------------------------------------------------------
# Row <-> snapshot
# ---------------------------------------------------------------------------

def to_snapshot(row: Bet) -> BetSnapshot:
    return BetSnapshot(
        id=row.id,
        sport=row.sport,
        bet_type=row.bet_type,
        description=row.description or "",
        stake=row.stake,
        odds=row.odds,
        potential_payout=row.potential_payout,
        actual_payout=row.actual_payout,
        status=row.status,
        placed_at=row.placed_at,
        event_date=row.event_date,
        settled_at=row.settled_at,
        teams=row.teams,
        notes=row.notes,
        location=row.location,
        confidence=row.confidence,
    )


def _get_or_raise(db: Session, bet_id: str) -> Bet:
    bet = db.get(Bet, bet_id)
    if bet is None:
        raise BetNotFoundError(bet_id)
    return bet


def _enum_value(value):
    return status_value(value) if value is not None else None


def _default_payout(status: str, stake: float, potential: float, given: Optional[float]):
    if given is not None:
        return given
    if status == BetStatus.WON.value:
        return potential
    if status == BetStatus.PUSH.value:
        return stake
    return None


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

def add_bet(db: Session, data: Dict) -> Bet:
    """
    Insert a bet.  ``potential_payout`` is always derived from stake and
    odds here; any value passed in is ignored.

    A bet logged as already closed gets the same payout defaults as
    :func:`settle_bet`.  A pending bet never carries a settlement time or
    payout.
    """
    status = _enum_value(data.get("status")) or BetStatus.PENDING.value
    potential = payout(data["stake"], data["odds"])
    if status in CLOSED_STATUSES:
        settled_at = data.get("settled_at") or datetime.utcnow()
        actual_payout = _default_payout(
            status, data["stake"], potential, data.get("actual_payout")
        )
    else:
        settled_at = actual_payout = None

    bet = Bet(
        id=str(uuid.uuid4()),
        sport=_enum_value(data["sport"]),
        bet_type=_enum_value(data["bet_type"]),
        description=data.get("description") or "",
        stake=data["stake"],
        odds=data["odds"],
        potential_payout=potential,
        actual_payout=actual_payout,
        teams=data.get("teams"),
        event_date=data.get("event_date"),
        status=status,
        placed_at=data.get("placed_at") or datetime.utcnow(),
        settled_at=settled_at,
        notes=data.get("notes"),
        location=data.get("location"),
        confidence=data.get("confidence"),
        created_at=datetime.utcnow(),
    )
    db.add(bet)
    db.commit()
    db.refresh(bet)

    logger.info("Bet logged: %s %s $%.2f @ %+d", bet.id, bet.description, bet.stake, bet.odds)
    return bet


def update_bet(db: Session, bet_id: str, updates: Dict) -> Bet:
    """
    Apply a partial update.

    Unknown keys are ignored, and so are result fields (status, payout,
    settlement time): those only change through :func:`settle_bet`.
    """
    bet = _get_or_raise(db, bet_id)

    for key, value in updates.items():
        if key not in _EDITABLE_FIELDS:
            continue
        if value is None and key in _REQUIRED_FIELDS:
            continue
        if key in ("sport", "bet_type"):
            value = _enum_value(value)
        setattr(bet, key, value)

    if "stake" in updates or "odds" in updates:
        bet.potential_payout = payout(bet.stake, bet.odds)

    db.commit()
    db.refresh(bet)
    logger.info("Bet %s updated: %s", bet_id, ", ".join(sorted(updates)))
    return bet


def delete_bet(db: Session, bet_id: str) -> None:
    bet = _get_or_raise(db, bet_id)
    db.delete(bet)
    db.commit()
    logger.info("Bet %s deleted", bet_id)


def settle_bet(
    db: Session,
    bet_id: str,
    status,
    actual_payout: Optional[float] = None,
    settled_at: Optional[datetime] = None,
) -> Bet:
    """
    Record a result.

    A win without an explicit payout is paid at ``potential_payout``; a push
    without one returns the stake.  Lost and cancelled bets keep whatever
    payout was passed, which the stats ignore.
    """
    status = _enum_value(status)
    if status not in CLOSED_STATUSES:
        raise ValueError(f"Cannot settle a bet as {status!r}")

    bet = _get_or_raise(db, bet_id)

    actual_payout = _default_payout(status, bet.stake, bet.potential_payout, actual_payout)

    bet.status = status
    bet.actual_payout = actual_payout
    bet.settled_at = settled_at or datetime.utcnow()
    db.commit()
    db.refresh(bet)

    logger.info(
        "Bet %s settled: %s, payout %s",
        bet_id, status.upper(),
        f"${actual_payout:.2f}" if actual_payout is not None else "n/a",
    )
    return bet


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def get_bet(db: Session, bet_id: str) -> Bet:
    return _get_or_raise(db, bet_id)


def list_bets(db: Session, status=None, limit: Optional[int] = None) -> List[Bet]:
    q = db.query(Bet)
    if status is not None:
        q = q.filter(Bet.status == _enum_value(status))
    q = q.order_by(Bet.placed_at.desc())
    if limit:
        q = q.limit(limit)
    return q.all()


def load_snapshots(db: Session, limit: Optional[int] = None) -> List[BetSnapshot]:
    """Every bet as an immutable snapshot, newest placed first."""
    return [to_snapshot(b) for b in list_bets(db, limit=limit)]
