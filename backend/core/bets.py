"""Bet domain types shared by every computation in the tracker.

The record store owns bet rows; everything downstream works on
:class:`BetSnapshot` values, an immutable copy of a row taken at query time.
Aggregation, bankroll replay and strategy functions accept any object that
exposes the same attribute names, so ORM rows and test doubles work too.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Final, Optional


class Sport(str, Enum):
    NFL = "nfl"
    NBA = "nba"
    MLB = "mlb"
    NHL = "nhl"
    NCAAF = "ncaaf"
    NCAAB = "ncaab"
    SOCCER = "soccer"
    MMA = "mma"
    BOXING = "boxing"
    OTHER = "other"


class BetType(str, Enum):
    MONEYLINE = "moneyline"
    SPREAD = "spread"
    TOTAL = "total"
    PROP = "prop"
    PARLAY = "parlay"
    TEASER = "teaser"
    FUTURES = "futures"


class BetStatus(str, Enum):
    PENDING = "pending"
    WON = "won"
    LOST = "lost"
    PUSH = "push"
    CANCELLED = "cancelled"


#: Statuses that count toward stats and the bankroll curve.
SETTLED_STATUSES: Final[frozenset] = frozenset(
    {BetStatus.WON.value, BetStatus.LOST.value, BetStatus.PUSH.value}
)

#: Statuses for which a ``settled_at`` timestamp is recorded.
CLOSED_STATUSES: Final[frozenset] = SETTLED_STATUSES | {BetStatus.CANCELLED.value}

SPORT_LABELS: Final[dict] = {
    "nfl": "NFL",
    "nba": "NBA",
    "mlb": "MLB",
    "nhl": "NHL",
    "ncaaf": "College Football",
    "ncaab": "College Basketball",
    "soccer": "Soccer",
    "mma": "MMA",
    "boxing": "Boxing",
    "other": "Other",
}

BET_TYPE_LABELS: Final[dict] = {
    "moneyline": "Moneyline",
    "spread": "Spread",
    "total": "Over/Under",
    "prop": "Prop",
    "parlay": "Parlay",
    "teaser": "Teaser",
    "futures": "Futures",
}


def status_value(status) -> str:
    """Normalise a status given as :class:`BetStatus` or plain string."""
    return status.value if isinstance(status, Enum) else str(status)


@dataclass(frozen=True, slots=True)
class BetSnapshot:
    """Read-only view of a single tracked bet.

    Attributes:
        id: Opaque unique identifier assigned by the store.
        sport: One of the :class:`Sport` values.
        bet_type: One of the :class:`BetType` values.
        stake: Amount wagered, always positive.
        odds: American odds, never 0.
        potential_payout: Total return if the bet wins, fixed at creation
            as ``payout(stake, odds)``.
        status: One of the :class:`BetStatus` values.
        placed_at: When the bet was placed.
        actual_payout: Total amount returned; meaningful for won (and push)
            bets only.
        settled_at: Present once status is won, lost, push or cancelled.
    """

    id: str
    sport: str
    bet_type: str
    stake: float
    odds: int
    potential_payout: float
    status: str
    placed_at: datetime
    description: str = ""
    actual_payout: Optional[float] = None
    event_date: Optional[datetime] = None
    settled_at: Optional[datetime] = None
    teams: Optional[str] = None
    notes: Optional[str] = None
    location: Optional[str] = None
    confidence: Optional[int] = None

    @property
    def is_settled(self) -> bool:
        return status_value(self.status) in SETTLED_STATUSES


def settled_profit(bet) -> float:
    """Profit or loss of a settled bet.

    won -> ``actual_payout - stake`` (missing payout counts as 0),
    lost -> ``-stake`` whatever payout is stored, anything else -> 0.
    """
    status = status_value(bet.status)
    if status == BetStatus.WON.value:
        return (bet.actual_payout or 0.0) - bet.stake
    if status == BetStatus.LOST.value:
        return -bet.stake
    return 0.0
