"""
Running-bankroll reconstruction.

Replays settled bets in settlement order to rebuild the bankroll curve shown
on the overview chart.  Pure functions over bet snapshots; the API layer
loads the snapshots and picks the starting bankroll.
"""

import os
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from backend.core.bets import SETTLED_STATUSES, settled_profit, status_value

DEFAULT_STARTING_BANKROLL = float(os.getenv("STARTING_BANKROLL", "1000"))

START_LABEL = "Start"


@dataclass(frozen=True)
class BankrollPoint:
    label: str
    bankroll: float


@dataclass(frozen=True)
class BankrollCurve:
    points: Tuple[BankrollPoint, ...]
    final_bankroll: float

    @property
    def starting_bankroll(self) -> float:
        return self.points[0].bankroll

    @property
    def settled_count(self) -> int:
        return len(self.points) - 1


def _date_label(ts) -> str:
    # "Jan 5": no zero padding, matches the chart axis
    return f"{ts.strftime('%b')} {ts.day}"


def reconstruct_bankroll(
    bets: Iterable,
    starting_bankroll: float = DEFAULT_STARTING_BANKROLL,
) -> Optional[BankrollCurve]:
    """
    Fold settled bets into a running bankroll.

    Only won/lost/push bets with a ``settled_at`` are replayed, oldest
    first.  ``sorted`` is stable, so bets settled at the same instant keep
    their collection order.  won adds ``actual_payout - stake``, lost
    subtracts the stake, push leaves the bankroll unchanged.

    Returns None when there is nothing to replay so callers skip the chart
    instead of drawing a single "Start" point.
    """
    settled = [
        b for b in bets
        if status_value(b.status) in SETTLED_STATUSES and b.settled_at is not None
    ]
    if not settled:
        return None

    settled.sort(key=lambda b: b.settled_at)

    running = starting_bankroll
    points = [BankrollPoint(START_LABEL, running)]
    for bet in settled:
        running += settled_profit(bet)
        points.append(BankrollPoint(_date_label(bet.settled_at), running))

    return BankrollCurve(points=tuple(points), final_bankroll=running)


def max_drawdown(curve: Optional[BankrollCurve]) -> float:
    """Largest peak-to-trough fall along the curve, as a fraction of the peak."""
    if curve is None:
        return 0.0
    peak = curve.points[0].bankroll
    max_dd = 0.0
    for point in curve.points:
        if point.bankroll > peak:
            peak = point.bankroll
        if peak > 0:
            dd = (peak - point.bankroll) / peak
            if dd > max_dd:
                max_dd = dd
    return max_dd
