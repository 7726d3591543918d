"""
Performance analytics computation.

All public functions receive a sequence of bet snapshots (see
``backend.core.bets``) and return plain dataclasses, so they can be called
from FastAPI endpoints, the dashboard or tests without a database.
Nothing here mutates its input; calling twice on the same bets gives the
same answer.
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from backend.core.bets import (
    BET_TYPE_LABELS,
    SETTLED_STATUSES,
    SPORT_LABELS,
    BetStatus,
    settled_profit,
    status_value,
)

logger = logging.getLogger(__name__)

#: Groups smaller than this never qualify as best/worst category.
MIN_CATEGORY_SAMPLE = 2

#: Win rate needed to break even at standard -110 juice.
BREAK_EVEN_WIN_RATE = 52.4


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _safe_roi(profit: float, staked: float) -> float:
    return profit / staked * 100 if staked > 0 else 0.0


def _win_rate(wins: int, total: int) -> float:
    return wins / total * 100 if total > 0 else 0.0


def _mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _by_status(bets: Iterable, status: BetStatus) -> List:
    return [b for b in bets if status_value(b.status) == status.value]


# ---------------------------------------------------------------------------
# Overall stats
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BettingStats:
    total_bets: int = 0
    won_bets: int = 0
    lost_bets: int = 0
    push_bets: int = 0
    pending_bets: int = 0
    cancelled_bets: int = 0
    total_staked: float = 0.0
    total_returned: float = 0.0
    profit: float = 0.0
    roi: float = 0.0
    win_rate: float = 0.0
    average_odds: float = 0.0
    biggest_win: float = 0.0
    biggest_loss: float = 0.0

    def to_dict(self) -> Dict:
        return asdict(self)


def calculate_betting_stats(bets: Sequence) -> BettingStats:
    """
    Aggregate counts and money figures over the whole collection.

    Stake totals, win rate and average odds use won+lost+push bets;
    ``total_returned`` sums won payouts only.  Every ratio falls back to 0
    when its denominator is empty.
    """
    bets = list(bets)
    won = _by_status(bets, BetStatus.WON)
    lost = _by_status(bets, BetStatus.LOST)
    push = _by_status(bets, BetStatus.PUSH)
    settled = [b for b in bets if status_value(b.status) in SETTLED_STATUSES]

    total_staked = sum(b.stake for b in settled)
    total_returned = sum(b.actual_payout or 0.0 for b in won)
    profit = total_returned - total_staked

    stats = BettingStats(
        total_bets=len(bets),
        won_bets=len(won),
        lost_bets=len(lost),
        push_bets=len(push),
        pending_bets=len(_by_status(bets, BetStatus.PENDING)),
        cancelled_bets=len(_by_status(bets, BetStatus.CANCELLED)),
        total_staked=total_staked,
        total_returned=total_returned,
        profit=profit,
        roi=_safe_roi(profit, total_staked),
        win_rate=_win_rate(len(won), len(settled)),
        average_odds=_mean([b.odds for b in settled]),
        biggest_win=max(((b.actual_payout or 0.0) - b.stake for b in won), default=0.0),
        biggest_loss=max((b.stake for b in lost), default=0.0),
    )
    logger.debug(
        "Stats over %d bets: %d settled, profit %.2f", len(bets), len(settled), profit
    )
    return stats


def performance_insights(stats: BettingStats) -> List[str]:
    """Short text observations shown under the stat cards."""
    insights = []
    if stats.roi > 5:
        insights.append(
            f"Excellent ROI of {stats.roi:.1f}%! You're beating the market."
        )
    if stats.roi < 0:
        insights.append(
            "You're currently down. Consider being more selective with your bets."
        )
    if stats.win_rate >= 55:
        insights.append(
            f"Your {stats.win_rate:.1f}% win rate is above the break-even point "
            f"for standard -110 odds (~{BREAK_EVEN_WIN_RATE}%)."
        )
    if stats.win_rate < BREAK_EVEN_WIN_RATE and stats.won_bets + stats.lost_bets >= 20:
        insights.append(
            f"To break even at -110 odds, you need a ~{BREAK_EVEN_WIN_RATE}% win rate. "
            "Focus on quality over quantity."
        )
    if stats.total_bets < 20:
        insights.append(
            "Keep tracking! You need more bets for meaningful statistical analysis."
        )
    return insights


# ---------------------------------------------------------------------------
# Category breakdowns
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BreakdownRow:
    label: str
    wins: int
    losses: int
    pushes: int
    total: int
    win_rate: float
    profit: float


def by_sport(bet) -> str:
    sport = status_value(bet.sport)
    return SPORT_LABELS.get(sport, sport)


def by_bet_type(bet) -> str:
    bet_type = status_value(bet.bet_type)
    return BET_TYPE_LABELS.get(bet_type, bet_type)


def by_confidence(bet) -> str:
    return f"{bet.confidence}/5 Confidence" if bet.confidence else "No Rating"


def build_breakdown(bets: Iterable, key: Callable) -> List[BreakdownRow]:
    """
    Group settled bets by ``key(bet)`` and score each group.

    Pushes count toward ``total`` but not the win-rate denominator.
    Rows come back largest group first; equal sizes keep first-seen order.
    """
    groups: Dict[str, Dict] = {}
    for bet in bets:
        status = status_value(bet.status)
        if status not in SETTLED_STATUSES:
            continue
        grp = groups.setdefault(key(bet), {"wins": 0, "losses": 0, "pushes": 0, "profit": 0.0})
        if status == BetStatus.WON.value:
            grp["wins"] += 1
        elif status == BetStatus.LOST.value:
            grp["losses"] += 1
        else:
            grp["pushes"] += 1
        grp["profit"] += settled_profit(bet)

    rows = [
        BreakdownRow(
            label=label,
            wins=g["wins"],
            losses=g["losses"],
            pushes=g["pushes"],
            total=g["wins"] + g["losses"] + g["pushes"],
            win_rate=_win_rate(g["wins"], g["wins"] + g["losses"]),
            profit=g["profit"],
        )
        for label, g in groups.items()
    ]
    rows.sort(key=lambda r: r.total, reverse=True)
    return rows


def best_and_worst_category(
    rows: Iterable[BreakdownRow],
    min_sample: int = MIN_CATEGORY_SAMPLE,
) -> Tuple[Optional[BreakdownRow], Optional[BreakdownRow]]:
    """
    Highest and lowest win-rate rows among those with ``total >= min_sample``.

    Ties go to the first row encountered.  Returns ``(None, None)`` when no
    row has enough bets.
    """
    best = worst = None
    for row in rows:
        if row.total < min_sample:
            continue
        if best is None or row.win_rate > best.win_rate:
            best = row
        if worst is None or row.win_rate < worst.win_rate:
            worst = row
    return best, worst


# ---------------------------------------------------------------------------
# Streak
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Streak:
    status: str   # "won" or "lost"
    count: int


def current_streak(bets: Iterable) -> Optional[Streak]:
    """
    Run of identical results ending at the most recently placed decided bet.

    Only won/lost bets count; pushes, pending and cancelled bets are skipped
    rather than breaking the run.
    """
    decided = [
        b for b in bets
        if status_value(b.status) in (BetStatus.WON.value, BetStatus.LOST.value)
    ]
    decided.sort(key=lambda b: b.placed_at, reverse=True)
    if not decided:
        return None

    first = status_value(decided[0].status)
    count = 0
    for bet in decided:
        if status_value(bet.status) != first:
            break
        count += 1
    return Streak(status=first, count=count)


# ---------------------------------------------------------------------------
# calculate_performance_breakdown
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PerformanceBreakdown:
    by_sport: List[BreakdownRow] = field(default_factory=list)
    by_bet_type: List[BreakdownRow] = field(default_factory=list)
    by_confidence: List[BreakdownRow] = field(default_factory=list)
    best_category: Optional[BreakdownRow] = None
    worst_category: Optional[BreakdownRow] = None
    streak: Optional[Streak] = None

    @property
    def has_data(self) -> bool:
        return bool(self.by_sport)

    def to_dict(self) -> Dict:
        return asdict(self)


def calculate_performance_breakdown(bets: Sequence) -> PerformanceBreakdown:
    """
    Sport / bet type / confidence breakdowns plus quick insights:
      - best and worst category across sport and bet-type rows
      - current win or loss streak

    The worst category is dropped when it is the same row as the best.
    """
    bets = list(bets)
    sport_rows = build_breakdown(bets, by_sport)
    type_rows = build_breakdown(bets, by_bet_type)
    confidence_rows = build_breakdown(bets, by_confidence)

    best, worst = best_and_worst_category(sport_rows + type_rows)
    if best is not None and worst is not None and worst.label == best.label:
        worst = None

    return PerformanceBreakdown(
        by_sport=sport_rows,
        by_bet_type=type_rows,
        by_confidence=confidence_rows,
        best_category=best,
        worst_category=worst,
        streak=current_streak(bets),
    )
