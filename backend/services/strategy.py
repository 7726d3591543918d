"""
Bet-sizing recommendations and the quick verdict.

Given a bankroll, the odds on offer and whatever the user knows (their own
win probability, a 1-5 confidence rating, recent bet history), produce:

  get_all_recommendations()  - ordered list of sizing strategies
  quick_verdict()            - single recommended / caution / skip call

Everything here is a pure function of its inputs.  Missing optional inputs
drop the matching recommendation instead of raising.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Sequence

from backend.core.bets import BetStatus, status_value
from backend.core.kelly import kelly_fraction, kelly_risk_level, kelly_sizing
from backend.core.odds_math import expected_value, implied_prob

logger = logging.getLogger(__name__)

FLAT_UNIT_PCTS = (1, 2, 3)
FLAT_SUGGESTED_PCT = 2

MARTINGALE_WINDOW = 5
MARTINGALE_LOSS_TRIGGER = 2

#: Edge above which a bet without positive EV is still worth a look.
CAUTION_EDGE_FLOOR = -0.02

#: Confidence assumed by the quick verdict when the user gives none.
DEFAULT_CONFIDENCE = 3

RISK_LOW = "low"
RISK_MEDIUM = "medium"
RISK_HIGH = "high"

VERDICT_RECOMMENDED = "recommended"
VERDICT_CAUTION = "caution"
VERDICT_SKIP = "skip"


@dataclass(frozen=True)
class StrategyInputs:
    bankroll: float
    odds: int
    win_probability: Optional[float] = None
    confidence: Optional[int] = None
    recent_bets: Optional[Sequence] = None   # most recent first; bets or statuses


@dataclass(frozen=True)
class BettingRecommendation:
    title: str
    description: str
    reasoning: str
    risk_level: str
    suggested_stake: Optional[float] = None

    def to_dict(self) -> Dict:
        return asdict(self)


def _pct(value: float) -> str:
    return f"{value * 100:.1f}%"


def _result(item) -> str:
    """Status of a history entry: a bet-like object or a bare status."""
    return status_value(getattr(item, "status", item))


# ---------------------------------------------------------------------------
# Individual strategies
# ---------------------------------------------------------------------------

def flat_betting(inputs: StrategyInputs) -> BettingRecommendation:
    """Fixed 1-3% units; the suggested stake is always the 2% unit."""
    bankroll = inputs.bankroll
    one, two, three = (bankroll * pct / 100 for pct in FLAT_UNIT_PCTS)
    reasoning = (
        "Conservative flat betting recommendations:\n"
        f"• 1 Unit (1%): ${one:.2f} - Very conservative\n"
        f"• 2 Units (2%): ${two:.2f} - Recommended standard bet\n"
        f"• 3 Units (3%): ${three:.2f} - High confidence plays\n\n"
        "This approach protects your bankroll and allows for ~50 bets at 2% "
        "per bet before risking depletion."
    )
    return BettingRecommendation(
        title="Flat Betting",
        description="Consistent unit size for disciplined bankroll management",
        reasoning=reasoning,
        risk_level=RISK_LOW,
        suggested_stake=bankroll * FLAT_SUGGESTED_PCT / 100,
    )


def kelly_criterion(inputs: StrategyInputs) -> BettingRecommendation:
    """
    Kelly sizing from the user's win probability.

    Half-Kelly is the suggested stake; full and quarter Kelly are listed in
    the reasoning.  A fraction <= 0 means there is no edge and the stake is 0.
    """
    p = inputs.win_probability
    if p is None or not 0.0 < p < 1.0:
        return BettingRecommendation(
            title="Kelly Criterion",
            description="Optimal bet sizing based on your estimated edge",
            reasoning=(
                "Please provide your estimated win probability (0-100%) to "
                "calculate optimal bet size."
            ),
            risk_level=RISK_MEDIUM,
        )

    implied = implied_prob(inputs.odds)
    fraction = kelly_fraction(p, inputs.odds)

    if fraction <= 0:
        return BettingRecommendation(
            title="Kelly Criterion - No Edge",
            description="This bet has no positive expected value",
            reasoning=(
                f"Based on your win probability of {_pct(p)} and odds of "
                f"{inputs.odds}, this bet has negative expected value. The implied "
                f"probability is {_pct(implied)}. Skip this bet."
            ),
            risk_level=RISK_HIGH,
            suggested_stake=0.0,
        )

    sizing = kelly_sizing(inputs.bankroll, fraction)
    reasoning = (
        f"Based on {_pct(p)} win probability vs {_pct(implied)} implied odds probability:\n"
        f"• Full Kelly: ${sizing.full_stake:.2f} ({_pct(fraction)} of bankroll)\n"
        f"• Half Kelly: ${sizing.half_stake:.2f} (recommended - reduces variance)\n"
        f"• Quarter Kelly: ${sizing.quarter_stake:.2f} (conservative)\n\n"
        f"Your estimated edge: {(p - implied) * 100:.2f}%"
    )
    return BettingRecommendation(
        title="Kelly Criterion",
        description="Optimal bet sizing to maximize long-term growth",
        reasoning=reasoning,
        risk_level=kelly_risk_level(fraction),
        suggested_stake=sizing.half_stake,
    )


def confidence_based(inputs: StrategyInputs, confidence: int) -> BettingRecommendation:
    """Stake ``confidence`` percent of the bankroll (1-5 maps to 1-5%)."""
    bankroll = inputs.bankroll
    stake = bankroll * confidence / 100

    if confidence <= 2:
        risk = RISK_LOW
    elif confidence >= 4:
        risk = RISK_HIGH
    else:
        risk = RISK_MEDIUM

    reasoning = (
        f"Your confidence: {confidence}/5\n"
        f"Suggested stake: ${stake:.2f} ({confidence}% of ${bankroll:.2f} bankroll)\n\n"
        f"Implied probability from odds: {_pct(implied_prob(inputs.odds))}\n\n"
        "This approach scales bet size with your confidence while maintaining "
        "bankroll discipline. Only bet what you can afford to lose."
    )
    return BettingRecommendation(
        title="Confidence-Based Betting",
        description=f"{confidence}% of bankroll based on your confidence level",
        reasoning=reasoning,
        risk_level=risk,
        suggested_stake=stake,
    )


def martingale_warning(inputs: StrategyInputs) -> BettingRecommendation:
    """
    Cautionary entry only: never suggests a positive stake.

    Two or more losses among the last five bets escalate the warning and
    pin the stake to 0.
    """
    recent = list(inputs.recent_bets or [])[:MARTINGALE_WINDOW]
    losses = sum(1 for item in recent if _result(item) == BetStatus.LOST.value)

    if not recent:
        return BettingRecommendation(
            title="Martingale System",
            description="Double your bet after each loss",
            reasoning=(
                "WARNING: The Martingale system is extremely risky and not "
                "recommended. It requires exponentially increasing bets and can "
                "wipe out your bankroll quickly. Even with unlimited funds, "
                "sportsbook limits prevent its effectiveness."
            ),
            risk_level=RISK_HIGH,
        )

    if losses >= MARTINGALE_LOSS_TRIGGER:
        return BettingRecommendation(
            title="Martingale System - High Risk",
            description="You have recent losses - Martingale would suggest doubling",
            reasoning=(
                f"DANGER: You've lost {losses} of your last {MARTINGALE_WINDOW} bets. "
                "Martingale would suggest increasingly large bets, but this is a "
                "path to ruin. Consider taking a break or reducing bet size instead.\n\n"
                "Why Martingale fails:\n"
                "• Requires exponential bankroll growth\n"
                "• Sportsbooks have betting limits\n"
                "• Long losing streaks are inevitable\n"
                "• Risk of total bankroll loss is high\n\n"
                "Recommendation: Use flat betting or Kelly Criterion instead."
            ),
            risk_level=RISK_HIGH,
            suggested_stake=0.0,
        )

    return BettingRecommendation(
        title="Martingale System",
        description="Not recommended due to high risk",
        reasoning=(
            "While you haven't had a recent losing streak, the Martingale system "
            "is still not recommended. Use proven strategies like Kelly Criterion "
            "or flat betting instead."
        ),
        risk_level=RISK_HIGH,
    )


# ---------------------------------------------------------------------------
# get_all_recommendations
# ---------------------------------------------------------------------------

def get_all_recommendations(inputs: StrategyInputs) -> List[BettingRecommendation]:
    """
    Ordered recommendations:
      1. flat betting (always)
      2. Kelly criterion (win probability given)
      3. confidence-based (confidence given)
      4. Martingale warning (recent bets given)
    """
    recommendations = [flat_betting(inputs)]

    if inputs.win_probability:
        recommendations.append(kelly_criterion(inputs))

    if inputs.confidence:
        recommendations.append(confidence_based(inputs, inputs.confidence))

    if inputs.recent_bets:
        recommendations.append(martingale_warning(inputs))

    logger.debug(
        "Built %d recommendations (bankroll=%.2f odds=%s)",
        len(recommendations), inputs.bankroll, inputs.odds,
    )
    return recommendations


# ---------------------------------------------------------------------------
# quick_verdict
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class QuickVerdict:
    verdict: str                       # recommended | caution | skip
    headline: str
    implied_probability: float
    suggested_stake: float
    user_probability: Optional[float] = None
    edge: Optional[float] = None
    ev: Optional[float] = None
    ev_percentage: Optional[float] = None

    def to_dict(self) -> Dict:
        return asdict(self)


def quick_verdict(inputs: StrategyInputs) -> QuickVerdict:
    """
    Classify a prospective bet as recommended / caution / skip.

    With a win probability the call rests on EV (at the confidence-sized
    stake) and edge over the implied probability.  Without one it falls back
    to the confidence rating alone.
    """
    confidence = inputs.confidence or DEFAULT_CONFIDENCE
    implied = implied_prob(inputs.odds)
    stake = inputs.bankroll * confidence / 100
    p = inputs.win_probability

    if p is not None:
        ev = expected_value(stake, inputs.odds, p) if stake > 0 else None
        positive_ev = ev is not None and ev.is_positive_ev
        edge = p - implied

        if positive_ev and edge > 0:
            verdict, headline = VERDICT_RECOMMENDED, "Positive expected value"
        elif positive_ev or edge > CAUTION_EDGE_FLOOR:
            verdict, headline = VERDICT_CAUTION, "Marginal edge"
        else:
            verdict, headline = VERDICT_SKIP, "Negative expected value"

        return QuickVerdict(
            verdict=verdict,
            headline=headline,
            implied_probability=implied,
            suggested_stake=stake,
            user_probability=p,
            edge=edge,
            ev=ev.ev if ev else None,
            ev_percentage=ev.ev_percentage if ev else None,
        )

    if confidence >= 4:
        verdict, headline = VERDICT_CAUTION, "High confidence play"
    elif confidence >= 2:
        verdict, headline = VERDICT_CAUTION, "Standard play"
    else:
        verdict, headline = VERDICT_SKIP, "Low confidence"

    return QuickVerdict(
        verdict=verdict,
        headline=headline,
        implied_probability=implied,
        suggested_stake=stake,
    )
