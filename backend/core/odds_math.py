"""Fundamental odds mathematics: the single source of truth.

Every function here is **pure**: no I/O, no logging, no side effects.
Import from this module; never reimplement locally in services or models.

The pillars exposed are:

1. **Odds conversion**: American ↔ decimal ↔ implied probability.
2. **Payout**: total return (stake included) for a stake at American odds.
3. **Expected value**: EV of a stake given the bettor's win probability.

Design decisions
----------------
* All functions accept American odds because every bet in the tracker is
  logged in that convention and The Odds API is queried with
  ``oddsFormat=american``.
* The functions are total.  Odds of ``0`` means "no odds entered" and is
  filtered out by callers (schemas reject it, the dashboard never sends it);
  nothing here raises.
* No rounding happens here.  Money is rounded to cents at presentation time
  (see :mod:`backend.utils.formatters`).

Run tests with::

    pytest tests/test_odds_math.py -v
"""

from __future__ import annotations

from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Odds conversion
# ---------------------------------------------------------------------------


def american_to_decimal(american: int | float) -> float:
    """Convert American odds to decimal (European) format.

    Decimal odds represent the total payout per unit staked, **including**
    the return of the stake itself.  Examples::

        american_to_decimal(-110) → 1.9091   (risk 110 to win 100)
        american_to_decimal(+150) → 2.5000   (risk 100 to win 150)

    Args:
        american: American odds.  Negative = favourite, positive = underdog.

    Returns:
        Decimal odds > 1.0.
    """
    if american > 0:
        return 1.0 + american / 100.0
    return 1.0 + 100.0 / abs(american)


def implied_prob(american: int | float) -> float:
    """Raw implied probability from American odds (vig-inclusive).

    Both sides of a market sum to slightly more than 1.0; the excess is the
    bookmaker's margin.

    Examples::

        implied_prob(-110) → 0.5238
        implied_prob(+150) → 0.4000
    """
    if american > 0:
        return 100.0 / (american + 100.0)
    magnitude = abs(american)
    return magnitude / (magnitude + 100.0)


def decimal_to_american(decimal_odds: float) -> int:
    """Convert decimal odds to the nearest American integer.

    Inverse of :func:`american_to_decimal`.  The odds calculator uses it to
    quote the fair price for a win probability (decimal ``1 / p``).
    Values ≥ 2.0 come back positive, values below 2.0 negative.

    Raises:
        ValueError: If ``decimal_odds <= 1.0`` (no American equivalent).
    """
    if decimal_odds <= 1.0:
        raise ValueError(
            f"Decimal odds {decimal_odds!r} must be > 1.0 to have an American equivalent."
        )
    if decimal_odds >= 2.0:
        return round((decimal_odds - 1.0) * 100)
    return round(-100.0 / (decimal_odds - 1.0))


# ---------------------------------------------------------------------------
# Payout
# ---------------------------------------------------------------------------


def payout(stake: float, american: int | float) -> float:
    """Total return for a winning bet, stake included.

    Examples::

        payout(100, -110) → 190.91
        payout(100, +150) → 250.00
    """
    if american > 0:
        return stake + stake * (american / 100.0)
    return stake + stake / (abs(american) / 100.0)


def profit(stake: float, american: int | float) -> float:
    """Net winnings for a winning bet (payout minus stake)."""
    return payout(stake, american) - stake


# ---------------------------------------------------------------------------
# Expected value
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class EVResult:
    """Expected value of a single stake.

    Attributes:
        ev: Expected profit in currency units.
        ev_percentage: ``ev`` as a percentage of the stake.
        is_positive_ev: ``ev > 0``.
    """

    ev: float
    ev_percentage: float
    is_positive_ev: bool


def expected_value(stake: float, american: int | float, win_prob: float) -> EVResult:
    """Expected value of staking ``stake`` at ``american`` odds.

    ::

        ev = p · profit − (1 − p) · stake

    Args:
        stake: Amount risked.  Must be positive (callers validate).
        american: American odds.
        win_prob: Bettor's estimated probability of winning, in ``(0, 1)``.

    Examples::

        expected_value(100, -110, 0.55) → ev ≈ +5.00, positive
        expected_value(100, -110, 0.45) → ev ≈ −14.09, negative
    """
    win_profit = payout(stake, american) - stake
    loss_prob = 1.0 - win_prob
    ev = win_prob * win_profit - loss_prob * stake
    return EVResult(
        ev=ev,
        ev_percentage=ev / stake * 100.0,
        is_positive_ev=ev > 0,
    )
