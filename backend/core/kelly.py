"""Kelly criterion sizing: the single source of truth for bet sizing math.

All functions here are **pure**: no I/O, no database, no logging.
Import from this module; never reimplement Kelly locally in services.

:func:`kelly_fraction` returns the *full* Kelly fraction, signed, so callers
can tell "no edge" (≤ 0) apart from a small positive edge.
:func:`kelly_sizing` turns a positive fraction into the full / half / quarter
stakes shown to the user, and :func:`kelly_risk_level` buckets it.

Design decisions
----------------
* **Half-Kelly** is the headline recommendation.  Full Kelly maximises
  long-run log-wealth only when the win probability is known exactly; a
  hand-entered estimate never is, and overbetting is punished far harder
  than underbetting.
* No cap is applied to the fraction.  The risk bucket tells the user when
  the suggested size is aggressive instead of silently clipping it.

Run tests with::

    pytest tests/test_kelly.py -v
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from backend.core.odds_math import american_to_decimal

#: Multiplier applied to full Kelly for the headline stake.
HALF_KELLY: Final[float] = 0.5

#: Multiplier for the conservative alternative.
QUARTER_KELLY: Final[float] = 0.25

#: Full-Kelly fraction above which sizing is classed as high risk.
HIGH_RISK_FRACTION: Final[float] = 0.05

#: Full-Kelly fraction above which sizing is classed as medium risk.
MEDIUM_RISK_FRACTION: Final[float] = 0.02


def kelly_fraction(win_prob: float, american: int | float) -> float:
    """Full Kelly fraction of bankroll for a simple win/loss bet.

    ::

        f*  =  (b · p − q) / b

    where ``b`` is the profit per unit staked (decimal odds − 1),
    ``p`` the win probability and ``q = 1 − p``.

    Args:
        win_prob: Estimated probability of winning, in ``(0, 1)``.
        american: American odds of the bet.

    Returns:
        The signed fraction.  A value ≤ 0 means the bet has no edge.

    Examples::

        kelly_fraction(0.55, -110) →  0.055
        kelly_fraction(0.45, -110) → −0.155
    """
    b = american_to_decimal(american) - 1.0
    q = 1.0 - win_prob
    return (b * win_prob - q) / b


@dataclass(frozen=True, slots=True)
class KellySizing:
    """Stake amounts derived from a positive Kelly fraction."""

    fraction: float
    full_stake: float
    half_stake: float
    quarter_stake: float


def kelly_sizing(bankroll: float, fraction: float) -> KellySizing:
    """Full, half and quarter Kelly stakes for ``bankroll``.

    Examples::

        kelly_sizing(1000, 0.055).half_stake → 27.5
    """
    full = bankroll * fraction
    return KellySizing(
        fraction=fraction,
        full_stake=full,
        half_stake=full * HALF_KELLY,
        quarter_stake=full * QUARTER_KELLY,
    )


def kelly_risk_level(fraction: float) -> str:
    """Bucket a positive full-Kelly fraction into ``low``/``medium``/``high``."""
    if fraction > HIGH_RISK_FRACTION:
        return "high"
    if fraction > MEDIUM_RISK_FRACTION:
        return "medium"
    return "low"
