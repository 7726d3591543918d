"""
Pydantic request/response schemas for the bet tracker API.

Using explicit schemas instead of raw dicts prevents mass-assignment on ORM
models and generates accurate OpenAPI docs.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from backend.core.bets import BetStatus, BetType, Sport


def _check_american_odds(v: Optional[int]) -> Optional[int]:
    if v is None:
        return v
    if v == 0:
        raise ValueError("odds cannot be 0")
    if -100 < v < 100:
        raise ValueError(
            f"odds={v} is not valid American odds. Must be >= +100 or <= -100."
        )
    return v


# ---------------------------------------------------------------------------
# Bets
# ---------------------------------------------------------------------------

class BetCreate(BaseModel):
    """
    Payload for POST /api/bets.

    potential_payout is not accepted; the store derives it from stake and odds.
    """

    sport: Sport
    bet_type: BetType
    description: str = Field("", max_length=200, description='e.g. "Lakers -5.5"')
    stake: float = Field(..., gt=0, description="Amount wagered")
    odds: int = Field(..., description="American odds, e.g. -110 or +150")

    teams: Optional[str] = Field(None, max_length=200)
    event_date: Optional[datetime] = None
    placed_at: Optional[datetime] = Field(None, description="Defaults to now")

    status: BetStatus = BetStatus.PENDING
    actual_payout: Optional[float] = Field(None, ge=0)
    settled_at: Optional[datetime] = None

    notes: Optional[str] = Field(None, max_length=1000)
    location: Optional[str] = Field(None, max_length=120, description="Sportsbook")
    confidence: Optional[int] = Field(None, ge=1, le=5)

    @field_validator("odds")
    @classmethod
    def validate_american_odds(cls, v: int) -> int:
        return _check_american_odds(v)

    model_config = {
        "json_schema_extra": {
            "example": {
                "sport": "nba",
                "bet_type": "spread",
                "description": "Lakers -5.5",
                "stake": 50.0,
                "odds": -110,
                "teams": "Lakers vs Warriors",
                "location": "DraftKings",
                "confidence": 4,
            }
        }
    }


class BetUpdate(BaseModel):
    """Payload for PATCH /api/bets/{bet_id}.  Only fields sent are changed.

    Fields stored as NOT NULL may be omitted but not sent as null.
    """

    sport: Optional[Sport] = None
    bet_type: Optional[BetType] = None
    description: Optional[str] = Field(None, max_length=200)
    stake: Optional[float] = Field(None, gt=0)
    odds: Optional[int] = None
    teams: Optional[str] = Field(None, max_length=200)
    event_date: Optional[datetime] = None
    placed_at: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=1000)
    location: Optional[str] = Field(None, max_length=120)
    confidence: Optional[int] = Field(None, ge=1, le=5)

    @field_validator("odds")
    @classmethod
    def validate_american_odds(cls, v: Optional[int]) -> Optional[int]:
        return _check_american_odds(v)

    @field_validator("sport", "bet_type", "description", "stake", "odds", "placed_at")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("cannot be null; omit the field to leave it unchanged")
        return v


class SettleRequest(BaseModel):
    """
    Payload for PUT /api/bets/{bet_id}/settle.

    Omit actual_payout on a win to be paid the potential payout.
    """

    status: Literal["won", "lost", "push", "cancelled"]
    actual_payout: Optional[float] = Field(None, ge=0)
    settled_at: Optional[datetime] = None


class BetResponse(BaseModel):
    id: str
    sport: str
    bet_type: str
    description: str
    stake: float
    odds: int
    potential_payout: float
    actual_payout: Optional[float]
    teams: Optional[str]
    event_date: Optional[datetime]
    status: str
    placed_at: datetime
    settled_at: Optional[datetime]
    notes: Optional[str]
    location: Optional[str]
    confidence: Optional[int]
    created_at: Optional[datetime]

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Strategy
# ---------------------------------------------------------------------------

class StrategyRequest(BaseModel):
    """
    Payload for POST /api/strategy/recommendations and /api/strategy/verdict.

    win_probability is a fraction (0.55), not a percentage.  When
    recent_statuses is omitted the ten most recently placed stored bets are
    used as history.
    """

    bankroll: float = Field(..., gt=0)
    odds: int
    win_probability: Optional[float] = Field(None, gt=0.0, lt=1.0)
    confidence: Optional[int] = Field(None, ge=1, le=5)
    recent_statuses: Optional[list[BetStatus]] = Field(
        None, description="Most recent first, e.g. ['lost', 'won', 'lost']"
    )

    @field_validator("odds")
    @classmethod
    def validate_american_odds(cls, v: int) -> int:
        return _check_american_odds(v)


class RecommendationResponse(BaseModel):
    title: str
    description: str
    reasoning: str
    risk_level: Literal["low", "medium", "high"]
    suggested_stake: Optional[float]


class VerdictResponse(BaseModel):
    verdict: Literal["recommended", "caution", "skip"]
    headline: str
    implied_probability: float
    suggested_stake: float
    user_probability: Optional[float]
    edge: Optional[float]
    ev: Optional[float]
    ev_percentage: Optional[float]


# ---------------------------------------------------------------------------
# Odds calculator / prefill
# ---------------------------------------------------------------------------

class OddsCalcRequest(BaseModel):
    stake: float = Field(..., gt=0)
    odds: int
    win_probability: Optional[float] = Field(None, gt=0.0, lt=1.0)

    @field_validator("odds")
    @classmethod
    def validate_american_odds(cls, v: int) -> int:
        return _check_american_odds(v)


class OddsCalcResponse(BaseModel):
    payout: float
    profit: float
    decimal_odds: float
    implied_probability: float
    ev: Optional[float] = None
    ev_percentage: Optional[float] = None
    is_positive_ev: Optional[bool] = None
    fair_odds: Optional[int] = Field(
        None, description="American price at which win_probability breaks even"
    )


class PrefillRequest(BaseModel):
    game: dict
    team: str
    market: Literal["h2h", "spreads", "totals"] = "h2h"
