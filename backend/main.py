"""
FastAPI application for the bet tracker
REST API over the bet store, performance stats and sizing strategies
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from backend.core.bets import BetStatus
from backend.core.odds_math import (
    american_to_decimal,
    decimal_to_american,
    expected_value,
    implied_prob,
    payout,
)
from backend.models import get_db, init_db
from backend.schemas import (
    BetCreate,
    BetResponse,
    BetUpdate,
    OddsCalcRequest,
    OddsCalcResponse,
    PrefillRequest,
    RecommendationResponse,
    SettleRequest,
    StrategyRequest,
    VerdictResponse,
)
from backend.services import bet_tracker
from backend.services.bankroll import (
    DEFAULT_STARTING_BANKROLL,
    max_drawdown,
    reconstruct_bankroll,
)
from backend.services.bet_tracker import BetNotFoundError
from backend.services.odds import (
    SPORTS_API_MAP,
    OddsAPIClient,
    OddsAPIError,
    demo_games,
    prefill_bet,
)
from backend.services.performance import (
    calculate_betting_stats,
    calculate_performance_breakdown,
    performance_insights,
)
from backend.services.strategy import (
    StrategyInputs,
    get_all_recommendations,
    quick_verdict,
)

# Logging setup
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

#: History handed to the Martingale check when the caller sends none.
RECENT_BETS_WINDOW = 10


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info("Starting bet tracker API")
    init_db()
    yield
    logger.info("Shutting down bet tracker API")


app = FastAPI(
    title="Bet Tracker",
    description="Personal sports-betting tracker: bets, stats and bet sizing",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "*").split(","),
    allow_methods=["*"],
    allow_headers=["*"],
)


def _strategy_inputs(payload: StrategyRequest, db: Session) -> StrategyInputs:
    if payload.recent_statuses is not None:
        recent = [s.value for s in payload.recent_statuses]
    else:
        recent = bet_tracker.load_snapshots(db, limit=RECENT_BETS_WINDOW)
    return StrategyInputs(
        bankroll=payload.bankroll,
        odds=payload.odds,
        win_probability=payload.win_probability,
        confidence=payload.confidence,
        recent_bets=recent,
    )


# ============================================================================
# PUBLIC ENDPOINTS
# ============================================================================

@app.get("/")
async def root():
    return {
        "message": "Bet Tracker API",
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health")
async def health_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
    except Exception as exc:
        logger.error("Health check DB error: %s", exc)
        database = "error"
    return {"status": "healthy" if database == "connected" else "degraded", "database": database}


# ============================================================================
# BETS
# ============================================================================

@app.get("/api/bets", response_model=List[BetResponse])
async def get_bets(
    status: Optional[BetStatus] = Query(default=None),
    db: Session = Depends(get_db),
):
    """All bets, newest placed first, optionally filtered by status."""
    return bet_tracker.list_bets(db, status=status)


@app.post("/api/bets", response_model=BetResponse, status_code=201)
async def create_bet(payload: BetCreate, db: Session = Depends(get_db)):
    return bet_tracker.add_bet(db, payload.model_dump())


@app.get("/api/bets/{bet_id}", response_model=BetResponse)
async def get_bet(bet_id: str, db: Session = Depends(get_db)):
    try:
        return bet_tracker.get_bet(db, bet_id)
    except BetNotFoundError:
        raise HTTPException(status_code=404, detail="Bet not found")


@app.patch("/api/bets/{bet_id}", response_model=BetResponse)
async def edit_bet(bet_id: str, payload: BetUpdate, db: Session = Depends(get_db)):
    try:
        return bet_tracker.update_bet(db, bet_id, payload.model_dump(exclude_unset=True))
    except BetNotFoundError:
        raise HTTPException(status_code=404, detail="Bet not found")


@app.delete("/api/bets/{bet_id}", status_code=204)
async def remove_bet(bet_id: str, db: Session = Depends(get_db)):
    try:
        bet_tracker.delete_bet(db, bet_id)
    except BetNotFoundError:
        raise HTTPException(status_code=404, detail="Bet not found")


@app.put("/api/bets/{bet_id}/settle", response_model=BetResponse)
async def settle_bet(bet_id: str, payload: SettleRequest, db: Session = Depends(get_db)):
    """Record a result; a win without a payout is paid at potential payout."""
    try:
        return bet_tracker.settle_bet(
            db, bet_id, payload.status,
            actual_payout=payload.actual_payout,
            settled_at=payload.settled_at,
        )
    except BetNotFoundError:
        raise HTTPException(status_code=404, detail="Bet not found")
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


# ============================================================================
# PERFORMANCE
# ============================================================================

@app.get("/api/performance/summary")
async def get_performance_summary(db: Session = Depends(get_db)):
    """Overall stats plus text insights."""
    stats = calculate_betting_stats(bet_tracker.load_snapshots(db))
    return {**stats.to_dict(), "insights": performance_insights(stats)}


@app.get("/api/performance/breakdown")
async def get_performance_breakdown(db: Session = Depends(get_db)):
    """By sport, bet type and confidence, with best/worst category and streak."""
    breakdown = calculate_performance_breakdown(bet_tracker.load_snapshots(db))
    return {"has_data": breakdown.has_data, **breakdown.to_dict()}


@app.get("/api/performance/bankroll")
async def get_bankroll_curve(
    starting_bankroll: float = Query(default=DEFAULT_STARTING_BANKROLL, gt=0),
    db: Session = Depends(get_db),
):
    """Running bankroll over settled bets; has_data is false when there are none."""
    curve = reconstruct_bankroll(bet_tracker.load_snapshots(db), starting_bankroll)
    if curve is None:
        return {"has_data": False, "starting_bankroll": starting_bankroll}
    return {
        "has_data": True,
        "starting_bankroll": starting_bankroll,
        "labels": [p.label for p in curve.points],
        "values": [round(p.bankroll, 2) for p in curve.points],
        "final_bankroll": round(curve.final_bankroll, 2),
        "settled_bets": curve.settled_count,
        "max_drawdown": round(max_drawdown(curve), 4),
    }


# ============================================================================
# STRATEGY
# ============================================================================

@app.post("/api/strategy/recommendations", response_model=List[RecommendationResponse])
async def get_recommendations(payload: StrategyRequest, db: Session = Depends(get_db)):
    return [r.to_dict() for r in get_all_recommendations(_strategy_inputs(payload, db))]


@app.post("/api/strategy/verdict", response_model=VerdictResponse)
async def get_verdict(payload: StrategyRequest, db: Session = Depends(get_db)):
    return quick_verdict(_strategy_inputs(payload, db)).to_dict()


# ============================================================================
# ODDS
# ============================================================================

@app.post("/api/odds/calculate", response_model=OddsCalcResponse)
async def calculate_odds(payload: OddsCalcRequest):
    total = payout(payload.stake, payload.odds)
    result = OddsCalcResponse(
        payout=total,
        profit=total - payload.stake,
        decimal_odds=american_to_decimal(payload.odds),
        implied_probability=implied_prob(payload.odds),
    )
    if payload.win_probability is not None:
        ev = expected_value(payload.stake, payload.odds, payload.win_probability)
        result.ev = ev.ev
        result.ev_percentage = ev.ev_percentage
        result.is_positive_ev = ev.is_positive_ev
        result.fair_odds = decimal_to_american(1.0 / payload.win_probability)
    return result


@app.get("/api/odds/games/{sport}")
async def get_upcoming_games(sport: str):
    """Upcoming games for a local sport code; demo slate when no API key is set."""
    sport_key = SPORTS_API_MAP.get(sport, sport)
    try:
        client = OddsAPIClient()
    except ValueError:
        logger.info("No odds API key configured, serving demo games")
        return {"demo": True, "games": demo_games()}
    try:
        return {"demo": False, "games": client.get_upcoming_games(sport_key)}
    except OddsAPIError as exc:
        raise HTTPException(status_code=502, detail=str(exc))


@app.post("/api/odds/prefill")
async def prefill(payload: PrefillRequest):
    try:
        fields = prefill_bet(payload.game, payload.team, payload.market)
    except (KeyError, TypeError, ValueError) as exc:
        logger.warning("Malformed game in prefill request: %r", exc)
        raise HTTPException(status_code=422, detail=f"Malformed game data: {exc!r}")
    if fields is None:
        raise HTTPException(status_code=404, detail="No odds available for this selection")
    return fields


# ============================================================================
# ERROR HANDLERS
# ============================================================================

@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Catch-all exception handler"""
    logger.error("Unhandled exception: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "type": type(exc).__name__}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
