"""Shared fixtures: in-memory database and bet builders."""

from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backend.core.bets import BetSnapshot
from backend.core.odds_math import payout
from backend.models import Base

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(db_engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)()
    try:
        yield session
    finally:
        session.close()


def make_bet(
    status="pending",
    stake=10.0,
    odds=-110,
    actual_payout=None,
    sport="nfl",
    bet_type="spread",
    confidence=None,
    placed_day=0,
    settled_day=None,
    bet_id=None,
):
    """Snapshot with day offsets from BASE_TIME."""
    placed_at = BASE_TIME + timedelta(days=placed_day)
    settled_at = BASE_TIME + timedelta(days=settled_day) if settled_day is not None else None
    return BetSnapshot(
        id=bet_id or f"bet-{status}-{stake}-{placed_day}",
        sport=sport,
        bet_type=bet_type,
        stake=stake,
        odds=odds,
        potential_payout=payout(stake, odds),
        status=status,
        placed_at=placed_at,
        actual_payout=actual_payout,
        settled_at=settled_at,
        confidence=confidence,
    )
