"""
Database models for the bet tracker
SQLAlchemy ORM, SQLite by default
"""

import os
from datetime import datetime

from dotenv import load_dotenv
from sqlalchemy import Column, DateTime, Float, Integer, String, Text, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./bets.db")


def make_engine(url: str = DATABASE_URL):
    # SQLite connections are handed between FastAPI worker threads
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, pool_pre_ping=True, echo=False, connect_args=connect_args)


engine = make_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


# Dependency for FastAPI
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None) -> None:
    """Create tables that do not exist yet."""
    Base.metadata.create_all(bind=bind or engine)


class Bet(Base):
    """A single tracked wager"""

    __tablename__ = "bets"

    id = Column(String(36), primary_key=True)  # uuid4

    # Classification
    sport = Column(String, nullable=False, index=True)
    bet_type = Column(String, nullable=False, index=True)
    description = Column(String, nullable=False, default="")  # "Lakers -5.5"

    # Money
    stake = Column(Float, nullable=False)
    odds = Column(Integer, nullable=False)  # American odds, never 0
    potential_payout = Column(Float, nullable=False)  # payout(stake, odds) at creation
    actual_payout = Column(Float)  # Total returned, set on settlement

    # Game details
    teams = Column(String)  # "Lakers vs Warriors"
    event_date = Column(DateTime, index=True)

    # Lifecycle
    status = Column(String, nullable=False, default="pending", index=True)
    placed_at = Column(DateTime, nullable=False, index=True)
    settled_at = Column(DateTime)

    # Metadata
    notes = Column(Text)
    location = Column(String)  # Sportsbook
    confidence = Column(Integer)  # 1-5

    created_at = Column(DateTime, default=datetime.utcnow)
