"""
The Odds API integration for prefilling new bets.
https://the-odds-api.com/

The tracker never depends on the provider schema beyond this module:
games come back as raw dicts, and prefill_bet() turns one selection into
the description / teams / odds / event_date / bet_type fields of a new bet.

There is no retry logic.  Fetch errors raise OddsAPIError and the caller
decides what to show.
"""

import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Sequence

import requests

from backend.core.bets import BetType

logger = logging.getLogger(__name__)

API_KEY = os.getenv("THE_ODDS_API_KEY")
BASE_URL = "https://api.the-odds-api.com/v4"
DEFAULT_REGIONS = tuple(os.getenv("ODDS_API_REGIONS", "us").split(","))
DEFAULT_MARKETS = ("h2h", "spreads", "totals")

# Local sport -> provider sport_key
SPORTS_API_MAP: Dict[str, str] = {
    "nfl": "americanfootball_nfl",
    "nba": "basketball_nba",
    "mlb": "baseball_mlb",
    "nhl": "icehockey_nhl",
    "ncaaf": "americanfootball_ncaaf",
    "ncaab": "basketball_ncaab",
    "soccer": "soccer_epl",  # Premier League as default
    "mma": "mma_mixed_martial_arts",
}

_MARKET_BET_TYPES = {
    "h2h": BetType.MONEYLINE.value,
    "spreads": BetType.SPREAD.value,
    "totals": BetType.TOTAL.value,
}


class OddsAPIError(RuntimeError):
    pass


class OddsAPIClient:
    """Client for The Odds API"""

    def __init__(self, api_key: Optional[str] = None, timeout: float = 10):
        self.api_key = api_key or API_KEY
        if not self.api_key:
            raise ValueError("THE_ODDS_API_KEY not set in environment")
        self.timeout = timeout

    def get_upcoming_games(
        self,
        sport_key: str,
        regions: Sequence[str] = DEFAULT_REGIONS,
        markets: Sequence[str] = DEFAULT_MARKETS,
        odds_format: str = "american",
    ) -> List[Dict]:
        """
        Fetch upcoming games with odds for one provider sport key.

        Raises OddsAPIError on a bad key, an exhausted quota or any other
        failed request.
        """
        url = f"{BASE_URL}/sports/{sport_key}/odds"
        params = {
            "apiKey": self.api_key,
            "regions": ",".join(regions),
            "markets": ",".join(markets),
            "oddsFormat": odds_format,
            "dateFormat": "iso",
        }

        try:
            response = requests.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error("Odds API error: %s", e)
            raise OddsAPIError(
                "Failed to fetch sports data. Please check your internet connection."
            ) from e

        if response.status_code == 401:
            raise OddsAPIError("Invalid API key. Please check your API key in settings.")
        if response.status_code == 429:
            raise OddsAPIError(
                "API rate limit exceeded. The free tier allows 500 requests per month."
            )
        if not response.ok:
            raise OddsAPIError(f"API error: {response.status_code} {response.reason}")

        data = response.json()
        logger.info(
            "Odds API: %d %s games fetched. Quota: %s remaining",
            len(data), sport_key, response.headers.get("x-requests-remaining"),
        )
        return data

    def get_active_sports(self) -> List[Dict]:
        """Active sports as ``{key, title, group, ...}`` dicts; [] on failure."""
        try:
            response = requests.get(
                f"{BASE_URL}/sports", params={"apiKey": self.api_key}, timeout=self.timeout
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error("Failed to fetch sports: %s", e)
            return []
        return [s for s in response.json() if s.get("active")]


# ---------------------------------------------------------------------------
# Game helpers (pure)
# ---------------------------------------------------------------------------

def _find_market(bookmaker: Dict, market: str) -> Optional[Dict]:
    for m in bookmaker.get("markets") or []:
        if m.get("key") == market:
            return m
    return None


def _find_outcome(market: Dict, name: str) -> Optional[Dict]:
    for o in market.get("outcomes") or []:
        if o.get("name") == name:
            return o
    return None


def best_odds(game: Dict, team: str, market: str = "h2h") -> Optional[Dict]:
    """Highest price for ``team`` across bookmakers: ``{odds, bookmaker, point}``.

    ``point`` is the line quoted alongside that price (None for h2h).
    """
    best = None
    for bookmaker in game.get("bookmakers") or []:
        mkt = _find_market(bookmaker, market)
        if not mkt:
            continue
        outcome = _find_outcome(mkt, team)
        if not outcome:
            continue
        if best is None or outcome["price"] > best["odds"]:
            best = {
                "odds": outcome["price"],
                "bookmaker": bookmaker.get("title"),
                "point": outcome.get("point"),
            }
    return best


def format_matchup(game: Dict) -> str:
    return f"{game['away_team']} @ {game['home_team']}"


def game_start(game: Dict) -> datetime:
    """Kick-off time as a naive UTC datetime (the store keeps naive UTC)."""
    start = datetime.fromisoformat(game["commence_time"].replace("Z", "+00:00"))
    if start.tzinfo is not None:
        start = start.astimezone(timezone.utc).replace(tzinfo=None)
    return start


def prefill_bet(game: Dict, team: str, market: str = "h2h") -> Optional[Dict]:
    """
    New-bet fields for one selection, or None when nobody prices it.

    ``team`` is the outcome name: a team for h2h/spreads, "Over"/"Under"
    for totals.
    """
    price = best_odds(game, team, market)
    if price is None:
        return None

    description = f"{team} ML"
    if market in ("spreads", "totals"):
        point = price["point"]
        if point is None:
            description = team
        elif market == "spreads":
            description = f"{team} {point:+g}"
        else:
            description = f"{team} {point:g}"

    return {
        "description": description,
        "teams": format_matchup(game),
        "odds": int(price["odds"]),
        "event_date": game_start(game),
        "bet_type": _MARKET_BET_TYPES.get(market, BetType.MONEYLINE.value),
        "location": price["bookmaker"],
    }


def demo_games() -> List[Dict]:
    """Static sample slate for when no API key is configured."""
    now = datetime.now(timezone.utc)

    def _iso(dt: datetime) -> str:
        return dt.isoformat().replace("+00:00", "Z")

    def _book(key, title, h2h, spreads, totals):
        return {
            "key": key,
            "title": title,
            "last_update": _iso(now),
            "markets": [
                {"key": "h2h", "outcomes": h2h},
                {"key": "spreads", "outcomes": spreads},
                {"key": "totals", "outcomes": totals},
            ],
        }

    return [
        {
            "id": "demo-1",
            "sport_key": "basketball_nba",
            "sport_title": "NBA",
            "commence_time": _iso(now + timedelta(hours=1)),
            "home_team": "Los Angeles Lakers",
            "away_team": "Golden State Warriors",
            "bookmakers": [
                _book(
                    "draftkings", "DraftKings",
                    [{"name": "Los Angeles Lakers", "price": -150},
                     {"name": "Golden State Warriors", "price": 130}],
                    [{"name": "Los Angeles Lakers", "price": -110, "point": -3.5},
                     {"name": "Golden State Warriors", "price": -110, "point": 3.5}],
                    [{"name": "Over", "price": -110, "point": 225.5},
                     {"name": "Under", "price": -110, "point": 225.5}],
                ),
                _book(
                    "fanduel", "FanDuel",
                    [{"name": "Los Angeles Lakers", "price": -145},
                     {"name": "Golden State Warriors", "price": 125}],
                    [{"name": "Los Angeles Lakers", "price": -108, "point": -3.5},
                     {"name": "Golden State Warriors", "price": -112, "point": 3.5}],
                    [{"name": "Over", "price": -105, "point": 226.0},
                     {"name": "Under", "price": -115, "point": 226.0}],
                ),
            ],
        },
        {
            "id": "demo-2",
            "sport_key": "americanfootball_nfl",
            "sport_title": "NFL",
            "commence_time": _iso(now + timedelta(days=1)),
            "home_team": "Kansas City Chiefs",
            "away_team": "Buffalo Bills",
            "bookmakers": [
                _book(
                    "draftkings", "DraftKings",
                    [{"name": "Kansas City Chiefs", "price": -125},
                     {"name": "Buffalo Bills", "price": 105}],
                    [{"name": "Kansas City Chiefs", "price": -110, "point": -2.5},
                     {"name": "Buffalo Bills", "price": -110, "point": 2.5}],
                    [{"name": "Over", "price": -110, "point": 48.5},
                     {"name": "Under", "price": -110, "point": 48.5}],
                ),
            ],
        },
    ]
