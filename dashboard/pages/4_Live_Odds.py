"""Live Odds page: browse upcoming games and prefill a new bet."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

import streamlit as st
from backend.utils.formatters import format_odds
from dashboard.utils import api_get, api_post

st.set_page_config(page_title="Live Odds | Bet Tracker", layout="wide")

st.title("Live Matchups")

sport = st.selectbox("Sport", ["nba", "nfl", "mlb", "nhl", "ncaaf", "ncaab", "soccer", "mma"])
data = api_get(f"/api/odds/games/{sport}")

if not data:
    st.stop()
if data.get("demo"):
    st.info("No odds API key configured, showing demo games.")
if not data.get("games"):
    st.info("No upcoming games.")
    st.stop()

for game in data["games"]:
    with st.expander(f"{game['away_team']} @ {game['home_team']} · {game['commence_time']}"):
        books = game.get("bookmakers") or []
        if not books:
            st.caption("No odds posted yet.")
            continue
        market = st.radio("Market", ["h2h", "spreads", "totals"], horizontal=True, key=f"m-{game['id']}")
        names = {
            o["name"]
            for b in books for m in b["markets"] if m["key"] == market
            for o in m["outcomes"]
        }
        for name in sorted(names):
            if st.button(f"Bet {name}", key=f"{game['id']}-{market}-{name}"):
                fields = api_post("/api/odds/prefill", {"game": game, "team": name, "market": market})
                if fields:
                    st.session_state["prefill"] = {**fields, "sport": sport}
                    st.success(
                        f"Prefilled {fields['description']} at {format_odds(fields['odds'])} "
                        f"({fields['location']}). Open the Overview page to log it."
                    )
