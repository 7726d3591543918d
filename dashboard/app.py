"""
Streamlit Dashboard for the bet tracker
Overview: headline stats, bankroll curve and bet entry
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import datetime

import plotly.graph_objects as go
import streamlit as st

from backend.utils.formatters import format_currency, format_odds, format_percent
from dashboard.utils import api_get, api_post

st.set_page_config(
    page_title="Bet Tracker",
    page_icon="🎯",
    layout="wide",
    initial_sidebar_state="expanded",
)

SPORTS = ["nfl", "nba", "mlb", "nhl", "ncaaf", "ncaab", "soccer", "mma", "boxing", "other"]
BET_TYPES = ["moneyline", "spread", "total", "prop", "parlay", "teaser", "futures"]


# ==============================================================================
# SIDEBAR
# ==============================================================================

with st.sidebar:
    st.title("🎯 Bet Tracker")
    starting_bankroll = st.number_input(
        "Starting bankroll ($)", min_value=1.0, value=1000.0, step=100.0
    )
    st.caption("See sidebar pages for History, Breakdown and Strategy.")


# ==============================================================================
# STATS
# ==============================================================================

st.title("Overview")

stats = api_get("/api/performance/summary")

if not stats or stats.get("total_bets", 0) == 0:
    st.info("No bets tracked yet. Start logging your bets to see your performance statistics!")
else:
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total Profit/Loss", format_currency(stats["profit"], signed=True))
    c2.metric("Win Rate", format_percent(stats["win_rate"]))
    c3.metric("ROI", format_percent(stats["roi"]))
    c4.metric("Total Staked", format_currency(stats["total_staked"]))

    d1, d2, d3, d4 = st.columns(4)
    d1.metric("Record", f"{stats['won_bets']}-{stats['lost_bets']}-{stats['push_bets']}")
    d2.metric("Biggest Win", format_currency(stats["biggest_win"]))
    d3.metric("Biggest Loss", format_currency(stats["biggest_loss"]))
    d4.metric("Average Odds", format_odds(stats["average_odds"]))

    for line in stats.get("insights", []):
        st.markdown(f"• {line}")

st.markdown("---")

# ==============================================================================
# BANKROLL CURVE
# ==============================================================================

st.subheader("Bankroll")
curve = api_get("/api/performance/bankroll", {"starting_bankroll": starting_bankroll})

if not curve or not curve.get("has_data"):
    st.info("No settled bets yet. Once you settle bets, you'll see your bankroll trend over time.")
else:
    up = curve["final_bankroll"] >= curve["starting_bankroll"]
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=list(range(len(curve["values"]))),
        y=curve["values"],
        mode="lines+markers",
        line=dict(color="green" if up else "red"),
        hovertext=curve["labels"],
    ))
    fig.add_hline(y=curve["starting_bankroll"], line_dash="dash", line_color="gray")
    fig.update_layout(
        xaxis=dict(tickmode="array", tickvals=list(range(len(curve["labels"]))),
                   ticktext=curve["labels"]),
        yaxis_title="Bankroll ($)", height=320,
    )
    st.plotly_chart(fig, use_container_width=True)

    change = curve["final_bankroll"] - curve["starting_bankroll"]
    st.caption(
        f"Based on {format_currency(curve['starting_bankroll'])} starting bankroll and "
        f"{curve['settled_bets']} settled bets · now {format_currency(curve['final_bankroll'])} "
        f"({format_currency(change, signed=True)}) · max drawdown {curve['max_drawdown']:.1%}"
    )

st.markdown("---")

# ==============================================================================
# ADD BET
# ==============================================================================

st.subheader("Log a New Bet")
prefill = st.session_state.get("prefill", {})

with st.form("add_bet_form", clear_on_submit=True):
    col1, col2 = st.columns(2)
    with col1:
        sport = st.selectbox("Sport", SPORTS, index=SPORTS.index(prefill.get("sport", "nfl")))
        bet_type = st.selectbox(
            "Bet Type", BET_TYPES, index=BET_TYPES.index(prefill.get("bet_type", "moneyline"))
        )
        description = st.text_input(
            "Description", value=prefill.get("description", ""), placeholder='e.g. "Lakers -5.5"'
        )
        teams = st.text_input("Teams", value=prefill.get("teams", ""))
    with col2:
        stake = st.number_input("Stake ($)", min_value=0.01, value=10.0, step=5.0)
        odds = st.number_input("Odds (American)", value=int(prefill.get("odds", -110)), step=5)
        location = st.text_input("Sportsbook", value=prefill.get("location", "") or "")
        confidence = st.slider("Confidence", 1, 5, 3)

    notes = st.text_area("Notes (optional)", max_chars=1000)
    submitted = st.form_submit_button("Log Bet", type="primary")

if submitted:
    if odds == 0 or -100 < odds < 100:
        st.error("Odds must be valid American odds (>= +100 or <= -100).")
    else:
        payload = {
            "sport": sport,
            "bet_type": bet_type,
            "description": description,
            "stake": float(stake),
            "odds": int(odds),
            "teams": teams or None,
            "event_date": prefill.get("event_date"),
            "placed_at": datetime.utcnow().isoformat(),
            "location": location or None,
            "confidence": confidence,
            "notes": notes or None,
        }
        result = api_post("/api/bets", payload)
        if result:
            st.session_state.pop("prefill", None)
            st.success(
                f"Logged {result['description'] or result['bet_type']}: "
                f"potential payout {format_currency(result['potential_payout'])}"
            )
