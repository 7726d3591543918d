"""Performance Breakdown page: by sport, bet type and confidence."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

import pandas as pd
import plotly.express as px
import streamlit as st
from dashboard.utils import api_get

st.set_page_config(page_title="Breakdown | Bet Tracker", layout="wide")

st.title("Performance Breakdown")

data = api_get("/api/performance/breakdown")

if not data or not data.get("has_data"):
    st.info(
        "No settled bets yet. Once you start tracking and settling bets, you'll see your "
        "performance broken down by sport, bet type, and confidence level."
    )
    st.stop()

# --- Quick insights ---
c1, c2, c3 = st.columns(3)
streak = data.get("streak")
if streak:
    word = "Wins" if streak["status"] == "won" else "Losses"
    c1.metric("Current Streak", f"{streak['count']} {word}")
best = data.get("best_category")
if best:
    c2.metric("Best Category", best["label"],
              f"{best['win_rate']:.0f}% ({best['wins']}-{best['losses']})")
worst = data.get("worst_category")
if worst:
    c3.metric("Needs Work", worst["label"],
              f"{worst['win_rate']:.0f}% ({worst['wins']}-{worst['losses']})", delta_color="inverse")

st.markdown("---")


def _table(title: str, rows: list, empty: str) -> None:
    st.subheader(title)
    if not rows:
        st.caption(empty)
        return
    df = pd.DataFrame(rows)
    st.dataframe(
        df[["label", "wins", "losses", "pushes", "win_rate", "profit"]].rename(columns={
            "label": "Category", "wins": "W", "losses": "L", "pushes": "P",
            "win_rate": "Win %", "profit": "Profit ($)",
        }).round(2),
        use_container_width=True, hide_index=True,
    )
    fig = px.bar(df, x="label", y="profit", color=df["profit"] >= 0,
                 color_discrete_map={True: "green", False: "red"})
    fig.update_layout(showlegend=False, xaxis_title="", yaxis_title="Profit ($)", height=260)
    st.plotly_chart(fig, use_container_width=True)


_table("By Sport", data["by_sport"], "No settled bets by sport.")
_table("By Bet Type", data["by_bet_type"], "No settled bets by type.")
_table("By Confidence", data["by_confidence"], "No settled bets with a confidence rating.")
