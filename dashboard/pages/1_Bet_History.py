"""Bet History page: filterable table, settlement and CSV export."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

import pandas as pd
import streamlit as st
from backend.utils.formatters import format_currency, format_odds
from dashboard.utils import api_delete, api_get, api_put

st.set_page_config(page_title="Bet History | Bet Tracker", layout="wide")

st.title("Bet History")

status_filter = st.selectbox("Status", ["all", "pending", "won", "lost", "push", "cancelled"])
params = None if status_filter == "all" else {"status": status_filter}
bets = api_get("/api/bets", params)

if not bets:
    st.info("No bets found for this filter.")
    st.stop()

df = pd.DataFrame(bets)
df["placed_at"] = pd.to_datetime(df["placed_at"]).dt.strftime("%Y-%m-%d")
df["odds_display"] = df["odds"].map(format_odds)

display_cols = [
    "placed_at", "sport", "bet_type", "description", "teams", "odds_display",
    "stake", "potential_payout", "actual_payout", "status", "confidence", "location",
]
rename_map = {
    "placed_at": "Placed", "sport": "Sport", "bet_type": "Type",
    "description": "Bet", "teams": "Teams", "odds_display": "Odds",
    "stake": "Stake ($)", "potential_payout": "To Win ($)",
    "actual_payout": "Paid ($)", "status": "Status",
    "confidence": "Conf.", "location": "Book",
}

st.write(f"**{len(df)} bet(s)**")
st.dataframe(df[display_cols].rename(columns=rename_map), use_container_width=True, hide_index=True)

# --- Settle / delete ---
pending = df[df["status"] == "pending"]
if not pending.empty:
    st.markdown("---")
    st.subheader("Settle Pending")
    labels = {
        f"{r.description or r.bet_type} · {format_currency(r.stake)} @ {r.odds_display}": r.id
        for r in pending.itertuples()
    }
    with st.form("settle_form"):
        choice = st.selectbox("Bet", list(labels.keys()))
        result = st.radio("Result", ["won", "lost", "push", "cancelled"], horizontal=True)
        payout = st.number_input(
            "Actual payout ($, 0 pays the potential payout on a win)",
            min_value=0.0, value=0.0, step=1.0,
        )
        if st.form_submit_button("Settle", type="primary"):
            body = {"status": result}
            if payout > 0:
                body["actual_payout"] = payout
            if api_put(f"/api/bets/{labels[choice]}/settle", body):
                st.success("Bet settled")
                st.rerun()

with st.expander("Delete a bet"):
    all_labels = {f"{r.placed_at} · {r.description or r.bet_type} ({r.status})": r.id for r in df.itertuples()}
    victim = st.selectbox("Bet to delete", list(all_labels.keys()))
    if st.button("Delete", type="secondary"):
        if api_delete(f"/api/bets/{all_labels[victim]}") is not None:
            st.rerun()

# --- CSV export ---
st.markdown("---")
csv = df[display_cols].rename(columns=rename_map).to_csv(index=False).encode("utf-8")
st.download_button(
    label="Export to CSV",
    data=csv,
    file_name="bet_history.csv",
    mime="text/csv",
)
