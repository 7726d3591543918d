"""Strategy page: sizing recommendations, quick verdict and odds calculator."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

import streamlit as st
from backend.utils.formatters import format_currency, format_odds, format_probability
from dashboard.utils import RISK_ICONS, VERDICT_ICONS, api_get, api_post

st.set_page_config(page_title="Strategy | Bet Tracker", layout="wide")

st.title("Bet Sizing")

stats = api_get("/api/performance/summary") or {}

c1, c2, c3, c4 = st.columns(4)
bankroll = c1.number_input("Current Bankroll ($)", min_value=1.0, value=1000.0, step=50.0)
if stats.get("total_staked", 0) > 0:
    c1.caption(f"You've staked {format_currency(stats['total_staked'])} total")
odds = c2.number_input("American Odds", value=-110, step=5)
win_pct = c3.number_input("Your Win Probability (%) - Optional", min_value=0.0, max_value=99.9,
                          value=0.0, step=0.5, help="For Kelly Criterion and EV calculations")
confidence = c4.slider("Confidence Level (1-5)", 1, 5, 3)

if odds == 0 or -100 < odds < 100:
    st.warning("Enter valid American odds (>= +100 or <= -100).")
    st.stop()

payload = {
    "bankroll": bankroll,
    "odds": int(odds),
    "win_probability": win_pct / 100 if win_pct > 0 else None,
    "confidence": confidence,
}

verdict = api_post("/api/strategy/verdict", payload)
if verdict:
    st.subheader(f"{VERDICT_ICONS[verdict['verdict']]} {verdict['verdict'].title()}: {verdict['headline']}")
    v1, v2, v3, v4 = st.columns(4)
    v1.metric("Implied Probability", format_probability(verdict["implied_probability"]))
    v2.metric("Your Probability", format_probability(verdict["user_probability"]))
    v3.metric("Edge", format_probability(verdict["edge"], digits=2))
    v4.metric("EV", format_currency(verdict["ev"], signed=True) if verdict["ev"] is not None else "-")

st.markdown("---")
st.subheader("Recommended Bet Sizing Strategies")

for rec in api_post("/api/strategy/recommendations", payload) or []:
    with st.container(border=True):
        head, stake_col = st.columns([4, 1])
        head.markdown(f"**{rec['title']}** · {RISK_ICONS[rec['risk_level']]} {rec['risk_level']} risk")
        head.caption(rec["description"])
        if rec["suggested_stake"]:
            stake_col.metric("Suggested", format_currency(rec["suggested_stake"]))
        st.text(rec["reasoning"])

st.markdown("---")
st.subheader("Odds Calculator")
stake = st.number_input("Stake ($)", min_value=0.01, value=100.0, step=10.0)
calc = api_post("/api/odds/calculate", {**payload, "stake": stake})
if calc:
    k1, k2, k3, k4 = st.columns(4)
    k1.metric("Total Payout", format_currency(calc["payout"]))
    k2.metric("Profit", format_currency(calc["profit"]))
    k3.metric("Decimal Odds", f"{calc['decimal_odds']:.3f}")
    k4.metric("Implied Probability", format_probability(calc["implied_probability"]))
    if calc.get("ev") is not None:
        msg = f"EV {format_currency(calc['ev'], signed=True)} ({calc['ev_percentage']:.2f}% expected return)"
        if calc.get("fair_odds") is not None:
            msg += f", fair price {format_odds(calc['fair_odds'])}"
        if calc["is_positive_ev"]:
            st.success("Positive EV: " + msg)
        else:
            st.error("Negative EV: " + msg + ". Consider skipping it.")
