"""Shared utilities for all dashboard pages."""

import os
import requests
import streamlit as st
from dotenv import load_dotenv

load_dotenv()

_API_URL = os.getenv("API_URL", "http://localhost:8000")


def _request(method: str, endpoint: str, **kwargs):
    try:
        r = requests.request(method, f"{_API_URL}{endpoint}", timeout=15, **kwargs)
        r.raise_for_status()
        return r.json() if r.content else {}
    except requests.HTTPError as exc:
        detail = exc.response.json().get("detail", str(exc)) if exc.response is not None else str(exc)
        st.error(f"API {exc.response.status_code}: {detail}")
        return None
    except Exception as exc:
        st.error(f"Request failed: {exc}")
        return None


def api_get(endpoint: str, params: dict = None):
    return _request("GET", endpoint, params=params)


def api_post(endpoint: str, payload: dict):
    return _request("POST", endpoint, json=payload)


def api_put(endpoint: str, payload: dict):
    return _request("PUT", endpoint, json=payload)


def api_delete(endpoint: str):
    return _request("DELETE", endpoint)


RISK_ICONS = {
    "low":    "🟢",
    "medium": "🔵",
    "high":   "🔴",
}

VERDICT_ICONS = {
    "recommended": "✅",
    "caution":     "🟡",
    "skip":        "⛔",
}
