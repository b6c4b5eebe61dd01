from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _resolve_data_dir() -> Path:
    override = os.getenv("BED_DATA_DIR", "").strip()
    if override:
        return Path(override).expanduser().resolve()
    return BASE_DIR / "data"


def _resolve_timeout() -> float | None:
    raw = os.getenv("BED_HTTP_TIMEOUT_SECONDS", "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if value > 0 else None


DATA_DIR = _resolve_data_dir()
DB_PATH = DATA_DIR / "app.db"

DEFAULT_CALCULATOR_ENDPOINT = "http://127.0.0.1:5000/calculate_BED"
HTTP_TIMEOUT_SECONDS = _resolve_timeout()
RECORD_RUNS = os.getenv("BED_RECORD_RUNS", "1").strip().lower() not in {"0", "false", "no", "off"}
LOG_LEVEL = os.getenv("BED_LOG_LEVEL", "INFO").strip().upper() or "INFO"

MIN_ISOCENTRES = 1
MAX_ISOCENTRES = 50

PAGE_TITLE = "BED Calculator | Radiotherapy Dose Calculator"
PAGE_DESCRIPTION = (
    "Use our BED calculator to compute the biologically effective dose based on "
    "total dose, beam-on time, and gap time."
)


def _read_streamlit_secret(key: str) -> str | None:
    try:
        import streamlit as st
    except Exception:
        return None

    try:
        raw = st.secrets.get(key)
    except Exception:
        return None

    if raw is None:
        return None
    value = str(raw).strip()
    return value or None


def get_calculator_endpoint() -> str:
    env_value = os.getenv("BED_CALCULATOR_ENDPOINT", "").strip()
    if env_value:
        return env_value

    for secret_key in ("calculator_endpoint", "CALCULATOR_ENDPOINT"):
        secret_value = _read_streamlit_secret(secret_key)
        if secret_value:
            return secret_value
    return DEFAULT_CALCULATOR_ENDPOINT
