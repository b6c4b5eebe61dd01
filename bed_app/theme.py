import streamlit as st

from bed_app.config import BASE_DIR

STYLE_FILE = BASE_DIR / "style.css"


def load_style() -> str:
    try:
        return STYLE_FILE.read_text(encoding="utf-8")
    except OSError:
        return ""


def apply_theme() -> None:
    css_text = load_style()
    if css_text:
        st.markdown(f"<style>{css_text}</style>", unsafe_allow_html=True)
