from __future__ import annotations

from html import escape as html_escape

import streamlit as st

from bed_app.models import UIState
from bed_app.submission import UI_STATE_KEY, init_submission_state


def init_session_state() -> None:
    init_submission_state(st.session_state)


def current_ui_state() -> UIState:
    init_session_state()
    return st.session_state[UI_STATE_KEY]


def _result_block(label: str, value: str) -> str:
    return (
        f'<div class="result-label">{html_escape(label)}</div>'
        f'<div class="result-value">{html_escape(value)}</div>'
    )


def render_ui_state(ui_state: UIState) -> None:
    blocks: list[str] = []
    if ui_state.error:
        blocks.append(f'<p class="result-error">{html_escape(ui_state.error)}</p>')

    result = ui_state.result
    if result is not None:
        blocks.append(_result_block("Millar BED Result:", result.bed))
        blocks.append(_result_block("A9 Result:", result.a9))
        if result.warning:
            blocks.append(f'<p class="result-warning">{html_escape(result.warning)}</p>')
        blocks.append(_result_block("Relative Difference:", result.relative_difference))

    if not blocks:
        return
    st.markdown(f'<div class="result-box">{"".join(blocks)}</div>', unsafe_allow_html=True)


def render_nav(current: str = "") -> None:
    nav = st.columns(2)
    with nav[0]:
        if st.button("Calculator", key=f"nav_calc_{current}"):
            st.switch_page("pages/1_BED_Calculator.py")
    with nav[1]:
        if st.button("Run History", key=f"nav_runs_{current}"):
            st.switch_page("pages/2_Run_History.py")
