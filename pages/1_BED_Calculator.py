import streamlit as st

from bed_app.bootstrap import initialize_application
from bed_app.config import MAX_ISOCENTRES, MIN_ISOCENTRES, PAGE_DESCRIPTION, PAGE_TITLE
from bed_app.submission import submit
from bed_app.theme import apply_theme
from bed_app.ui import current_ui_state, init_session_state, render_nav, render_ui_state

st.set_page_config(page_title=PAGE_TITLE, page_icon=":material/calculate:", layout="centered")

initialize_application()
apply_theme()
init_session_state()

st.markdown("<h1 style='text-align: center;'>BED Calculator</h1>", unsafe_allow_html=True)
st.caption(PAGE_DESCRIPTION)
render_nav(current="calculator")

# Outside the form so the gap-time field swaps as soon as the box is ticked.
st.checkbox("Use Gap Array instead of Average Gap Time", key="use_gap_array")

with st.form("bed_form", clear_on_submit=False):
    st.text_input("Total Dose (Gy)", key="total_dose")
    st.text_input("Total Beam On Time (mins)", key="total_beam_on")
    st.text_input(
        "Isocentres",
        key="isocentres",
        help=f"Whole number from {MIN_ISOCENTRES} to {MAX_ISOCENTRES}.",
    )
    if st.session_state["use_gap_array"]:
        st.text_input(
            "Gap Time Array (mins)",
            key="gap_sequence",
            placeholder="e.g., 0.1, 0.2, 0.3",
            help="One value per gap between consecutive isocentres.",
        )
    else:
        st.text_input("Average Gap Time (mins)", key="avg_gap_time")

    submitted = st.form_submit_button(
        "Calculate BED",
        type="primary",
        use_container_width=True,
    )

if submitted:
    with st.spinner("Calculating BED..."):
        submit(st.session_state)

render_ui_state(current_ui_state())
