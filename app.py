import streamlit as st

from bed_app.bootstrap import initialize_application
from bed_app.config import PAGE_TITLE
from bed_app.theme import apply_theme
from bed_app.ui import init_session_state

st.set_page_config(page_title=PAGE_TITLE, page_icon=":material/calculate:", layout="centered")

initialize_application()
apply_theme()
init_session_state()

# Public landing route goes directly to calculator.
st.switch_page("pages/1_BED_Calculator.py")
