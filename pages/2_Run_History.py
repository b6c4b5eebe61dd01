import json

import streamlit as st

from bed_app.bootstrap import initialize_application
from bed_app.config import PAGE_TITLE, RECORD_RUNS
from bed_app.runs import get_run, runs_frame
from bed_app.theme import apply_theme
from bed_app.ui import init_session_state, render_nav

st.set_page_config(page_title=PAGE_TITLE, page_icon=":material/history:", layout="wide")

initialize_application()
apply_theme()
init_session_state()

st.title("Run History")
st.caption("Audit trail for calculation service requests")
render_nav(current="history")

if not RECORD_RUNS:
    st.info("Run recording is disabled (BED_RECORD_RUNS).")

limit = st.slider("Rows", min_value=10, max_value=500, value=100, step=10)
frame = runs_frame(limit=limit)

if frame.empty:
    st.info("No calculation runs available.")
    st.stop()

st.dataframe(frame, use_container_width=True, hide_index=True)

selected_id = st.number_input("Inspect run id", min_value=1, step=1, value=int(frame.iloc[0]["id"]))
selected = get_run(int(selected_id))
if selected:
    st.markdown("### Selected Run Details")
    st.write(f"Timestamp: `{selected['run_ts']}`")
    st.write(f"Status: `{selected['status']}`")
    if selected.get("error"):
        st.write(f"Error: `{selected['error']}`")
    st.markdown("Request")
    st.code(json.dumps(selected["request"], indent=2))
    st.markdown("Response")
    st.code(json.dumps(selected["result"], indent=2))
else:
    st.warning("Run not found for selected id.")
