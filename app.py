from __future__ import annotations

import streamlit as st

from nysc_extract.logging import configure_logging
from nysc_extract.settings import get_settings
from nysc_extract.ui.debug import debug_panel
from nysc_extract.ui.state import init_session_state
from nysc_extract.ui.views import footer, landing_page, workspace

configure_logging()
settings = get_settings()

st.set_page_config(page_title=settings.app_title, page_icon="✅", layout="wide")
init_session_state()

st.sidebar.markdown("### Settings")
st.sidebar.markdown("- Uses `GEMINI_API_KEY` (or `API_KEY`) from env/.env.")
st.sidebar.markdown(f"- Model: `{settings.gemini_model}`")
st.sidebar.markdown("- Records live in this browser session only.")

debug_panel()

if st.session_state.mode == "landing":
    landing_page()
else:
    workspace(st.session_state.mode)
footer()
