from __future__ import annotations

import glob
import logging
import os
import sys
from pathlib import Path

import streamlit as st

from nysc_extract.settings import get_settings


def debug_panel():
    st.sidebar.markdown("---")
    st.sidebar.subheader("🔧 Debug")
    dbg = st.sidebar.checkbox("Enable debug mode")
    if not dbg:
        return

    settings = get_settings()
    st.sidebar.write("**Python**:", sys.version)
    st.sidebar.write("**Interpreter**:", sys.executable)
    st.sidebar.write("**CWD**:", os.getcwd())

    # Show presence of .env without leaking secrets
    env_paths = [Path(".env"), *[Path(p) for p in glob.glob("**/.env", recursive=False)]]
    env_exists = [str(p.resolve()) for p in env_paths if p.exists()]
    st.sidebar.write("**.env found at**:", env_exists or "(none)")

    key = settings.gemini_api_key
    st.sidebar.write("**GEMINI_API_KEY set**:", bool(key), "| length:", len(key or ""))
    st.sidebar.write("**Provider**:", settings.default_provider)
    st.sidebar.write("**Model**:", settings.gemini_model)
    st.sidebar.write("**Log level**:", logging.getLevelName(logging.getLogger().level))

    state = st.session_state.get("app_state")
    if state is not None:
        st.sidebar.write("**Records in memory**:", len(state.data))
        st.sidebar.write("**Processing step**:", state.processing_step)

    if st.sidebar.button("🔄 Rerun"):
        st.rerun()
