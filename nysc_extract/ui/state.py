from __future__ import annotations

import logging
from typing import List

import streamlit as st

from nysc_extract.errors import describe_extraction_error
from nysc_extract.models import AppState, ExtractionResponse, FileData
from nysc_extract.services.extraction_service import extract_corps_data

logger = logging.getLogger(__name__)

MODES = ("landing", "plain", "official", "grouped")


def init_session_state() -> None:
    """Seed session_state on first run."""
    defaults = {
        "mode": "landing",
        "app_state": AppState(),
        "uploaded_files": [],
        "search_term": "",
        "ppa_search": "",
        "show_gsm": True,
        "show_ppa": True,
        "uploader_key": 0,
        "editor_version": 0,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def app_state() -> AppState:
    return st.session_state.app_state


def set_mode(mode: str) -> None:
    if mode not in MODES:
        raise ValueError(f"Unknown mode: {mode}")
    st.session_state.mode = mode


def run_extraction(files: List[FileData], status=None) -> ExtractionResponse | None:
    """Run one extraction and fold the result (or error) into AppState."""
    state = app_state()
    if not files:
        return None

    state.is_processing = True
    state.error = None

    def on_step(step: str) -> None:
        state.processing_step = step
        if status is not None:
            status.update(label=f"{step.capitalize()}…")

    try:
        result = extract_corps_data(files, on_step=on_step)
    except Exception as e:
        state.error = describe_extraction_error(e)
        logger.warning("Extraction error shown to user: %s", state.error)
        return None
    finally:
        state.is_processing = False
        state.processing_step = "idle"

    state.data = result.members
    state.metadata = state.metadata.merged(result.metadata)
    state.selected_group = None
    # clear the uploader so the same files are not sent twice
    st.session_state.uploaded_files = []
    st.session_state.uploader_key += 1
    return result
