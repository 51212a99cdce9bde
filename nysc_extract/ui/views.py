from __future__ import annotations

import logging
from time import perf_counter
from typing import List

import pandas as pd
import streamlit as st

from nysc_extract.config import UPLOAD_TYPES
from nysc_extract.models import CorpsMember, FileData
from nysc_extract.services import export_service, roster
from nysc_extract.settings import get_settings
from nysc_extract.ui.state import app_state, run_extraction, set_mode
from nysc_extract.utils.pdf_preview import preview_caption, preview_file
from nysc_extract.utils.timing import fmt_duration
from nysc_extract.utils.uploads import format_bytes, read_uploaded_files, total_size_bytes

logger = logging.getLogger(__name__)

MODE_TITLES = {
    "plain": "Plain Organizer",
    "official": "Official Clone",
    "grouped": "PPA Directory",
}


# ---------------------------
# Landing
# ---------------------------
def landing_page():
    st.title("NYSC Extract")
    st.caption("Official document replication & automated data organization powered by Gemini Flash.")

    c1, c2, c3 = st.columns(3, gap="large")
    with c1:
        st.subheader("Plain Data Organizer")
        st.write("No headers or logo. Focused on M/F counts, phone numbers, and PPA search for internal records.")
        st.button("Start Organizing", on_click=set_mode, args=("plain",), use_container_width=True)
    with c2:
        st.subheader("Official Clone Mode")
        st.write("Monthly Clearance sheets with circular logo, green headers, and blue separators.")
        st.button("Launch Template", on_click=set_mode, args=("official",), type="primary", use_container_width=True)
    with c3:
        st.subheader("PPA Directory")
        st.write("Group the extracted list by Place of Primary Assignment with per-PPA counts.")
        st.button("Open Directory", on_click=set_mode, args=("grouped",), use_container_width=True)


# ---------------------------
# Workspace
# ---------------------------
def workspace(mode: str):
    state = app_state()
    head_l, head_r = st.columns([4, 1])
    with head_l:
        st.button("← Back", on_click=set_mode, args=("landing",))
        st.title(MODE_TITLES[mode])
        st.caption("Personnel Management")

    if state.error:
        st.error(f"**Extraction Failure**\n\n{state.error}")

    controls, uploads = st.columns([3, 1], gap="large")
    with controls:
        _filters(mode)
    with uploads:
        _upload_panel()

    visible = roster.filter_members(state.data, st.session_state.search_term, st.session_state.ppa_search)
    if mode == "grouped":
        visible = _group_picker(visible)

    with head_r:
        if state.data:
            _export_buttons(mode, visible)

    _stats_strip(mode, visible)

    if not state.data:
        st.info(
            "**Awaiting Scans**\n\nUpload your clearance lists or click **Add Row** "
            "to manually write details in the space provided."
        )
        return

    if mode == "grouped":
        _group_directory(visible)
    _member_table(mode, visible)


def _filters(mode: str):
    state = app_state()
    s1, s2 = st.columns([2, 1])
    with s1:
        st.text_input("Search", key="search_term", placeholder="Search by name, state code, or details...")
    with s2:
        st.text_input("PPA", key="ppa_search", placeholder="Filter PPA...")

    if mode == "official":
        m1, m2, m3, m4 = st.columns(4)
        meta = state.metadata
        v = st.session_state.uploader_key  # new extraction, fresh fields
        meta.lga = m1.text_input("Local Govt Area", value=meta.lga or "", key=f"meta_lga_{v}")
        meta.batch_info = m2.text_input("Batch Info", value=meta.batch_info or "", key=f"meta_batch_{v}")
        meta.title = m3.text_input("Document Title", value=meta.title or "", key=f"meta_title_{v}")
        meta.date_printed = m4.text_input("Date Printed", value=meta.date_printed or "", key=f"meta_date_{v}")


def _upload_panel():
    state = app_state()
    settings = get_settings()
    uploaded = st.file_uploader(
        "Upload Documents",
        type=UPLOAD_TYPES,
        accept_multiple_files=True,
        key=f"uploader_{st.session_state.uploader_key}",
    )
    files = read_uploaded_files(uploaded)
    st.session_state.uploaded_files = files

    if files:
        size = total_size_bytes(files)
        st.caption(f"{len(files)} Ready • {format_bytes(size)}")
        if size > settings.max_upload_mb * 1024 * 1024:
            st.warning(f"Uploads exceed {settings.max_upload_mb} MB; the AI service may reject them.")
        with st.expander("Preview"):
            for f in files:
                _preview(f)

    start = st.button(
        "Start Extraction",
        type="primary",
        disabled=state.is_processing or not files,
        use_container_width=True,
    )
    if start:
        with st.status("Analyzing Documents…", expanded=False) as status:
            t0 = perf_counter()
            result = run_extraction(files, status=status)
            secs = perf_counter() - t0
            if result is None:
                status.update(label="Extraction failed", state="error")
            else:
                status.update(label=f"Extracted {len(result.members)} record(s) in {fmt_duration(secs)}", state="complete")
        st.rerun()


def _preview(f: FileData):
    if f.is_text:
        st.text(f"{f.name}\n{f.data[:500]}")
        return
    try:
        png = preview_file(f)
        if png is not None:
            st.image(png, caption=preview_caption(f), use_container_width=True)
    except Exception:
        # unreadable uploads get a caption instead of an image
        logger.warning("Preview failed for %s", f.name, exc_info=True)
        st.caption(f"{f.name}: preview unavailable")


def _stats_strip(mode: str, visible: List[CorpsMember]):
    stats = roster.compute_stats(visible)
    cols = st.columns([1, 1, 1, 1, 2] if mode == "official" else [1, 1, 1, 3])
    cols[0].metric("Total Count", stats["total"])
    cols[1].metric("Males", stats["males"])
    cols[2].metric("Females", stats["females"])
    if mode == "official":
        with cols[3]:
            st.toggle("Phone (GSM)", key="show_gsm")
            st.toggle("PPA", key="show_ppa")
    with cols[-1]:
        if st.button("➕ Add Row (Write Details)"):
            state = app_state()
            state.data = roster.add_member(state.data)
            st.rerun()


def _group_picker(visible: List[CorpsMember]) -> List[CorpsMember]:
    state = app_state()
    groups = roster.group_by_ppa(visible)
    options = ["All PPAs", *sorted(groups)]
    current = state.selected_group if state.selected_group in groups else "All PPAs"
    picked = st.selectbox("PPA group", options, index=options.index(current))
    state.selected_group = None if picked == "All PPAs" else picked
    return groups[picked] if state.selected_group else visible


def _group_directory(visible: List[CorpsMember]):
    summaries = roster.group_summaries(visible)
    st.dataframe(
        pd.DataFrame(summaries, columns=["ppa", "total", "males", "females"]),
        hide_index=True,
        use_container_width=True,
    )


def _member_table(mode: str, visible: List[CorpsMember]):
    state = app_state()
    show_ppa = mode != "official" or st.session_state.show_ppa
    show_gsm = mode != "official" or st.session_state.show_gsm

    df = pd.DataFrame(roster.to_rows(visible), columns=roster.TABLE_FIELDS).astype({"sn": "int64"})
    edited = st.data_editor(
        df,
        hide_index=True,
        num_rows="dynamic",
        use_container_width=True,
        key=f"editor_{mode}_{st.session_state.editor_version}",
        column_order=[
            c for c in roster.TABLE_FIELDS
            if c != "id"
            and (show_ppa or c != "company_name")
            and (show_gsm or c != "phone")
            and (mode == "official" or c not in ("attendance_type", "day"))
        ],
        column_config={
            "sn": st.column_config.NumberColumn("SN", step=1),
            "state_code": st.column_config.TextColumn("State Code"),
            "surname": st.column_config.TextColumn("Surname"),
            "first_name": st.column_config.TextColumn("Firstname"),
            "middle_name": st.column_config.TextColumn("Middle"),
            "gender": st.column_config.SelectboxColumn("Sex", options=["M", "F"], required=True),
            "company_name": st.column_config.TextColumn("PPA / Organization"),
            "phone": st.column_config.TextColumn("Phone (GSM)"),
            "attendance_type": st.column_config.TextColumn("Type"),
            "day": st.column_config.TextColumn("Day"),
        },
    )

    rows = edited.to_dict("records")
    merged = roster.merge_edits(state.data, [m.id for m in visible], rows)
    if merged != state.data:
        state.data = merged
        # the editor replays its stored deltas on every run; start it fresh
        st.session_state.editor_version += 1
        st.rerun()


def _export_buttons(mode: str, visible: List[CorpsMember]):
    state = app_state()
    meta = state.metadata
    if mode == "official":
        pdf = export_service.build_official_pdf(
            visible, meta, show_phone=st.session_state.show_gsm, show_ppa=st.session_state.show_ppa
        )
        csv_text = export_service.to_csv(
            visible,
            include_phone=st.session_state.show_gsm,
            include_ppa=st.session_state.show_ppa,
            include_attendance=True,
        )
    elif mode == "grouped":
        pdf = export_service.build_grouped_pdf(visible, meta)
        csv_text = export_service.to_csv(visible)
    else:
        pdf = export_service.build_plain_pdf(visible, meta)
        csv_text = export_service.to_csv(visible)

    st.download_button(
        "🖨️ Export PDF",
        data=pdf,
        file_name=export_service.export_filename(mode, "pdf"),
        mime="application/pdf",
        type="primary",
        use_container_width=True,
    )
    st.download_button(
        "Export CSV",
        data=csv_text.encode("utf-8"),
        file_name=export_service.export_filename(mode, "csv"),
        mime="text/csv",
        use_container_width=True,
    )


def footer():
    st.divider()
    st.caption("NYSC Data Integrity Engine • Version 5.1.0")
