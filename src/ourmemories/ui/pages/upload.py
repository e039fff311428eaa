"""Upload page for the ourmemories application."""

import time
from datetime import date
from typing import Any

import streamlit as st
import structlog

from ...models.photo import CATEGORY_LABELS
from ..components.common import format_file_size, render_empty_state, render_info_card
from ..handlers.upload import (
    get_max_upload_size_mb,
    process_batch_upload,
    reset_after_batch,
    validate_uploaded_files,
)

logger = structlog.get_logger()

UPLOAD_SESSION_DEFAULTS: dict[str, Any] = {
    "upload_signature": None,
    "valid_files": [],
    "validation_errors": [],
    "last_upload_result": None,
}


def _initialize_session_state() -> None:
    for key, value in UPLOAD_SESSION_DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = list(value) if isinstance(value, list) else value
    # Not cleared with the rest; the uploader key must never repeat within a session
    st.session_state.setdefault("uploader_generation", 0)


def clear_upload_session_state() -> None:
    for key in UPLOAD_SESSION_DEFAULTS:
        st.session_state.pop(key, None)


def _file_signature(uploaded_files: list[Any]) -> tuple:
    return tuple((f.name, f.size) for f in uploaded_files)


def _render_upload_header() -> float:
    st.markdown("### 📤 Add new memories")

    max_size_mb = get_max_upload_size_mb()
    render_info_card(
        "Accepted files",
        f"Any image format up to {max_size_mb:.0f} MB per photo. Large photos are resized on upload.",
        "📋",
    )
    return max_size_mb


def _validate_selection(uploaded_files: list[Any]) -> None:
    signature = _file_signature(uploaded_files)
    if st.session_state.upload_signature == signature:
        return

    with st.spinner("Checking files..."):
        valid_files, errors = validate_uploaded_files(uploaded_files)

    st.session_state.valid_files = valid_files
    st.session_state.validation_errors = errors
    st.session_state.upload_signature = signature


def _render_validation_errors() -> None:
    for error in st.session_state.validation_errors:
        st.error(f"❌ {error['filename']}: {error['error']}")


def _render_file_form(index: int, file_info: dict[str, Any]) -> None:
    """Render the editable fields of one queued file."""
    with st.expander(f"📷 {file_info['filename']} ({format_file_size(file_info['size'])})", expanded=True):
        image_col, form_col = st.columns([1, 2])

        with image_col:
            st.image(file_info["data"], width="stretch")

        with form_col:
            file_info["title"] = st.text_input("Title *", value=file_info["title"], key=f"upload_title_{index}")
            picked = st.date_input("Date", value=date.today(), key=f"upload_date_{index}")
            file_info["date"] = picked.isoformat() if picked else ""
            file_info["location"] = st.text_input(
                "Location", value=file_info["location"], key=f"upload_location_{index}"
            )
            file_info["category"] = st.selectbox(
                "Category",
                options=list(CATEGORY_LABELS),
                format_func=lambda value: CATEGORY_LABELS[value],
                index=list(CATEGORY_LABELS).index(file_info["category"]),
                key=f"upload_category_{index}",
            )
            file_info["comment"] = st.text_area("Comment", value=file_info["comment"], key=f"upload_comment_{index}")


def _render_upload_results(batch_result: dict[str, Any], processing_time: float | None = None) -> None:
    if batch_result["success"]:
        st.success(f"✅ {batch_result['successful_uploads']} photo(s) added to the gallery")
    elif batch_result["successful_uploads"]:
        st.warning(f"⚠️ {batch_result['message']}")
    else:
        st.error(f"❌ {batch_result['message']}")

    if processing_time is not None:
        st.caption(f"Finished in {processing_time:.1f}s")

    for result in batch_result["results"]:
        if not result["success"]:
            st.error(f"{result['message']}: {result['error']}")


def _run_upload() -> None:
    """Upload the queued files with a progress bar."""
    started = time.perf_counter()
    progress_bar = st.progress(0.0)
    status = st.empty()

    def progress_callback(done: int, total: int, message: str) -> None:
        progress_bar.progress(done / total if total else 1.0)
        status.caption(message)

    batch_result = process_batch_upload(st.session_state.valid_files, progress_callback)
    processing_time = time.perf_counter() - started

    progress_bar.empty()
    status.empty()

    logger.info(
        "upload_page_batch_finished",
        successful=batch_result["successful_uploads"],
        failed=batch_result["failed_uploads"],
        duration=processing_time,
    )

    batch_result["duration"] = processing_time
    reset_after_batch(st.session_state, batch_result)
    st.rerun()


def _render_upload_button() -> None:
    valid_files = st.session_state.valid_files
    if not valid_files:
        return

    st.divider()
    missing_titles = [f["filename"] for f in valid_files if not f["title"].strip()]
    if missing_titles:
        st.warning(f"⚠️ A title is required for: {', '.join(missing_titles)}")

    _, center, _ = st.columns([1, 2, 1])
    with center:
        if st.button(
            f"🚀 Upload {len(valid_files)} photo(s)",
            width="stretch",
            type="primary",
            disabled=bool(missing_titles),
        ):
            _run_upload()


def _render_idle_state() -> None:
    if st.session_state.last_upload_result:
        st.divider()
        st.markdown("### 📋 Last upload")
        result = st.session_state.last_upload_result
        _render_upload_results(result, result.get("duration"))

        if st.button("🗑️ Clear results", width="stretch"):
            clear_upload_session_state()
            st.rerun()
    else:
        render_empty_state(
            title="No photos selected",
            description="Pick one or more photos to add them to the gallery.",
            icon="📁",
        )


def render_upload_page() -> None:
    """Render the upload page with file selection, per-photo details and batch upload."""
    _initialize_session_state()

    max_size_mb = _render_upload_header()

    uploaded_files = st.file_uploader(
        "Drag and drop photos here, or click to browse",
        type=["jpg", "jpeg", "png", "gif", "webp", "heic", "heif"],
        accept_multiple_files=True,
        help=f"Maximum size: {max_size_mb:.0f} MB per file",
        key=f"photo_uploader_{st.session_state.uploader_generation}",
    )

    if uploaded_files:
        _validate_selection(uploaded_files)
        _render_validation_errors()
        for index, file_info in enumerate(st.session_state.valid_files):
            _render_file_form(index, file_info)
        _render_upload_button()
        return

    # Selection cleared in the uploader
    if st.session_state.upload_signature is not None:
        st.session_state.upload_signature = None
        st.session_state.valid_files = []
        st.session_state.validation_errors = []
    _render_idle_state()
