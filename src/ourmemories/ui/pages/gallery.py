"""Gallery page for the ourmemories application."""

import streamlit as st
import structlog

from ...errors import handle_error
from ..components.common import render_empty_state, render_error_info
from ..components.gallery import render_photo_grid, render_photo_list
from ..handlers.gallery import (
    ALL_CATEGORIES,
    CATEGORY_FILTERS,
    count_by_category,
    filter_photos_by_category,
    load_photos,
)

logger = structlog.get_logger(__name__)


def _render_last_action_message() -> None:
    result = st.session_state.pop("gallery_message", None)
    if result is None:
        return
    if result["success"]:
        st.success(result["message"])
    else:
        st.error(result["message"])


def render_gallery_page() -> None:
    """Render the gallery with category filters and delete actions."""
    try:
        _render_last_action_message()

        photos = load_photos()
        counts = count_by_category(photos)

        col1, col2, col3 = st.columns([2, 1, 1])
        with col1:
            st.markdown("### 🖼️ Our Gallery")
        with col2:
            view_mode = st.selectbox("View", ["Grid", "List"], index=0)
        with col3:
            st.metric("Photos", counts[ALL_CATEGORIES])

        selected_category = st.radio(
            "Category",
            options=list(CATEGORY_FILTERS),
            format_func=lambda value: f"{CATEGORY_FILTERS[value]} ({counts.get(value, 0)})",
            horizontal=True,
            key="gallery_category",
        )

        st.divider()

        filtered = filter_photos_by_category(photos, selected_category)

        if not photos:
            render_empty_state(
                title="No photos yet",
                description="Upload the first photo to start the gallery.",
                icon="📷",
                action_text="Upload photos",
                action_page="upload",
            )
        elif not filtered:
            render_empty_state(
                title="Nothing here yet",
                description=f'No photos found in the "{CATEGORY_FILTERS[selected_category]}" category yet.',
                icon="🔍",
            )
        elif view_mode == "Grid":
            render_photo_grid(filtered)
        else:
            render_photo_list(filtered)

    except Exception as e:
        logger.error("gallery_page_error", error=str(e))
        render_error_info(handle_error(e, {"page": "gallery"}))
