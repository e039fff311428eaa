"""Gallery components for the ourmemories application."""

import streamlit as st
import structlog

from ...models.photo import Photo
from ...services.media import transform_url
from ..handlers.gallery import delete_photo, format_display_date

logger = structlog.get_logger(__name__)

THUMBNAIL_SIZE = 400
DETAIL_SIZE = 1200

CATEGORY_ICONS = {
    "dates": "💕",
    "daily": "☀️",
    "travel": "✈️",
    "adventure": "🏔️",
}


def render_photo_grid(photos: list[Photo], cols_per_row: int = 3) -> None:
    """
    Render photos in a grid layout.

    Args:
        photos: Photos to display
        cols_per_row: Number of grid columns
    """
    for i in range(0, len(photos), cols_per_row):
        cols = st.columns(cols_per_row)

        for j, col in enumerate(cols):
            photo_index = i + j
            with col:
                if photo_index < len(photos):
                    render_photo_card(photos[photo_index])
                else:
                    st.empty()


def render_photo_list(photos: list[Photo]) -> None:
    """Render photos in a list layout with details."""
    for photo in photos:
        with st.container():
            col1, col2 = st.columns([1, 3])

            with col1:
                st.image(transform_url(photo.url, THUMBNAIL_SIZE, THUMBNAIL_SIZE), width="stretch")

            with col2:
                render_photo_details(photo)
                render_photo_actions(photo)

            st.divider()


def render_category_badge(photo: Photo) -> str:
    icon = CATEGORY_ICONS.get(photo.category, "🏷️")
    return f"{icon} {photo.category_label}"


def render_photo_card(photo: Photo) -> None:
    """Render one photo with its caption and actions."""
    try:
        st.image(
            transform_url(photo.url, THUMBNAIL_SIZE, THUMBNAIL_SIZE),
            caption=photo.title,
            width="stretch",
        )
        st.caption(f"{render_category_badge(photo)} · 📅 {format_display_date(photo.date)}")
        if photo.location:
            st.caption(f"📍 {photo.location}")

        render_photo_actions(photo)

    except Exception as e:
        logger.error("render_photo_card_error", photo_id=photo.id, error=str(e))
        st.error("❌ Could not display this photo")
        st.caption(photo.title)


def render_photo_actions(photo: Photo) -> None:
    """Render the detail and delete buttons of a photo."""
    col1, col2 = st.columns(2)

    with col1:
        if st.button("🔍 Details", key=f"view_{photo.id}", width="stretch"):
            show_photo_dialog(photo)

    with col2:
        if st.button("🗑️ Delete", key=f"delete_{photo.id}", width="stretch"):
            confirm_delete_dialog(photo)


def render_photo_details(photo: Photo) -> None:
    """Render the text details of a photo."""
    st.markdown(f"**{photo.title}**")
    st.markdown(render_category_badge(photo))
    st.write(f"📅 {format_display_date(photo.date)}")

    if photo.location:
        st.write(f"📍 {photo.location}")
    if photo.comment:
        st.markdown(f"> {photo.comment}")


@st.dialog(title="Photo details", width="large")
def show_photo_dialog(photo: Photo) -> None:
    col1, col2 = st.columns([3, 1])
    with col1:
        st.image(transform_url(photo.url, DETAIL_SIZE, DETAIL_SIZE), width="stretch")
    with col2:
        render_photo_details(photo)


@st.dialog(title="Delete photo?")
def confirm_delete_dialog(photo: Photo) -> None:
    st.write(f"**{photo.title}** will be removed from the gallery. This cannot be undone.")

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Cancel", width="stretch"):
            st.rerun()
    with col2:
        if st.button("Delete", type="primary", width="stretch"):
            result = delete_photo(photo.id)
            st.session_state.gallery_message = result
            st.rerun()
