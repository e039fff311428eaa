"""Home page for the ourmemories application: a slideshow of randomly picked photos."""

import time

import streamlit as st
import structlog

from ...config import get_slideshow_interval
from ...models.photo import Photo
from ...services.media import transform_url
from ...services.slideshow import Slideshow
from ..components.common import navigate_to, render_empty_state
from ..handlers.gallery import format_display_date, load_slideshow_photos

logger = structlog.get_logger(__name__)

SLIDE_WIDTH = 388
SLIDE_HEIGHT = 485


def _load_slideshow() -> None:
    photos = load_slideshow_photos()
    st.session_state.slideshow_photos = photos
    st.session_state.slideshow = Slideshow(len(photos), interval=get_slideshow_interval(), now=time.monotonic())
    logger.info("slideshow_loaded", size=len(photos))


def _initialize_session_state() -> None:
    if "slideshow" not in st.session_state or "slideshow_photos" not in st.session_state:
        _load_slideshow()


def _render_slide(photo: Photo) -> None:
    st.image(transform_url(photo.url, SLIDE_WIDTH, SLIDE_HEIGHT), width="stretch")
    st.markdown(f"#### {photo.title}")

    details = [f"📅 {format_display_date(photo.date)}"]
    if photo.location:
        details.append(f"📍 {photo.location}")
    details.append(photo.category_label)
    st.caption(" · ".join(details))

    if photo.comment:
        st.markdown(f"> {photo.comment}")


def _step(slideshow: Slideshow, forward: bool) -> None:
    # Runs as a button callback, before the fragment redraws the slide
    if forward:
        slideshow.next(time.monotonic())
    else:
        slideshow.previous(time.monotonic())


def _render_controls(slideshow: Slideshow) -> None:
    col1, col2, col3, col4 = st.columns(4)

    with col1:
        st.button("⬅️", key="slide_prev", width="stretch", on_click=_step, args=(slideshow, False))
    with col2:
        label = "⏸️ Pause" if slideshow.playing else "▶️ Play"
        if st.button(label, key="slide_toggle", width="stretch"):
            slideshow.toggle(time.monotonic())
            st.rerun()
    with col3:
        st.button("➡️", key="slide_next", width="stretch", on_click=_step, args=(slideshow, True))
    with col4:
        if st.button("🔀 Shuffle", key="slide_shuffle", width="stretch"):
            _load_slideshow()
            st.rerun()


def render_home_page() -> None:
    """Render the home page slideshow."""
    _initialize_session_state()

    photos: list[Photo] = st.session_state.slideshow_photos
    slideshow: Slideshow = st.session_state.slideshow

    if not photos:
        render_empty_state(
            title="No memories yet",
            description="Upload photos and they will show up here as a slideshow.",
            icon="💕",
            action_text="Upload photos",
            action_page="upload",
        )
        return

    run_every = slideshow.interval if slideshow.playing and len(photos) > 1 else None

    @st.fragment(run_every=run_every)
    def slideshow_fragment() -> None:
        slideshow.tick(time.monotonic())
        _render_slide(photos[slideshow.current])
        st.caption(f"{slideshow.current + 1} / {len(photos)}")
        _render_controls(slideshow)

    slideshow_fragment()

    st.divider()
    col1, col2 = st.columns(2)
    with col1:
        if st.button("🖼️ Open the gallery", width="stretch", type="primary"):
            navigate_to("gallery")
    with col2:
        if st.button("💌 Read the letter", width="stretch"):
            navigate_to("letter")
