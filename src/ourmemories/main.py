"""
Main Streamlit application for ourmemories.

This is the entry point for the photo gallery and slideshow web application.
"""

import streamlit as st

from ourmemories.config import get_debug_mode
from ourmemories.errors import handle_error
from ourmemories.logging_config import configure_structured_logging, get_logger
from ourmemories.ui.components.common import render_error_info, render_footer, render_header, render_sidebar
from ourmemories.ui.pages.gallery import render_gallery_page
from ourmemories.ui.pages.home import render_home_page
from ourmemories.ui.pages.letter import render_letter_page
from ourmemories.ui.pages.upload import clear_upload_session_state, render_upload_page

configure_structured_logging()
logger = get_logger(__name__)

PAGE_RENDERERS = {
    "home": render_home_page,
    "gallery": render_gallery_page,
    "upload": render_upload_page,
    "letter": render_letter_page,
}

SESSION_DEFAULTS = {"current_page": "home", "previous_page": "home"}

ABOUT_TEXT = "Our Memories - a small gallery of the days we shared"


def initialize_session_state() -> None:
    for key, value in SESSION_DEFAULTS.items():
        st.session_state.setdefault(key, value)


def render_main_content() -> None:
    """Dispatch to the renderer of ``current_page``."""
    page = st.session_state.current_page

    # Leaving the upload page drops its queued files
    if st.session_state.previous_page == "upload" and page != "upload":
        clear_upload_session_state()
    st.session_state.previous_page = page

    renderer = PAGE_RENDERERS.get(page)
    if renderer is not None:
        renderer()
        return

    logger.warning("unknown_page_requested", page=page)
    st.warning(f"Page '{page}' was not found.")
    if st.button("🏠 Back to home", width="stretch", type="primary"):
        st.session_state.current_page = "home"
        st.rerun()


def _render_debug_panel() -> None:
    with st.expander("🐞 Debug"):
        st.json({key: repr(value) for key, value in st.session_state.items()})


def main() -> None:
    st.set_page_config(
        page_title="Our Memories",
        page_icon="💕",
        layout="wide",
        menu_items={"About": ABOUT_TEXT},
    )
    initialize_session_state()
    logger.debug("page_render_started", page=st.session_state.current_page)

    try:
        render_header()
        render_sidebar()
        render_main_content()
        render_footer()
    except Exception as e:
        logger.error("page_render_failed", page=st.session_state.current_page, error=str(e))
        render_error_info(handle_error(e, {"page": st.session_state.current_page}))
        if st.button("🔄 Reload", type="primary"):
            st.rerun()

    if get_debug_mode():
        _render_debug_panel()


if __name__ == "__main__":
    main()
