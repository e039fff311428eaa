"""Letter page: a short paged letter read one page at a time."""

import streamlit as st
import structlog

from ...errors import handle_error
from ...services.letter import clamp_page, load_letter_pages
from ..components.common import navigate_to, render_error_info

logger = structlog.get_logger(__name__)


def render_letter_page() -> None:
    try:
        pages = load_letter_pages()
    except Exception as e:
        logger.error("letter_page_error", error=str(e))
        render_error_info(handle_error(e, {"page": "letter"}))
        return

    total = len(pages)
    index = clamp_page(st.session_state.get("letter_page", 0), total)
    st.session_state.letter_page = index
    page = pages[index]

    st.markdown(f"### 💌 {page.title}")
    st.markdown(page.content)
    st.caption(" ".join("●" if i == index else "○" for i in range(total)))

    col1, col2, col3 = st.columns(3)
    with col1:
        if st.button("⬅️ Previous", width="stretch", disabled=index == 0):
            st.session_state.letter_page = clamp_page(index - 1, total)
            st.rerun()
    with col2:
        if st.button("🏠 Home", width="stretch"):
            navigate_to("home")
    with col3:
        if st.button("Next ➡️", width="stretch", disabled=index >= total - 1):
            st.session_state.letter_page = clamp_page(index + 1, total)
            st.rerun()
