"""Shared layout pieces: header, sidebar navigation, footer, empty and error states."""

import streamlit as st
import structlog

from ...errors import ErrorInfo

logger = structlog.get_logger()

# Sidebar label -> page key, in display order
PAGES = {
    "🏠 Home": "home",
    "🖼️ Gallery": "gallery",
    "📤 Upload": "upload",
    "💌 Letter": "letter",
}

ACCENT_COLOR = "#e75480"

_EMPTY_STATE_HTML = """
<div style='text-align: center; padding: 2.5rem 0 1.5rem;'>
    <div style='font-size: 3.5rem;'>{icon}</div>
    <h3 style='color: {accent}; margin: 0.75rem 0 0.5rem;'>{title}</h3>
    <p style='color: #777;'>{description}</p>
</div>
"""

_INFO_CARD_HTML = """
<div style='border-left: 4px solid {accent}; border-radius: 6px; padding: 0.75rem 1rem;
            margin: 0.75rem 0; background-color: #fff5f8;'>
    <strong>{icon} {title}</strong>
    <div style='color: #555; margin-top: 0.25rem;'>{content}</div>
</div>
"""


def navigate_to(page: str) -> None:
    """Switch to another page and rerun the script."""
    logger.debug("navigate", from_page=st.session_state.get("current_page"), to_page=page)
    st.session_state.current_page = page
    st.rerun()


def render_empty_state(
    title: str,
    description: str,
    icon: str = "📭",
    action_text: str | None = None,
    action_page: str | None = None,
) -> None:
    """
    Render a centered placeholder for an empty page.

    Args:
        title: Headline
        description: One-line explanation
        icon: Emoji shown above the headline
        action_text: Label of an optional button
        action_page: Page the button navigates to
    """
    _, center, _ = st.columns([1, 2, 1])
    with center:
        st.markdown(
            _EMPTY_STATE_HTML.format(icon=icon, title=title, description=description, accent=ACCENT_COLOR),
            unsafe_allow_html=True,
        )
        if action_text and action_page and st.button(action_text, width="stretch", type="primary"):
            navigate_to(action_page)


def render_error_message(error_type: str, message: str, details: str | None = None) -> None:
    st.error(f"**{error_type}:** {message}")
    if details:
        with st.expander("🔍 Error details"):
            st.code(details)


def render_error_info(error_info: ErrorInfo) -> None:
    """Show an ErrorInfo from handle_error: the user message, with the raw message folded away."""
    error_type = error_info.category.value.replace("_", " ").title()
    render_error_message(error_type, error_info.user_message, error_info.message)


def render_info_card(title: str, content: str, icon: str = "ℹ️") -> None:
    st.markdown(
        _INFO_CARD_HTML.format(icon=icon, title=title, content=content, accent=ACCENT_COLOR),
        unsafe_allow_html=True,
    )


def format_file_size(size_bytes: int) -> str:
    """Human-readable size, e.g. "1.5 MB"."""
    size = float(size_bytes)
    for unit in ("B", "KB"):
        if size < 1024:
            return f"{size_bytes} B" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} MB"


def render_header() -> None:
    st.markdown("# 💕 Our Memories")
    st.caption("Little moments, kept together.")
    st.divider()


def render_sidebar() -> None:
    """Sidebar with one button per page; the current page is highlighted."""
    current_page = st.session_state.current_page

    with st.sidebar:
        st.markdown("### 💕 Our Memories")
        for label, page_key in PAGES.items():
            is_current = page_key == current_page
            if st.button(
                label,
                key=f"nav_{page_key}",
                width="stretch",
                type="primary" if is_current else "secondary",
            ) and not is_current:
                navigate_to(page_key)


def render_footer() -> None:
    st.divider()
    st.caption("Made with 💕 · Our Memories")
