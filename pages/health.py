"""
Health check page for the Streamlit application.

Shows the status of the photo store, the media service and the environment.
"""

from ourmemories.health import render_health_page

if __name__ == "__main__":
    render_health_page()
