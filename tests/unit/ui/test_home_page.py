"""Tests for the home page slideshow."""

import pytest
from streamlit.testing.v1 import AppTest


def home_app():
    from ourmemories.ui.pages.home import render_home_page

    render_home_page()


def slide_titles(at: AppTest) -> list[str]:
    return [m.value for m in at.markdown if m.value.startswith("#### ")]


@pytest.fixture
def paused_home(write_records) -> AppTest:
    write_records(
        [
            {"id": f"p{i}", "title": f"T{i}", "url": f"https://res.cloudinary.com/test-cloud/image/upload/p{i}.jpg"}
            for i in range(3)
        ]
    )
    at = AppTest.from_function(home_app)
    at.run()
    assert not at.exception
    at.button(key="slide_toggle").click().run()
    assert at.session_state["slideshow"].playing is False
    return at


class TestSlideshowControls:
    """Test cases for the prev/next buttons."""

    def test_next_shows_the_new_slide(self, paused_home):
        photos = paused_home.session_state["slideshow_photos"]

        paused_home.button(key="slide_next").click().run()

        assert paused_home.session_state["slideshow"].current == 1
        assert slide_titles(paused_home) == [f"#### {photos[1].title}"]

    def test_previous_wraps_to_last_slide(self, paused_home):
        photos = paused_home.session_state["slideshow_photos"]

        paused_home.button(key="slide_prev").click().run()

        assert paused_home.session_state["slideshow"].current == 2
        assert slide_titles(paused_home) == [f"#### {photos[2].title}"]
