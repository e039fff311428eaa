"""Tests for letter pages."""

import json

import pytest

from ourmemories.errors import StorageReadError
from ourmemories.services.letter import DEFAULT_LETTER_PAGES, LetterPage, clamp_page, load_letter_pages


class TestLoadLetterPages:
    """Test cases for load_letter_pages."""

    def test_default_pages_when_file_absent(self, tmp_path):
        pages = load_letter_pages(tmp_path / "letter.json")

        assert pages == [LetterPage(**page) for page in DEFAULT_LETTER_PAGES]

    def test_default_path_from_config(self, photos_file):
        letter_file = photos_file.parent / "letter.json"
        letter_file.parent.mkdir(parents=True)
        letter_file.write_text(json.dumps([{"title": "One", "content": "Hello"}]), encoding="utf-8")

        assert load_letter_pages() == [LetterPage(title="One", content="Hello")]

    def test_pages_in_order(self, tmp_path):
        letter_file = tmp_path / "letter.json"
        letter_file.write_text(
            json.dumps([{"title": "One", "content": "a"}, {"title": "Two"}, {"content": "c"}]),
            encoding="utf-8",
        )

        pages = load_letter_pages(letter_file)

        assert [page.title for page in pages] == ["One", "Two", ""]
        assert [page.content for page in pages] == ["a", "", "c"]

    @pytest.mark.parametrize("text", ["not json", "[]", '{"title": "x"}', '["a", "b"]'])
    def test_invalid_file(self, tmp_path, text):
        letter_file = tmp_path / "letter.json"
        letter_file.write_text(text, encoding="utf-8")

        with pytest.raises(StorageReadError):
            load_letter_pages(letter_file)

    def test_invalid_utf8_file(self, tmp_path):
        letter_file = tmp_path / "letter.json"
        letter_file.write_bytes(b'[{"title": "\xff\xfe", "content": "a"}]')

        with pytest.raises(StorageReadError) as exc_info:
            load_letter_pages(letter_file)
        assert exc_info.value.code == "storage_corrupt"


class TestClampPage:
    """Test cases for clamp_page."""

    @pytest.mark.parametrize(
        "index,total,expected",
        [(0, 3, 0), (2, 3, 2), (3, 3, 2), (-1, 3, 0), (5, 0, 0), (0, 1, 0)],
    )
    def test_clamp_page(self, index, total, expected):
        assert clamp_page(index, total) == expected
