"""Letter pages shown on the letter screen."""

import json
from dataclasses import dataclass
from pathlib import Path

from ..config import get_letter_file
from ..errors import StorageReadError
from ..logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_LETTER_PAGES = [
    {
        "title": "Dear you",
        "content": (
            "Every photo in this album is a day we spent together. "
            "Add a letter.json file next to photos.json to write your own pages here."
        ),
    },
]


@dataclass
class LetterPage:
    """One page of the letter."""

    title: str
    content: str


def load_letter_pages(file_path: str | Path | None = None) -> list[LetterPage]:
    """
    Load letter pages from a JSON array of {"title", "content"} objects.

    Args:
        file_path: Letter file (defaults to the LETTER_FILE setting, data/letter.json)

    Returns:
        list[LetterPage]: Pages in order; the default page when the file does not exist

    Raises:
        StorageReadError: If the file exists but is not a valid list of pages
    """
    path = Path(file_path) if file_path is not None else get_letter_file()

    if not path.exists():
        logger.debug("letter_file_absent", file_path=str(path))
        return [LetterPage(**page) for page in DEFAULT_LETTER_PAGES]

    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise StorageReadError(
            f"Letter file is not valid UTF-8: {e}",
            code="storage_corrupt",
            details={"file_path": str(path)},
            original_exception=e,
        ) from e
    except OSError as e:
        raise StorageReadError(
            f"Failed to read letter pages: {e}", details={"file_path": str(path)}, original_exception=e
        ) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise StorageReadError(
            f"Letter file is not valid JSON: {e}",
            code="storage_corrupt",
            details={"file_path": str(path)},
            original_exception=e,
        ) from e

    if not isinstance(data, list) or not data or not all(isinstance(page, dict) for page in data):
        raise StorageReadError(
            "Letter file must be a non-empty JSON array of objects",
            code="storage_corrupt",
            details={"file_path": str(path)},
        )

    return [LetterPage(title=str(page.get("title", "")), content=str(page.get("content", ""))) for page in data]


def clamp_page(index: int, total: int) -> int:
    """Clamp a page index to [0, total - 1]."""
    if total <= 0:
        return 0
    return max(0, min(index, total - 1))
