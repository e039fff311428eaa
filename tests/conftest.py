"""
Pytest configuration and fixtures for ourmemories tests.
"""

import base64
import json
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from ourmemories.config import get_config
from ourmemories.services.media import reset_media_service
from ourmemories.services.metadata import reset_photo_stores

# 1x1 pixel PNG
SAMPLE_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8z8BQDwAEhQGAhKmMIQAAAABJRU5ErkJggg=="
)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def photos_file(tmp_path: Path) -> Path:
    """Path of the photo collection file used by the configured store."""
    return tmp_path / "data" / "photos.json"


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch: pytest.MonkeyPatch, photos_file: Path) -> Generator[None, None, None]:
    """Point the app at a temporary data directory and fake Cloudinary credentials."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("PHOTOS_FILE", str(photos_file))
    monkeypatch.setenv("LETTER_FILE", str(photos_file.parent / "letter.json"))
    monkeypatch.setenv("CLOUDINARY_CLOUD_NAME", "test-cloud")
    monkeypatch.setenv("CLOUDINARY_API_KEY", "test-key")
    monkeypatch.setenv("CLOUDINARY_API_SECRET", "test-secret")
    monkeypatch.delenv("MEDIA_FOLDER", raising=False)
    monkeypatch.delenv("SLIDESHOW_INTERVAL", raising=False)

    get_config().clear_cache()
    reset_photo_stores()
    reset_media_service()

    yield

    get_config().clear_cache()
    reset_photo_stores()
    reset_media_service()


@pytest.fixture
def sample_image_data() -> bytes:
    """Provide sample image data for testing."""
    return SAMPLE_PNG


@pytest.fixture
def write_records(photos_file: Path):
    """Write raw records to the collection file."""

    def _write(records) -> Path:
        photos_file.parent.mkdir(parents=True, exist_ok=True)
        photos_file.write_text(json.dumps(records), encoding="utf-8")
        return photos_file

    return _write


@pytest.fixture
def read_records(photos_file: Path):
    """Read the raw records from the collection file."""

    def _read() -> list:
        return json.loads(photos_file.read_text(encoding="utf-8"))

    return _read
