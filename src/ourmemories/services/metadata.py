"""
Metadata service for managing photo records in a JSON collection file.

The whole collection lives in one JSON array on disk. Every mutation reads
the full collection, changes it in memory and writes the full collection
back, so it is only suitable for small collections.

Read behaviour:
- A missing file is an empty collection.
- A file that exists but cannot be read or parsed raises StorageReadError
  from load_records(). list_photos() logs that condition and returns an
  empty list; mutations let it propagate so a corrupt file is never
  overwritten.

Concurrency:
Mutations of one PhotoStore are serialized by a lock. Use
get_photo_store() so that every caller in the process shares the same
instance per file. Separate processes writing the same file can still lose
updates.

Usage Examples:
    store = get_photo_store()
    photo = store.add_photo(title="Sunset", url="https://res.cloudinary.com/.../sunset.jpg")
    photos = store.list_photos()
    store.remove_photo(photo.id)
"""

import json
import os
import tempfile
import threading
import time
from pathlib import Path
from typing import Any

from ..config import get_photos_file
from ..errors import NotFoundError, StorageReadError, StorageWriteError, ValidationError
from ..logging_config import get_logger, log_action, log_performance
from ..models.photo import Photo, PhotoDraft, generate_photo_id, sort_newest_first

logger = get_logger(__name__)


class PhotoStore:
    """
    Store for photo records backed by a single JSON file.

    Attributes:
        file_path: Path of the JSON collection file
    """

    def __init__(self, file_path: str | Path | None = None):
        """
        Initialize the store.

        Args:
            file_path: Collection file (defaults to the PHOTOS_FILE setting, data/photos.json)
        """
        self.file_path = Path(file_path) if file_path is not None else get_photos_file()
        self._lock = threading.Lock()

        logger.info("photo_store_initialized", file_path=str(self.file_path))

    def _ensure_data_directory(self) -> None:
        self.file_path.parent.mkdir(parents=True, exist_ok=True)

    def load_records(self) -> list[dict[str, Any]]:
        """
        Read the raw records from disk.

        Returns:
            list: Stored records in storage order (empty if the file does not exist)

        Raises:
            StorageReadError: If the file exists but cannot be read or is not a JSON array of objects
        """
        if not self.file_path.exists():
            logger.debug("photo_store_file_absent", file_path=str(self.file_path))
            return []

        try:
            raw = self.file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise StorageReadError(
                f"Photo collection is not valid UTF-8: {e}",
                code="storage_corrupt",
                details={"file_path": str(self.file_path)},
                original_exception=e,
            ) from e
        except OSError as e:
            raise StorageReadError(
                f"Failed to read photo collection: {e}",
                details={"file_path": str(self.file_path)},
                original_exception=e,
            ) from e

        if not raw.strip():
            return []

        try:
            records = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageReadError(
                f"Photo collection is not valid JSON: {e}",
                code="storage_corrupt",
                details={"file_path": str(self.file_path), "line": e.lineno, "column": e.colno},
                original_exception=e,
            ) from e

        if not isinstance(records, list) or not all(isinstance(record, dict) for record in records):
            raise StorageReadError(
                "Photo collection must be a JSON array of objects",
                code="storage_corrupt",
                details={"file_path": str(self.file_path)},
            )

        return records

    def _write_records(self, records: list[dict[str, Any]]) -> None:
        """
        Replace the collection file with the given records.

        Raises:
            StorageWriteError: If the file cannot be written
        """
        try:
            self._ensure_data_directory()
            fd, temp_path = tempfile.mkstemp(
                prefix=f".{self.file_path.name}.", suffix=".tmp", dir=str(self.file_path.parent)
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(records, f, indent=2, ensure_ascii=False)
                os.replace(temp_path, self.file_path)
            except BaseException:
                Path(temp_path).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageWriteError(
                f"Failed to write photo collection: {e}",
                details={"file_path": str(self.file_path), "record_count": len(records)},
                original_exception=e,
            ) from e

    def list_photos(self) -> list[Photo]:
        """
        Get all photos, newest first.

        Ordered by uploadedAt, falling back to date. Never raises on read
        problems: an absent or unreadable file yields an empty list.

        Returns:
            list[Photo]: All stored photos
        """
        start_time = time.perf_counter()

        try:
            records = self.load_records()
        except StorageReadError as e:
            logger.error(
                "photo_store_read_failed",
                file_path=str(self.file_path),
                code=e.code,
                error=e.message,
            )
            return []

        photos = sort_newest_first([Photo.from_dict(record) for record in records])

        log_performance("list_photos", time.perf_counter() - start_time, count=len(photos))
        return photos

    def get_photo(self, photo_id: str) -> Photo | None:
        """
        Get a photo by ID.

        Returns:
            Photo if found, None otherwise
        """
        for photo in self.list_photos():
            if photo.id == photo_id:
                return photo
        return None

    def count(self) -> int:
        """Get the number of stored photos."""
        return len(self.list_photos())

    def add_photo(self, **fields: Any) -> Photo:
        """
        Validate fields and append a new photo record.

        Args:
            **fields: title and url (required), date, location, comment, category, publicId/public_id

        Returns:
            Photo: The created record with id, defaults and uploadedAt filled in

        Raises:
            ValidationError: If title or url is missing
            StorageReadError: If the existing collection cannot be read
            StorageWriteError: If the collection cannot be written
        """
        return self.add_photo_draft(PhotoDraft.parse(fields))

    def add_photo_draft(self, draft: PhotoDraft) -> Photo:
        """
        Append a new photo record from a parsed draft.

        Returns:
            Photo: The created record
        """
        with self._lock:
            records = self.load_records()
            existing_ids = {record.get("id") for record in records}

            photo_id = generate_photo_id()
            while photo_id in existing_ids:
                photo_id = generate_photo_id()

            photo = Photo.create_new(draft, photo_id=photo_id)
            records.append(photo.to_dict())
            self._write_records(records)

        log_action("photo_saved", photo_id=photo.id, title=photo.title, category=photo.category)
        return photo

    def remove_photo(self, photo_id: str) -> bool:
        """
        Delete a photo record by ID.

        The image stored in the external media service is left in place.

        Returns:
            True once the record is removed

        Raises:
            ValidationError: If photo_id is empty
            NotFoundError: If no record has this id
            StorageReadError: If the existing collection cannot be read
            StorageWriteError: If the collection cannot be written
        """
        if not photo_id:
            raise ValidationError("Photo ID is required", code="missing_photo_id")

        with self._lock:
            records = self.load_records()
            remaining = [record for record in records if record.get("id") != photo_id]

            if len(remaining) == len(records):
                logger.warning("photo_not_found_for_deletion", photo_id=photo_id)
                raise NotFoundError(resource_id=photo_id)

            self._write_records(remaining)

        log_action("photo_deleted", photo_id=photo_id)
        return True


# Global store instances, one per collection file
_photo_stores: dict[str, PhotoStore] = {}
_photo_stores_lock = threading.Lock()


def get_photo_store(file_path: str | Path | None = None) -> PhotoStore:
    """
    Get the shared store for a collection file.

    Args:
        file_path: Collection file (defaults to the PHOTOS_FILE setting)

    Returns:
        PhotoStore: Store instance shared by all callers of this path
    """
    path = Path(file_path) if file_path is not None else get_photos_file()
    key = str(path.resolve())

    with _photo_stores_lock:
        if key not in _photo_stores:
            _photo_stores[key] = PhotoStore(path)
        return _photo_stores[key]


def reset_photo_stores() -> None:
    """Forget all shared store instances."""
    with _photo_stores_lock:
        _photo_stores.clear()
