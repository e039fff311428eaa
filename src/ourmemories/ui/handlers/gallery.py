"""Gallery handlers for the ourmemories application."""

from collections import Counter
from typing import Any

import structlog

from ...models.photo import CATEGORY_LABELS, Photo, parse_timestamp
from ...services.metadata import get_photo_store
from ...services.slideshow import DEFAULT_SAMPLE_SIZE, select_random_photos

logger = structlog.get_logger(__name__)

ALL_CATEGORIES = "all"

# Filter choices in display order, "all" first
CATEGORY_FILTERS = {ALL_CATEGORIES: "All Photos", **CATEGORY_LABELS}


def load_photos() -> list[Photo]:
    """Load every photo, newest first. Re-reads the collection file on every call."""
    photos = get_photo_store().list_photos()
    logger.info("gallery_photos_loaded", count=len(photos))
    return photos


def load_slideshow_photos(count: int = DEFAULT_SAMPLE_SIZE) -> list[Photo]:
    """Load a fresh random sample of photos for the home page slideshow."""
    return select_random_photos(load_photos(), count)


def filter_photos_by_category(photos: list[Photo], category: str) -> list[Photo]:
    """
    Keep the photos of one category.

    Args:
        photos: Photos to filter
        category: Category value, or "all" for no filtering

    Returns:
        list: Matching photos in their original order
    """
    if not category or category == ALL_CATEGORIES:
        return list(photos)
    return [photo for photo in photos if photo.category == category]


def count_by_category(photos: list[Photo]) -> dict[str, int]:
    """
    Count photos per filter choice.

    Returns:
        dict: Count for "all" and for every known category (zero when absent)
    """
    counts = Counter(photo.category for photo in photos)
    result = {ALL_CATEGORIES: len(photos)}
    for category in CATEGORY_LABELS:
        result[category] = counts.get(category, 0)
    return result


def format_display_date(date_str: str | None) -> str:
    """
    Format a stored date for display, e.g. "October 19, 2026".

    Unparseable values are returned unchanged.
    """
    if not date_str:
        return ""

    parsed = parse_timestamp(date_str)
    if parsed is None:
        return date_str

    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"


def delete_photo(photo_id: str) -> dict[str, Any]:
    """
    Delete one photo record.

    Returns:
        dict: success flag and message for display
    """
    try:
        get_photo_store().remove_photo(photo_id)
    except Exception as e:
        logger.error("gallery_delete_failed", photo_id=photo_id, error=str(e))
        return {"success": False, "photo_id": photo_id, "error": e, "message": f"Failed to delete photo: {e}"}

    logger.info("gallery_photo_deleted", photo_id=photo_id)
    return {"success": True, "photo_id": photo_id, "message": "Photo deleted successfully"}
