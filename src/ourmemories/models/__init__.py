"""
Models module for the ourmemories application.

This module contains data models:
- Photo: A photo record as stored in the collection file
- PhotoDraft: Parsed input for a new photo record
- PhotoCategory: Known photo categories
"""

from .photo import (
    CATEGORY_LABELS,
    DEFAULT_CATEGORY,
    Photo,
    PhotoCategory,
    PhotoDraft,
    generate_photo_id,
    sort_newest_first,
)

__all__ = [
    "CATEGORY_LABELS",
    "DEFAULT_CATEGORY",
    "Photo",
    "PhotoCategory",
    "PhotoDraft",
    "generate_photo_id",
    "sort_newest_first",
]
