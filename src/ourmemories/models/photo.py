"""
Photo record model for the ourmemories application.

This module contains the Photo dataclass stored in the JSON collection file,
the PhotoDraft used to parse incoming fields before a record is created,
and the helpers used to order records for display.
"""

import time
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from ..errors import ValidationError

DEFAULT_CATEGORY = "daily"

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
_OLDEST = datetime.min.replace(tzinfo=UTC)


class PhotoCategory(str, Enum):
    """Known photo categories. Other values are stored as free text."""

    DATES = "dates"
    DAILY = "daily"
    TRAVEL = "travel"
    ADVENTURE = "adventure"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self.value]


CATEGORY_LABELS = {
    "dates": "Dates",
    "daily": "Daily Life",
    "travel": "Travel",
    "adventure": "Adventures",
}


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def generate_photo_id() -> str:
    """
    Generate an opaque photo id.

    The id is a base-36 millisecond timestamp followed by 12 hex characters
    of a UUID4 (48 random bits), so two ids created in the same millisecond
    collide with probability 2**-48.
    """
    return _to_base36(time.time_ns() // 1_000_000) + uuid.uuid4().hex[:12]


def utc_timestamp(moment: datetime | None = None) -> str:
    """Format a moment as an ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    moment = (moment or datetime.now(UTC)).astimezone(UTC)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def today_utc() -> str:
    """Get today's calendar date in UTC as YYYY-MM-DD."""
    return datetime.now(UTC).date().isoformat()


def parse_timestamp(value: Any) -> datetime | None:
    """
    Parse an ISO timestamp or calendar date string.

    Naive values are treated as UTC. Returns None for empty or
    unparseable input.
    """
    if not value or not isinstance(value, str):
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _clean(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        return str(value)
    return value


@dataclass
class PhotoDraft:
    """
    Parsed input for a new photo record.

    Required fields are checked and defaults applied here, before any
    record exists.
    """

    title: str
    url: str
    date: str
    location: str = ""
    comment: str = ""
    category: str = DEFAULT_CATEGORY
    public_id: str = ""

    @classmethod
    def parse(cls, data: dict[str, Any]) -> "PhotoDraft":
        """
        Build a draft from loosely-typed request fields.

        Accepts both the wire key ``publicId`` and ``public_id``.

        Raises:
            ValidationError: If title or url is missing or blank
        """
        title = _clean(data.get("title"))
        url = _clean(data.get("url"))
        date = _clean(data.get("date"))
        category = _clean(data.get("category"))

        # Values are stored as given; blank only means missing
        missing = [name for name, value in (("title", title), ("url", url)) if not value.strip()]
        if missing:
            raise ValidationError(
                "Title and URL are required",
                code="missing_required_fields",
                details={"missing_fields": missing},
            )

        public_id = data.get("publicId")
        if public_id is None:
            public_id = data.get("public_id")

        return cls(
            title=title,
            url=url,
            date=date if date.strip() else today_utc(),
            location=_clean(data.get("location")),
            comment=_clean(data.get("comment")),
            category=category if category.strip() else DEFAULT_CATEGORY,
            public_id=_clean(public_id),
        )


@dataclass
class Photo:
    """
    One photo's metadata entry.

    Records are never mutated after creation; removal is the only other
    lifecycle event.
    """

    id: str
    title: str
    date: str
    location: str
    comment: str
    category: str
    url: str
    public_id: str
    uploaded_at: str

    @classmethod
    def create_new(cls, draft: PhotoDraft, photo_id: str | None = None, uploaded_at: datetime | None = None) -> "Photo":
        """
        Create a new Photo from a draft with a generated id and the current timestamp.

        Args:
            draft: Parsed and validated input fields
            photo_id: Explicit id (defaults to a freshly generated one)
            uploaded_at: Upload moment (defaults to now)

        Returns:
            New Photo instance
        """
        return cls(
            id=photo_id or generate_photo_id(),
            title=draft.title,
            date=draft.date,
            location=draft.location,
            comment=draft.comment,
            category=draft.category,
            url=draft.url,
            public_id=draft.public_id,
            uploaded_at=utc_timestamp(uploaded_at),
        )

    def to_dict(self) -> dict:
        """
        Convert Photo to its on-disk and API representation.

        Returns:
            Dictionary using the wire keys (publicId, uploadedAt)
        """
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date,
            "location": self.location,
            "comment": self.comment,
            "category": self.category,
            "url": self.url,
            "publicId": self.public_id,
            "uploadedAt": self.uploaded_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Photo":
        """
        Create Photo from a stored record.

        Missing fields become empty strings. Older records that carry
        ``createdAt`` instead of ``uploadedAt`` are accepted.
        """
        return cls(
            id=_clean(data.get("id")),
            title=_clean(data.get("title")),
            date=_clean(data.get("date")),
            location=_clean(data.get("location")),
            comment=_clean(data.get("comment")),
            category=_clean(data.get("category")) or DEFAULT_CATEGORY,
            url=_clean(data.get("url")),
            public_id=_clean(data.get("publicId", data.get("public_id"))),
            uploaded_at=_clean(data.get("uploadedAt") or data.get("createdAt")),
        )

    @property
    def category_label(self) -> str:
        """Display label for the category; free-text categories are shown as-is."""
        return CATEGORY_LABELS.get(self.category, self.category)

    @property
    def is_known_category(self) -> bool:
        return self.category in CATEGORY_LABELS

    def sort_key(self) -> datetime:
        """Moment used for newest-first ordering: uploadedAt, else date, else the oldest possible."""
        return parse_timestamp(self.uploaded_at) or parse_timestamp(self.date) or _OLDEST


def sort_newest_first(photos: list[Photo]) -> list[Photo]:
    """Return photos ordered newest first; ties keep their stored order."""
    return sorted(photos, key=lambda photo: photo.sort_key(), reverse=True)
