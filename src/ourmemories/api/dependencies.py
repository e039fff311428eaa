"""FastAPI dependencies providing the shared services."""

from ..services.media import MediaUploadService, get_media_service
from ..services.metadata import PhotoStore, get_photo_store


def get_store() -> PhotoStore:
    """Photo store for the configured collection file."""
    return get_photo_store()


def get_media() -> MediaUploadService:
    """Media upload service configured from the environment."""
    return get_media_service()
