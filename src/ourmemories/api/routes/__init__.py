"""API routers."""

from . import health, photos, upload

__all__ = ["health", "photos", "upload"]
