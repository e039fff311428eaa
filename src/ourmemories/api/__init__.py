"""
JSON API for the ourmemories application.

Exposes the photo metadata store and the media upload service over HTTP:
- GET/POST/DELETE /api/photos
- GET /api/gallery
- GET/POST /api/upload
- GET /health
"""

from .app import create_app

__all__ = ["create_app"]
