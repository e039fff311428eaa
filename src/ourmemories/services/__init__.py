"""
Services module for the ourmemories application.

This module contains all service classes that handle business logic:
- PhotoStore: Photo records in the JSON collection file
- MediaUploadService: Image uploads to Cloudinary
- Slideshow: Home page random selection and slideshow state
- Letter pages
"""

from .letter import LetterPage, clamp_page, load_letter_pages
from .media import MAX_UPLOAD_SIZE, MediaUploadService, UploadResult, get_media_service, transform_url
from .metadata import PhotoStore, get_photo_store, reset_photo_stores
from .slideshow import Slideshow, select_random_photos

__all__ = [
    "LetterPage",
    "clamp_page",
    "load_letter_pages",
    "MAX_UPLOAD_SIZE",
    "MediaUploadService",
    "UploadResult",
    "get_media_service",
    "transform_url",
    "PhotoStore",
    "get_photo_store",
    "reset_photo_stores",
    "Slideshow",
    "select_random_photos",
]
