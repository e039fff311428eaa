"""Media upload service backed by Cloudinary."""

import io
import re
import time
from dataclasses import asdict, dataclass
from typing import Any

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from ..config import get_cloudinary_credentials, get_media_folder
from ..errors import ConfigurationError, UploadError, ValidationError
from ..logging_config import get_logger, log_performance

logger = get_logger(__name__)

# Hosting platform request limit, not a limit of the service itself
MAX_UPLOAD_SIZE = 5 * 1024 * 1024

MAX_DIMENSION = 1200
FOLDER_TAG = "our-memories"

UPLOAD_TRANSFORMATION = [
    {"width": MAX_DIMENSION, "height": MAX_DIMENSION, "crop": "limit"},
    {"quality": "auto"},
    {"fetch_format": "auto"},
]

_UNSAFE_KEY_CHARS = re.compile(r"[^a-zA-Z0-9]")


@dataclass
class UploadResult:
    """Reference to an image stored by the media service."""

    url: str
    public_id: str
    width: int | None
    height: int | None
    format: str | None
    bytes: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def sanitize_title(title: str | None) -> str:
    """Replace every character outside [A-Za-z0-9] with an underscore."""
    sanitized = _UNSAFE_KEY_CHARS.sub("_", title or "")
    return sanitized or "untitled"


def build_public_id(title: str | None, timestamp_ms: int | None = None) -> str:
    """
    Build the storage key for an upload.

    The millisecond timestamp prefix keeps keys sortable by upload time.
    """
    if timestamp_ms is None:
        timestamp_ms = time.time_ns() // 1_000_000
    return f"{timestamp_ms}_{sanitize_title(title)}"


def transform_url(url: str, width: int, height: int, crop: str = "fit") -> str:
    """
    Insert a resize transformation into a Cloudinary delivery URL.

    Non-Cloudinary URLs are returned unchanged.
    """
    if not url or "cloudinary.com" not in url or "/upload/" not in url:
        return url

    transformation = f"c_{crop},w_{width},h_{height},q_auto,f_auto"
    return url.replace("/upload/", f"/upload/{transformation}/", 1)


def validate_upload(file_data: bytes | None, content_type: str | None, filename: str = "") -> None:
    """
    Admission control for an upload. Runs before any call to the media service.

    Raises:
        ValidationError: If the payload is missing, not an image, or larger than MAX_UPLOAD_SIZE
    """
    if not file_data:
        raise ValidationError("No file uploaded", code="missing_file", details={"filename": filename})

    if not content_type or not content_type.lower().startswith("image/"):
        logger.warning("unsupported_content_type", filename=filename, content_type=content_type)
        raise ValidationError(
            "Only image files are allowed",
            code="unsupported_content_type",
            details={"filename": filename, "content_type": content_type},
        )

    file_size = len(file_data)
    if file_size > MAX_UPLOAD_SIZE:
        max_size_mb = MAX_UPLOAD_SIZE / (1024 * 1024)
        logger.warning("file_size_too_large", filename=filename, file_size=file_size, max_size=MAX_UPLOAD_SIZE)
        raise ValidationError(
            f"File size too large (max {max_size_mb:.0f}MB)",
            code="file_too_large",
            user_message=f"'{filename}' is larger than {max_size_mb:.0f}MB.",
            details={"filename": filename, "file_size": file_size, "max_size": MAX_UPLOAD_SIZE},
        )


class MediaUploadService:
    """Forwards image uploads to Cloudinary and returns a stable reference."""

    def __init__(
        self,
        cloud_name: str | None = None,
        api_key: str | None = None,
        api_secret: str | None = None,
        folder: str | None = None,
    ) -> None:
        """
        Initialize the media upload service.

        Args:
            cloud_name: Cloudinary cloud name (defaults to CLOUDINARY_CLOUD_NAME)
            api_key: Cloudinary API key (defaults to CLOUDINARY_API_KEY)
            api_secret: Cloudinary API secret (defaults to CLOUDINARY_API_SECRET)
            folder: Folder uploads are stored under (defaults to MEDIA_FOLDER, "our-memories")
        """
        credentials = get_cloudinary_credentials()
        self.cloud_name = cloud_name or credentials["cloud_name"]
        self.api_key = api_key or credentials["api_key"]
        self.api_secret = api_secret or credentials["api_secret"]
        self.folder = folder or get_media_folder()

    @property
    def is_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def ensure_configured(self) -> None:
        """
        Raises:
            ConfigurationError: If any Cloudinary credential is missing
        """
        if self.is_configured:
            return

        missing = [
            name
            for name, value in (
                ("CLOUDINARY_CLOUD_NAME", self.cloud_name),
                ("CLOUDINARY_API_KEY", self.api_key),
                ("CLOUDINARY_API_SECRET", self.api_secret),
            )
            if not value
        ]
        raise ConfigurationError("Cloudinary configuration missing", details={"missing": missing})

    def upload(
        self,
        file_data: bytes,
        content_type: str | None,
        title: str | None = None,
        category: str | None = None,
        filename: str = "",
    ) -> UploadResult:
        """
        Upload one image.

        Args:
            file_data: Raw image bytes
            content_type: Declared MIME type of the upload
            title: Photo title, used in the storage key
            category: Photo category, stored as a tag
            filename: Original filename, for logging

        Returns:
            UploadResult: URL, opaque id, dimensions and format reported by Cloudinary

        Raises:
            ValidationError: If the upload fails admission control
            ConfigurationError: If credentials are missing
            UploadError: If Cloudinary rejects or fails the upload
        """
        validate_upload(file_data, content_type, filename)
        self.ensure_configured()

        public_id = build_public_id(title)
        tags = [tag for tag in (category, FOLDER_TAG) if tag]

        logger.info(
            "upload_started",
            filename=filename,
            public_id=public_id,
            size=len(file_data),
            content_type=content_type,
        )
        start_time = time.perf_counter()

        try:
            response = cloudinary.uploader.upload(
                io.BytesIO(file_data),
                public_id=public_id,
                folder=self.folder,
                transformation=UPLOAD_TRANSFORMATION,
                tags=tags,
                resource_type="image",
                cloud_name=self.cloud_name,
                api_key=self.api_key,
                api_secret=self.api_secret,
            )
        except CloudinaryError as e:
            raise UploadError(
                f"Upload failed: {e}",
                details={"upstream_message": str(e), "public_id": public_id},
                original_exception=e,
            ) from e
        except OSError as e:
            raise UploadError(
                f"Upload failed: {e}",
                code="upload_transport_failed",
                details={"upstream_message": str(e), "public_id": public_id},
                original_exception=e,
            ) from e

        url = response.get("secure_url") or response.get("url")
        if not url:
            raise UploadError(
                "Upload failed: media service returned no URL",
                code="upload_incomplete",
                details={"public_id": public_id},
            )

        result = UploadResult(
            url=url,
            public_id=response.get("public_id", public_id),
            width=response.get("width"),
            height=response.get("height"),
            format=response.get("format"),
            bytes=response.get("bytes"),
        )

        log_performance("media_upload", time.perf_counter() - start_time, public_id=result.public_id)
        logger.info("upload_completed", public_id=result.public_id, url=result.url)
        return result


# Global media service instance
_media_service: MediaUploadService | None = None


def get_media_service() -> MediaUploadService:
    """Get the global media upload service instance."""
    global _media_service

    if _media_service is None:
        _media_service = MediaUploadService()

    return _media_service


def reset_media_service() -> None:
    """Forget the global media upload service instance."""
    global _media_service
    _media_service = None
