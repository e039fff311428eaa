"""Tests for the Cloudinary media upload service."""

from unittest.mock import patch

import pytest
from cloudinary.exceptions import Error as CloudinaryError

from ourmemories.config import get_config
from ourmemories.errors import ConfigurationError, UploadError, ValidationError
from ourmemories.services.media import (
    FOLDER_TAG,
    MAX_UPLOAD_SIZE,
    UPLOAD_TRANSFORMATION,
    MediaUploadService,
    build_public_id,
    get_media_service,
    reset_media_service,
    sanitize_title,
    transform_url,
    validate_upload,
)

UPLOAD_TARGET = "ourmemories.services.media.cloudinary.uploader.upload"

CLOUDINARY_RESPONSE = {
    "secure_url": "https://res.cloudinary.com/test-cloud/image/upload/v1/our-memories/1_Sunset.jpg",
    "url": "http://res.cloudinary.com/test-cloud/image/upload/v1/our-memories/1_Sunset.jpg",
    "public_id": "our-memories/1_Sunset",
    "width": 1200,
    "height": 800,
    "format": "jpg",
    "bytes": 123456,
}


class TestValidateUpload:
    """Test cases for upload admission control."""

    def test_accepts_image(self, sample_image_data):
        validate_upload(sample_image_data, "image/png", "a.png")

    def test_accepts_exact_size_limit(self):
        validate_upload(b"\x00" * MAX_UPLOAD_SIZE, "image/jpeg", "big.jpg")

    def test_rejects_one_byte_over(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_upload(b"\x00" * (MAX_UPLOAD_SIZE + 1), "image/jpeg", "big.jpg")

        assert exc_info.value.code == "file_too_large"
        assert exc_info.value.details["file_size"] == MAX_UPLOAD_SIZE + 1

    @pytest.mark.parametrize("content_type", ["application/pdf", "text/plain", "", None])
    def test_rejects_non_image(self, content_type):
        with pytest.raises(ValidationError) as exc_info:
            validate_upload(b"data", content_type, "doc.pdf")

        assert exc_info.value.code == "unsupported_content_type"

    @pytest.mark.parametrize("file_data", [b"", None])
    def test_rejects_missing_file(self, file_data):
        with pytest.raises(ValidationError) as exc_info:
            validate_upload(file_data, "image/png")

        assert exc_info.value.code == "missing_file"


class TestMediaUploadService:
    """Test cases for MediaUploadService."""

    def test_configured_from_environment(self):
        service = MediaUploadService()

        assert service.cloud_name == "test-cloud"
        assert service.api_key == "test-key"
        assert service.api_secret == "test-secret"
        assert service.folder == "our-memories"
        assert service.is_configured

    @patch(UPLOAD_TARGET)
    def test_upload_success(self, mock_upload, sample_image_data):
        mock_upload.return_value = CLOUDINARY_RESPONSE
        service = MediaUploadService()

        result = service.upload(sample_image_data, "image/png", title="Sunset", category="travel", filename="s.png")

        assert result.url == CLOUDINARY_RESPONSE["secure_url"]
        assert result.public_id == "our-memories/1_Sunset"
        assert result.width == 1200
        assert result.height == 800
        assert result.format == "jpg"
        assert result.bytes == 123456

        mock_upload.assert_called_once()
        args, kwargs = mock_upload.call_args
        assert args[0].read() == sample_image_data
        assert kwargs["folder"] == "our-memories"
        assert kwargs["transformation"] == UPLOAD_TRANSFORMATION
        assert kwargs["tags"] == ["travel", FOLDER_TAG]
        assert kwargs["resource_type"] == "image"
        assert kwargs["public_id"].endswith("_Sunset")
        assert kwargs["cloud_name"] == "test-cloud"
        assert kwargs["api_key"] == "test-key"
        assert kwargs["api_secret"] == "test-secret"

    @patch(UPLOAD_TARGET)
    def test_upload_without_category(self, mock_upload, sample_image_data):
        mock_upload.return_value = CLOUDINARY_RESPONSE

        MediaUploadService().upload(sample_image_data, "image/png")

        kwargs = mock_upload.call_args.kwargs
        assert kwargs["tags"] == [FOLDER_TAG]
        assert kwargs["public_id"].endswith("_untitled")

    @patch(UPLOAD_TARGET)
    def test_upload_falls_back_to_http_url(self, mock_upload, sample_image_data):
        mock_upload.return_value = {**CLOUDINARY_RESPONSE, "secure_url": None}

        result = MediaUploadService().upload(sample_image_data, "image/png", title="Sunset")

        assert result.url == CLOUDINARY_RESPONSE["url"]

    @patch(UPLOAD_TARGET)
    def test_non_image_rejected_before_upload(self, mock_upload):
        with pytest.raises(ValidationError):
            MediaUploadService().upload(b"%PDF-1.4", "application/pdf", title="Doc")

        mock_upload.assert_not_called()

    @patch(UPLOAD_TARGET)
    def test_too_large_rejected_before_upload(self, mock_upload):
        with pytest.raises(ValidationError):
            MediaUploadService().upload(b"\x00" * (MAX_UPLOAD_SIZE + 1), "image/jpeg")

        mock_upload.assert_not_called()

    @patch(UPLOAD_TARGET)
    def test_exact_size_limit_uploaded(self, mock_upload):
        mock_upload.return_value = CLOUDINARY_RESPONSE

        MediaUploadService().upload(b"\x00" * MAX_UPLOAD_SIZE, "image/jpeg", title="Big")

        mock_upload.assert_called_once()

    @patch(UPLOAD_TARGET)
    def test_missing_credentials(self, mock_upload, sample_image_data, monkeypatch):
        monkeypatch.delenv("CLOUDINARY_API_SECRET")
        get_config().clear_cache()
        service = MediaUploadService()

        assert not service.is_configured
        with pytest.raises(ConfigurationError) as exc_info:
            service.upload(sample_image_data, "image/png", title="Sunset")

        assert exc_info.value.status_code == 500
        assert exc_info.value.details == {"missing": ["CLOUDINARY_API_SECRET"]}
        mock_upload.assert_not_called()

    @patch(UPLOAD_TARGET)
    def test_cloudinary_error_becomes_upload_error(self, mock_upload, sample_image_data):
        mock_upload.side_effect = CloudinaryError("Invalid image file")

        with pytest.raises(UploadError) as exc_info:
            MediaUploadService().upload(sample_image_data, "image/png", title="Sunset")

        assert exc_info.value.status_code == 500
        assert exc_info.value.details["upstream_message"] == "Invalid image file"

    @patch(UPLOAD_TARGET)
    def test_network_error_becomes_upload_error(self, mock_upload, sample_image_data):
        mock_upload.side_effect = ConnectionError("connection reset")

        with pytest.raises(UploadError) as exc_info:
            MediaUploadService().upload(sample_image_data, "image/png", title="Sunset")

        assert exc_info.value.code == "upload_transport_failed"

    @patch(UPLOAD_TARGET)
    def test_response_without_url(self, mock_upload, sample_image_data):
        mock_upload.return_value = {"public_id": "x"}

        with pytest.raises(UploadError) as exc_info:
            MediaUploadService().upload(sample_image_data, "image/png", title="Sunset")

        assert exc_info.value.code == "upload_incomplete"

    def test_explicit_folder(self):
        assert MediaUploadService(folder="elsewhere").folder == "elsewhere"

    def test_global_instance(self):
        service = get_media_service()
        assert get_media_service() is service
        reset_media_service()
        assert get_media_service() is not service


class TestStorageKeys:
    """Test cases for public id and URL helpers."""

    @pytest.mark.parametrize(
        "title,expected",
        [
            ("Sunset", "Sunset"),
            ("Our first trip!", "Our_first_trip_"),
            ("부산 바다", "_____"),
            ("", "untitled"),
            (None, "untitled"),
        ],
    )
    def test_sanitize_title(self, title, expected):
        assert sanitize_title(title) == expected

    def test_build_public_id(self):
        assert build_public_id("Sunset at sea", timestamp_ms=1760870400000) == "1760870400000_Sunset_at_sea"

    def test_build_public_id_uses_current_time(self):
        prefix, _, rest = build_public_id("A").partition("_")
        assert prefix.isdigit()
        assert rest == "A"

    def test_transform_url(self):
        url = "https://res.cloudinary.com/demo/image/upload/v1/our-memories/1_Sunset.jpg"

        assert transform_url(url, 400, 300) == (
            "https://res.cloudinary.com/demo/image/upload/c_fit,w_400,h_300,q_auto,f_auto/v1/our-memories/1_Sunset.jpg"
        )

    def test_transform_url_leaves_other_urls(self):
        assert transform_url("https://example.com/upload/a.jpg", 400, 300) == "https://example.com/upload/a.jpg"
        assert transform_url("", 400, 300) == ""
