"""Tests for the image upload endpoint."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from ourmemories.api import create_app
from ourmemories.api.dependencies import get_media
from ourmemories.errors import UploadError
from ourmemories.services.media import MAX_UPLOAD_SIZE, MediaUploadService, UploadResult

UPLOAD_TARGET = "ourmemories.services.media.cloudinary.uploader.upload"


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


class TestUploadEndpoint:
    """Test cases for /api/upload."""

    def test_ready(self, client):
        response = client.get("/api/upload")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Upload endpoint ready"}

    @patch(UPLOAD_TARGET)
    def test_upload_success(self, mock_upload, client, sample_image_data):
        mock_upload.return_value = {
            "secure_url": "https://res.cloudinary.com/test-cloud/image/upload/v1/our-memories/1_Sunset.png",
            "public_id": "our-memories/1_Sunset",
            "width": 1,
            "height": 1,
            "format": "png",
        }

        response = client.post(
            "/api/upload",
            files={"file": ("sunset.png", sample_image_data, "image/png")},
            data={"title": "Sunset", "category": "travel", "date": "2026-10-19"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "url": "https://res.cloudinary.com/test-cloud/image/upload/v1/our-memories/1_Sunset.png",
            "public_id": "our-memories/1_Sunset",
            "width": 1,
            "height": 1,
            "format": "png",
        }
        assert mock_upload.call_args.kwargs["tags"] == ["travel", "our-memories"]

    @patch(UPLOAD_TARGET)
    def test_non_image_rejected(self, mock_upload, client):
        response = client.post("/api/upload", files={"file": ("notes.txt", b"hello", "text/plain")})

        assert response.status_code == 400
        assert response.json()["code"] == "unsupported_content_type"
        mock_upload.assert_not_called()

    @patch(UPLOAD_TARGET)
    def test_too_large_rejected(self, mock_upload, client):
        payload = b"\x00" * (MAX_UPLOAD_SIZE + 1)

        response = client.post("/api/upload", files={"file": ("big.jpg", payload, "image/jpeg")})

        assert response.status_code == 400
        assert response.json()["code"] == "file_too_large"
        mock_upload.assert_not_called()

    def test_missing_file(self, client):
        response = client.post("/api/upload", data={"title": "Sunset"})

        assert response.status_code == 400
        assert response.json()["error"] == "No file uploaded"
        assert response.json()["code"] == "missing_file"

    def test_missing_configuration(self, client, sample_image_data):
        unconfigured = MediaUploadService()
        unconfigured.api_secret = None
        client.app.dependency_overrides[get_media] = lambda: unconfigured

        response = client.post("/api/upload", files={"file": ("a.png", sample_image_data, "image/png")})

        assert response.status_code == 500
        assert response.json()["code"] == "configuration_missing"
        assert response.json()["details"] == {"missing": ["CLOUDINARY_API_SECRET"]}

    def test_upstream_failure(self, client, sample_image_data):
        media = MagicMock(spec=MediaUploadService)
        media.upload.side_effect = UploadError("Upload failed: Invalid image file")
        client.app.dependency_overrides[get_media] = lambda: media

        response = client.post("/api/upload", files={"file": ("a.png", sample_image_data, "image/png")})

        assert response.status_code == 500
        assert response.json()["code"] == "upload_failed"

    def test_passes_title_and_category(self, client, sample_image_data):
        media = MagicMock(spec=MediaUploadService)
        media.upload.return_value = UploadResult(url="https://x/y.png", public_id="p", width=1, height=1, format="png")
        client.app.dependency_overrides[get_media] = lambda: media

        client.post(
            "/api/upload",
            files={"file": ("a.png", sample_image_data, "image/png")},
            data={"title": "Sunset", "category": "dates"},
        )

        args, kwargs = media.upload.call_args
        assert args == (sample_image_data, "image/png")
        assert kwargs == {"title": "Sunset", "category": "dates", "filename": "a.png"}
