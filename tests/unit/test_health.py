"""Tests for health checks."""

from unittest.mock import patch

from ourmemories.health import (
    check_liveness,
    check_media_service_health,
    check_photo_store_health,
    perform_health_check,
)
from ourmemories.services.media import MediaUploadService


class TestPhotoStoreHealth:
    """Test cases for check_photo_store_health."""

    def test_absent_file_is_healthy(self):
        result = check_photo_store_health()

        assert result["status"] == "healthy"
        assert result["file_exists"] is False
        assert result["photo_count"] == 0

    def test_counts_records(self, write_records):
        write_records([{"id": "a", "title": "A", "url": "https://x/a.jpg"}])

        assert check_photo_store_health()["photo_count"] == 1

    def test_corrupt_file_is_unhealthy(self, photos_file):
        photos_file.parent.mkdir(parents=True, exist_ok=True)
        photos_file.write_text("{not json", encoding="utf-8")

        result = check_photo_store_health()

        assert result["status"] == "unhealthy"
        assert result["code"] == "storage_corrupt"


class TestMediaServiceHealth:
    """Test cases for check_media_service_health."""

    def test_configured(self):
        result = check_media_service_health()

        assert result["status"] == "healthy"
        assert "test-cloud" in result["message"]

    def test_missing_credentials(self):
        service = MediaUploadService()
        service.api_secret = None

        with patch("ourmemories.health.get_media_service", return_value=service):
            result = check_media_service_health()

        assert result["status"] == "unhealthy"


class TestPerformHealthCheck:
    """Test cases for the aggregated report."""

    def test_all_healthy(self):
        report = perform_health_check()

        assert report["status"] == "healthy"
        assert set(report["checks"]) == {"photo_store", "media_service", "environment"}
        assert "unhealthy_services" not in report
        assert report["application"]["name"] == "ourmemories"

    def test_failing_check_is_listed(self):
        with patch.dict(
            "ourmemories.health.HEALTH_CHECKS",
            {"media_service": lambda: {"status": "unhealthy", "message": "down"}},
        ):
            report = perform_health_check()

        assert report["status"] == "unhealthy"
        assert report["unhealthy_services"] == ["media_service"]

    def test_liveness(self):
        assert check_liveness()["status"] == "alive"
