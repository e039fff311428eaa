"""
Health checks for ourmemories.

Three checks feed one report: the photo collection file is absent or
readable, Cloudinary credentials are present (no network call), and the data
directory is writable. The JSON API serves the report at /health and the
Streamlit ``pages/health.py`` renders it.
"""

import os
import platform
import time
from collections.abc import Callable
from typing import Any

import streamlit as st

from . import __version__
from .config import get_environment
from .errors import StorageReadError
from .logging_config import get_logger
from .services.media import get_media_service
from .services.metadata import get_photo_store

logger = get_logger(__name__)

HEALTHY = "healthy"
UNHEALTHY = "unhealthy"

_APP_START_TIME = time.time()


def _result(status: str, message: str, **extra: Any) -> dict[str, Any]:
    return {"status": status, "message": message, "timestamp": time.time(), **extra}


def check_photo_store_health() -> dict[str, Any]:
    store = get_photo_store()
    file_path = str(store.file_path)
    try:
        records = store.load_records()
    except StorageReadError as e:
        return _result(UNHEALTHY, e.message, file_path=file_path, code=e.code)

    return _result(
        HEALTHY,
        "Photo collection is readable",
        file_path=file_path,
        file_exists=store.file_path.exists(),
        photo_count=len(records),
    )


def check_media_service_health() -> dict[str, Any]:
    service = get_media_service()
    if not service.is_configured:
        return _result(UNHEALTHY, "Cloudinary configuration missing")
    return _result(HEALTHY, f"Cloudinary configured for cloud: {service.cloud_name}", folder=service.folder)


def check_environment_health() -> dict[str, Any]:
    """The data directory must be writable once it exists; a missing one is created on first save."""
    data_dir = get_photo_store().file_path.parent
    if data_dir.exists() and not os.access(data_dir, os.W_OK):
        return _result(UNHEALTHY, f"Data directory is not writable: {data_dir}")
    return _result(HEALTHY, "Data directory is usable", data_dir=str(data_dir), environment=get_environment())


HEALTH_CHECKS: dict[str, Callable[[], dict[str, Any]]] = {
    "photo_store": check_photo_store_health,
    "media_service": check_media_service_health,
    "environment": check_environment_health,
}


def get_application_info() -> dict[str, Any]:
    return {
        "name": "ourmemories",
        "version": __version__,
        "environment": get_environment(),
        "uptime": time.time() - _APP_START_TIME,
        "python_version": platform.python_version(),
    }


def perform_health_check() -> dict[str, Any]:
    """
    Run every check and aggregate the results.

    Returns:
        dict: ``status`` is "healthy" only if every check is; failing checks are
        listed under ``unhealthy_services``
    """
    started = time.perf_counter()
    checks = {name: check() for name, check in HEALTH_CHECKS.items()}
    unhealthy = [name for name, result in checks.items() if result["status"] != HEALTHY]

    report: dict[str, Any] = {
        "status": UNHEALTHY if unhealthy else HEALTHY,
        "timestamp": time.time(),
        "duration_ms": round((time.perf_counter() - started) * 1000, 2),
        "application": get_application_info(),
        "checks": checks,
    }
    if unhealthy:
        report["unhealthy_services"] = unhealthy
        logger.warning("health_check_failed", unhealthy_services=unhealthy)
    else:
        logger.debug("health_check_passed", duration_ms=report["duration_ms"])

    return report


def check_liveness() -> dict[str, Any]:
    return {"status": "alive", "timestamp": time.time(), "uptime": time.time() - _APP_START_TIME}


def render_health_page() -> None:
    st.set_page_config(page_title="Health - Our Memories", page_icon="🩺", layout="wide")
    st.title("🩺 Health")

    report = perform_health_check()

    if report["status"] == HEALTHY:
        st.success(f"All checks passed in {report['duration_ms']}ms")
    else:
        st.error(f"Failing checks: {', '.join(report['unhealthy_services'])}")

    app_info = report["application"]
    for column, (label, value) in zip(
        st.columns(3),
        [
            ("Version", app_info["version"]),
            ("Environment", app_info["environment"]),
            ("Uptime", f"{app_info['uptime']:.0f}s"),
        ],
        strict=True,
    ):
        column.metric(label, value)

    for name, result in report["checks"].items():
        icon = "✅" if result["status"] == HEALTHY else "❌"
        with st.expander(f"{icon} {name.replace('_', ' ').title()}", expanded=result["status"] != HEALTHY):
            st.write(result["message"])
            st.json(result)
