"""Configuration for the ourmemories application.

Settings come from environment variables first and Streamlit secrets
(``.streamlit/secrets.toml``) second, so the same keys work for the
Streamlit app, the JSON API and the test suite.

Keys:
    ENVIRONMENT, LOG_LEVEL, DEBUG, PHOTOS_FILE, LETTER_FILE,
    CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY, CLOUDINARY_API_SECRET,
    MEDIA_FOLDER, SLIDESHOW_INTERVAL, CORS_ORIGINS
"""

import os
from pathlib import Path
from typing import Any

import streamlit as st

from .logging_config import DEVELOPMENT_ENVIRONMENTS, get_logger

logger = get_logger(__name__)

DEFAULT_PHOTOS_FILE = "data/photos.json"
DEFAULT_LETTER_FILE = "data/letter.json"
DEFAULT_MEDIA_FOLDER = "our-memories"
DEFAULT_SLIDESHOW_INTERVAL = 4.0
DEFAULT_CORS_ORIGINS = "http://localhost:8501"

_TRUE_VALUES = ("true", "1", "yes", "on")


class Config:
    """Cached view over environment variables and Streamlit secrets."""

    def __init__(self):
        self._cache: dict[str, Any] = {}

    @staticmethod
    def _read_raw(key: str) -> Any:
        value = os.getenv(key)
        if value is not None:
            return value

        try:
            return st.secrets.get(key)
        except Exception as e:  # nosec B110
            # No secrets.toml, or not running inside Streamlit
            logger.debug("streamlit_secrets_unavailable", key=key, error=str(e))
            return None

    @staticmethod
    def _cast(key: str, value: Any, cast_type: type, default: Any) -> Any:
        if cast_type is bool:
            return value.lower() in _TRUE_VALUES if isinstance(value, str) else bool(value)
        if cast_type is str:
            return value
        try:
            return cast_type(value)
        except (ValueError, TypeError):
            logger.warning("config_cast_failed", key=key, cast_type=cast_type.__name__, value=str(value))
            return default

    def get(self, key: str, default: Any = None, cast_type: type = str) -> Any:
        """Get a setting, cast to ``cast_type``.

        Args:
            key: Setting name
            default: Value used when the key is unset or cannot be cast
            cast_type: str, int, float or bool

        Returns:
            The cast value, or ``default``
        """
        cache_key = f"{key}:{cast_type.__name__}"
        if cache_key not in self._cache:
            value = self._read_raw(key)
            if value is None:
                value = default
            self._cache[cache_key] = None if value is None else self._cast(key, value, cast_type, default)
        return self._cache[cache_key]

    def get_required(self, key: str, cast_type: type = str) -> Any:
        """Get a setting that must be present and non-empty.

        Raises:
            ValueError: If the setting is missing
        """
        value = self.get(key, cast_type=cast_type)
        if value is None or value == "":
            raise ValueError(f"Required configuration '{key}' not found")
        return value

    @property
    def environment(self) -> str:
        return str(self.get("ENVIRONMENT", "development")).lower()

    def is_development(self) -> bool:
        return self.environment in DEVELOPMENT_ENVIRONMENTS

    def is_production(self) -> bool:
        return self.environment in ("production", "prod")

    def clear_cache(self) -> None:
        """Forget cached values so the next read sees the current environment."""
        self._cache.clear()


_config: Config | None = None


def get_config() -> Config:
    """Get the process-wide configuration."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def get_env(key: str, default: Any = None, cast_type: type = str) -> Any:
    return get_config().get(key, default, cast_type)


def is_development() -> bool:
    return get_config().is_development()


def get_environment() -> str:
    return get_config().environment


def get_debug_mode() -> bool:
    """DEBUG, which is implied in development."""
    return get_env("DEBUG", False, bool) or is_development()


def get_photos_file() -> Path:
    """Photo collection file; relative paths resolve against the working directory."""
    return Path(get_env("PHOTOS_FILE", DEFAULT_PHOTOS_FILE))


def get_letter_file() -> Path:
    return Path(get_env("LETTER_FILE", DEFAULT_LETTER_FILE))


def get_media_folder() -> str:
    """Cloudinary folder uploads are stored under."""
    return str(get_env("MEDIA_FOLDER", DEFAULT_MEDIA_FOLDER))


def get_slideshow_interval() -> float:
    """Seconds between slideshow auto-advances."""
    return get_env("SLIDESHOW_INTERVAL", DEFAULT_SLIDESHOW_INTERVAL, float)


def get_cloudinary_credentials() -> dict[str, str | None]:
    """Cloudinary credentials; unset values are None."""
    return {
        "cloud_name": get_env("CLOUDINARY_CLOUD_NAME"),
        "api_key": get_env("CLOUDINARY_API_KEY"),
        "api_secret": get_env("CLOUDINARY_API_SECRET"),
    }


def get_cors_origins() -> list[str]:
    """Origins allowed to call the JSON API, from a comma-separated CORS_ORIGINS."""
    origins = str(get_env("CORS_ORIGINS", DEFAULT_CORS_ORIGINS))
    return [origin.strip() for origin in origins.split(",") if origin.strip()]
