# This file defines runtime settings for the content API layer in one place.
# Pagination limits, upload staging, and media host credentials come from the environment.
# The loader reads `.env` plus process variables and applies safe local defaults.

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ApiConfig(BaseModel):
    """Typed API runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    api_name: str = "Firm Content API"
    api_prefix: str = "/api"
    environment: str = "local"
    database_url: str
    default_page_size: int = 10
    max_page_size: int = 100
    allowed_origins: list[str] = Field(default_factory=list)
    upload_dir: Path = Path("uploads")
    media_cloud_name: str = ""
    media_api_key: str = ""
    media_api_secret: str = ""
    media_base_url: str = "https://api.cloudinary.com/v1_1"
    media_root_folder: str = "ca-firm"
    media_timeout_seconds: int = 30
    app_version: str = "0.1.0"

    @field_validator("api_prefix")
    @classmethod
    def validate_api_prefix(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("api_prefix must start with '/'.")
        return value.rstrip("/")

    @field_validator("default_page_size", "max_page_size", "media_timeout_seconds")
    @classmethod
    def validate_positive_ints(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Value must be greater than 0.")
        return value

    def media_folder(self, entity_folder: str) -> str:
        root = self.media_root_folder.strip("/")
        return f"{root}/{entity_folder}" if root else entity_folder


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "y", "on"}:
        return True
    if value in {"0", "false", "no", "n", "off"}:
        return False
    raise ValueError(f"{name} must be boolean-like, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_list(name: str, default: list[str] | None = None) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default or [])
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_api_config(*, load_env: bool = True) -> ApiConfig:
    """Load API configuration from `.env` and process environment."""

    if load_env:
        load_dotenv()

    config_values: dict[str, object] = {
        "api_name": os.getenv("API_NAME", "Firm Content API"),
        "api_prefix": os.getenv("API_PREFIX", "/api"),
        "environment": os.getenv("ENV", "local"),
        "database_url": os.getenv("DATABASE_URL", ""),
        "default_page_size": _env_int("API_DEFAULT_PAGE_SIZE", 10),
        "max_page_size": _env_int("API_MAX_PAGE_SIZE", 100),
        "allowed_origins": _env_list("API_ALLOWED_ORIGINS", ["*"] if _env_bool("API_OPEN_CORS", True) else []),
        "upload_dir": Path(os.getenv("UPLOAD_DIR", "uploads")),
        "media_cloud_name": os.getenv("CLOUDINARY_CLOUD_NAME", ""),
        "media_api_key": os.getenv("CLOUDINARY_API_KEY", ""),
        "media_api_secret": os.getenv("CLOUDINARY_API_SECRET", ""),
        "media_base_url": os.getenv("CLOUDINARY_BASE_URL", "https://api.cloudinary.com/v1_1"),
        "media_root_folder": os.getenv("MEDIA_ROOT_FOLDER", "ca-firm"),
        "media_timeout_seconds": _env_int("MEDIA_TIMEOUT_SECONDS", 30),
        "app_version": os.getenv("APP_VERSION", "0.1.0"),
    }
    if not config_values["database_url"]:
        raise RuntimeError("DATABASE_URL is required for API startup.")

    return ApiConfig.model_validate(config_values)


@lru_cache(maxsize=1)
def get_api_config() -> ApiConfig:
    """Cached accessor for API config."""

    return load_api_config()
