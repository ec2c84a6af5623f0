# This file provides shared helpers for API endpoint tests.
# Services run for real against a temporary SQLite file; only the media host is faked.
# The helpers build consistent config objects and scoped TestClient contexts.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from fastapi.testclient import TestClient

from src.api.api_config import ApiConfig
from src.api.app import app
from src.api.db_access import DatabaseClient
from src.api.dependencies import (
    get_blog_service,
    get_clientage_service,
    get_config,
    get_contact_service,
    get_database_client,
    get_service_listing_service,
    get_team_service,
)
from src.api.media_client import MediaAsset, MediaDeleteError, MediaUploadError
from src.api.services.blog_service import BlogService
from src.api.services.clientage_service import ClientageService
from src.api.services.contact_service import ContactService
from src.api.services.service_listing_service import ServiceListingService
from src.api.services.team_service import TeamService

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-bytes"


def build_test_config(tmp_path: Path, **overrides: Any) -> ApiConfig:
    """Create deterministic API config for tests."""

    values: dict[str, Any] = {
        "api_name": "Test Content API",
        "api_prefix": "/api",
        "environment": "test",
        "database_url": f"sqlite:///{tmp_path / 'content.db'}",
        "default_page_size": 10,
        "max_page_size": 100,
        "allowed_origins": [],
        "upload_dir": tmp_path / "uploads",
        "media_cloud_name": "test-cloud",
        "media_api_key": "key",
        "media_api_secret": "secret",
        "media_root_folder": "ca-firm",
        "app_version": "0.1.0",
    }
    values.update(overrides)
    return ApiConfig(**values)


def build_test_db(config: ApiConfig) -> DatabaseClient:
    db_client = DatabaseClient(database_url=config.database_url)
    db_client.init_schema()
    return db_client


def image_file(name: str = "photo.png") -> dict[str, tuple[str, bytes, str]]:
    return {"image": (name, PNG_BYTES, "image/png")}


class FakeMediaClient:
    """In-memory stand-in for the media host that records every call."""

    def __init__(self, *, fail_uploads: bool = False, fail_deletes: bool = False) -> None:
        self.fail_uploads = fail_uploads
        self.fail_deletes = fail_deletes
        self.uploads: list[dict[str, Any]] = []
        self.deleted: list[str] = []
        self.delete_attempts: list[str] = []
        self._counter = 0

    def upload_image(self, file_path: Path, *, folder: str, transformation: str | None = None) -> MediaAsset:
        self.uploads.append(
            {
                "path": Path(file_path),
                "existed": Path(file_path).exists(),
                "folder": folder,
                "transformation": transformation,
            }
        )
        if self.fail_uploads:
            raise MediaUploadError("media host unavailable")
        self._counter += 1
        public_id = f"{folder}/asset-{self._counter}"
        return MediaAsset(url=f"https://media.test/{public_id}.png", public_id=public_id)

    def delete_image(self, public_id: str) -> None:
        self.delete_attempts.append(public_id)
        if self.fail_deletes:
            raise MediaDeleteError("media host unavailable")
        self.deleted.append(public_id)


class FakeDBClient:
    """Simple fake DB dependency for readiness endpoint tests."""

    def __init__(self, *, connected: bool = True, existing_tables: set[str] | None = None) -> None:
        self._connected = connected
        self._tables = existing_tables if existing_tables is not None else set()

    def can_connect(self) -> bool:
        return self._connected

    def table_exists(self, table_name: str) -> bool:
        return self._connected and table_name in self._tables


@contextmanager
def api_test_client(
    *,
    config: ApiConfig,
    db_client: Any | None = None,
    media_client: Any | None = None,
    raise_server_exceptions: bool = True,
) -> Iterator[TestClient]:
    """Yield a TestClient whose services share one test database and fake media host."""

    db = db_client if db_client is not None else build_test_db(config)
    media = media_client if media_client is not None else FakeMediaClient()

    app.dependency_overrides[get_config] = lambda: config
    app.dependency_overrides[get_database_client] = lambda: db
    if isinstance(db, DatabaseClient):
        blog_service = BlogService(config=config, db=db, media=media)
        listing_service = ServiceListingService(config=config, db=db, media=media)
        team_service = TeamService(config=config, db=db, media=media)
        clientage_service = ClientageService(config=config, db=db)
        contact_service = ContactService(config=config, db=db)
        app.dependency_overrides[get_blog_service] = lambda: blog_service
        app.dependency_overrides[get_service_listing_service] = lambda: listing_service
        app.dependency_overrides[get_team_service] = lambda: team_service
        app.dependency_overrides[get_clientage_service] = lambda: clientage_service
        app.dependency_overrides[get_contact_service] = lambda: contact_service

    try:
        with TestClient(app, raise_server_exceptions=raise_server_exceptions) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
