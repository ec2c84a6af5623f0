# This file provides dependency factories for FastAPI routes and middleware.
# The database client, media client, and one service per resource are built once per process
# and shared through dependency injection, which is also the seam tests override.

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Query, Request

from src.api.api_config import ApiConfig, get_api_config
from src.api.db_access import DatabaseClient
from src.api.error_handlers import APIError
from src.api.media_client import MediaClient
from src.api.pagination import PaginationSpec, normalize_pagination
from src.api.services.blog_service import BlogService
from src.api.services.clientage_service import ClientageService
from src.api.services.contact_service import ContactService
from src.api.services.service_listing_service import ServiceListingService
from src.api.services.team_service import TeamService


@lru_cache(maxsize=1)
def get_database_client() -> DatabaseClient:
    config = get_api_config()
    db_client = DatabaseClient(database_url=config.database_url)
    db_client.init_schema()
    return db_client


@lru_cache(maxsize=1)
def get_media_client() -> MediaClient:
    config = get_api_config()
    return MediaClient(
        cloud_name=config.media_cloud_name,
        api_key=config.media_api_key,
        api_secret=config.media_api_secret,
        base_url=config.media_base_url,
        timeout_seconds=config.media_timeout_seconds,
    )


@lru_cache(maxsize=1)
def get_blog_service() -> BlogService:
    return BlogService(config=get_api_config(), db=get_database_client(), media=get_media_client())


@lru_cache(maxsize=1)
def get_service_listing_service() -> ServiceListingService:
    return ServiceListingService(
        config=get_api_config(),
        db=get_database_client(),
        media=get_media_client(),
    )


@lru_cache(maxsize=1)
def get_team_service() -> TeamService:
    return TeamService(config=get_api_config(), db=get_database_client(), media=get_media_client())


@lru_cache(maxsize=1)
def get_clientage_service() -> ClientageService:
    return ClientageService(config=get_api_config(), db=get_database_client())


@lru_cache(maxsize=1)
def get_contact_service() -> ContactService:
    return ContactService(config=get_api_config(), db=get_database_client())


def get_config() -> ApiConfig:
    return get_api_config()


def get_pagination(
    config: Annotated[ApiConfig, Depends(get_config)],
    page: int | None = Query(default=None),
    limit: int | None = Query(default=None),
) -> PaginationSpec:
    try:
        return normalize_pagination(
            page=page,
            limit=limit,
            default_limit=config.default_page_size,
            max_limit=config.max_page_size,
        )
    except ValueError as exc:
        raise APIError(
            status_code=400,
            error_code="INVALID_QUERY_PARAM",
            message=str(exc),
        ) from exc


async def get_submitted_fields(request: Request) -> frozenset[str]:
    """Names of the form fields present in the request, including empty ones."""

    form = await request.form()
    return frozenset(form.keys())


def clearable_form_value(value: str | None, field: str, submitted: frozenset[str]) -> str | None:
    # Form parsing turns an empty value into None; an explicitly sent empty field means "clear".
    if value is None and field in submitted:
        return ""
    return value
