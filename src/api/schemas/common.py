# This file defines schema pieces reused by every content endpoint.
# Wire names are camelCase while Python attributes stay snake_case.
# These classes are also used by tests to validate response shape stability.

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequestModel(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class PaginationMetadata(CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next: bool
    has_prev: bool


class BlogPaginationMetadata(CamelModel):
    current_page: int
    total_pages: int
    total_blogs: int
    items_per_page: int
    has_next: bool
    has_prev: bool


class EnvelopeFields(BaseModel):
    success: bool
    message: str | None = None


class MessageResponse(EnvelopeFields):
    pass


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error_code: str
    errors: list[str] | None = None
    error: str | None = None
