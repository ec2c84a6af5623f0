# This file defines clientage category request and response contracts.

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from src.api.schemas.common import CamelModel, EnvelopeFields, RequestModel

NAME_MAX_LENGTH = 100


class ClientageCategoryCreate(RequestModel):
    category_name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    client_types: list[str] = Field(min_length=1)


class ClientageCategoryUpdate(RequestModel):
    category_name: str | None = Field(default=None, max_length=NAME_MAX_LENGTH)
    client_types: list[str] | None = None


class ClientTypeRequest(RequestModel):
    client_type: str | None = None


class ClientageCategoryV1(CamelModel):
    id: str
    category_name: str
    client_types: list[str]
    created_at: datetime
    updated_at: datetime


class ClientageCategoryResponseV1(EnvelopeFields):
    data: ClientageCategoryV1


class ClientageCategoryListResponseV1(EnvelopeFields):
    data: list[ClientageCategoryV1]
