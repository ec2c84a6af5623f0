# This file defines service listing response contracts.

from __future__ import annotations

from datetime import datetime

from src.api.schemas.common import CamelModel, EnvelopeFields, PaginationMetadata


class ServiceListingV1(CamelModel):
    id: str
    service_name: str
    image: str
    image_public_id: str | None = None
    description: str
    detail_benefits: list[str]
    beneficiary: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ServiceListingResponseV1(EnvelopeFields):
    data: ServiceListingV1


class ServiceListingListResponseV1(EnvelopeFields):
    data: list[ServiceListingV1]
    pagination: PaginationMetadata
