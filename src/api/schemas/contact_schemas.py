# This file defines contact inquiry request and response contracts.
# Mobile numbers and email addresses are format-checked at the request boundary.

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import EmailStr, Field, field_validator

from src.api.field_parsing import is_valid_mobile
from src.api.schemas.common import CamelModel, EnvelopeFields, PaginationMetadata, RequestModel

ContactStatus = Literal["pending", "in-progress", "resolved", "closed"]
CONTACT_STATUSES: tuple[str, ...] = ("pending", "in-progress", "resolved", "closed")


class ContactCreate(RequestModel):
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    mobile_no: str = Field(min_length=1)
    email: EmailStr
    service: str = Field(min_length=1, max_length=100)
    query: str = Field(min_length=1, max_length=1000)

    @field_validator("mobile_no")
    @classmethod
    def validate_mobile_no(cls, value: str) -> str:
        if not is_valid_mobile(value):
            raise ValueError("Please enter a valid mobile number")
        return value

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()


class ContactStatusUpdate(RequestModel):
    status: str | None = None


class ContactV1(CamelModel):
    id: str
    first_name: str
    last_name: str
    mobile_no: str
    email: str
    service: str
    query: str
    status: ContactStatus
    is_read: bool
    created_at: datetime
    updated_at: datetime


class ContactResponseV1(EnvelopeFields):
    data: ContactV1


class StatusCountV1(CamelModel):
    status: str
    count: int


class ServiceCountV1(CamelModel):
    service: str
    count: int


class MonthlyCountV1(CamelModel):
    year: int
    month: int
    count: int


class ContactListStatisticsV1(CamelModel):
    status_breakdown: list[StatusCountV1]
    unread_count: int


class ContactListResponseV1(EnvelopeFields):
    data: list[ContactV1]
    pagination: PaginationMetadata
    statistics: ContactListStatisticsV1


class ContactStatsV1(CamelModel):
    total_contacts: int
    unread_contacts: int
    status_breakdown: list[StatusCountV1]
    top_services: list[ServiceCountV1]
    monthly_trends: list[MonthlyCountV1]


class ContactStatsResponseV1(EnvelopeFields):
    data: ContactStatsV1
