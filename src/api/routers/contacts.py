# This file defines the contact inquiry endpoints.
# Submitting an inquiry is a JSON POST; staff endpoints list, triage, and summarize inquiries.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_contact_service, get_pagination
from src.api.pagination import PaginationSpec, build_pagination_meta
from src.api.response_envelope import build_list_envelope, build_message_envelope, build_object_envelope
from src.api.schemas.common import MessageResponse
from src.api.schemas.contact_schemas import (
    ContactCreate,
    ContactListResponseV1,
    ContactResponseV1,
    ContactStatsResponseV1,
    ContactStatusUpdate,
)
from src.api.services.contact_service import ContactService

router = APIRouter(prefix="/contacts", tags=["contacts"])
ContactServiceDep = Annotated[ContactService, Depends(get_contact_service)]
PaginationDep = Annotated[PaginationSpec, Depends(get_pagination)]


@router.post("", status_code=201, response_model=ContactResponseV1, response_model_exclude_none=True)
def create_contact(payload: ContactCreate, service: ContactServiceDep) -> dict[str, object]:
    contact = service.create_contact(payload)
    return build_object_envelope(
        data=contact,
        message="Your inquiry has been submitted successfully. We will get back to you soon!",
    )


@router.get("", response_model=ContactListResponseV1, response_model_exclude_none=True)
def list_contacts(
    service: ContactServiceDep,
    pagination: PaginationDep,
    status: str | None = Query(default=None),
    is_read: bool | None = Query(default=None, alias="isRead"),
    service_name: str | None = Query(default=None, alias="service"),
    search: str | None = Query(default=None),
) -> dict[str, object]:
    result = service.list_contacts(
        status=status,
        is_read=is_read,
        service=service_name,
        search=search,
        pagination=pagination,
    )
    return build_list_envelope(
        data=list(result["rows"]),
        pagination=build_pagination_meta(pagination=pagination, total_count=int(result["total_count"])),
        statistics=result["statistics"],
    )


@router.get("/stats", response_model=ContactStatsResponseV1, response_model_exclude_none=True)
def contact_stats(service: ContactServiceDep) -> dict[str, object]:
    return build_object_envelope(data=service.get_stats())


@router.get("/{contact_id}", response_model=ContactResponseV1, response_model_exclude_none=True)
def get_contact(contact_id: str, service: ContactServiceDep) -> dict[str, object]:
    return build_object_envelope(data=service.get_contact(contact_id))


@router.patch(
    "/{contact_id}/status",
    response_model=ContactResponseV1,
    response_model_exclude_none=True,
)
def update_contact_status(
    contact_id: str,
    payload: ContactStatusUpdate,
    service: ContactServiceDep,
) -> dict[str, object]:
    contact = service.update_status(contact_id, payload.status)
    return build_object_envelope(data=contact, message="Contact status updated successfully")


@router.patch(
    "/{contact_id}/read-status",
    response_model=ContactResponseV1,
    response_model_exclude_none=True,
)
def toggle_contact_read_status(contact_id: str, service: ContactServiceDep) -> dict[str, object]:
    contact = service.toggle_read(contact_id)
    state = "read" if contact["is_read"] else "unread"
    return build_object_envelope(data=contact, message=f"Contact marked as {state}")


@router.delete("/{contact_id}", response_model=MessageResponse, response_model_exclude_none=True)
def delete_contact(contact_id: str, service: ContactServiceDep) -> dict[str, object]:
    service.delete_contact(contact_id)
    return build_message_envelope("Contact inquiry deleted successfully")
