# This file defines the clientage category endpoints.
# Categories are plain JSON resources; their client type lists can also be edited one entry at a time.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_clientage_service
from src.api.response_envelope import build_message_envelope, build_object_envelope
from src.api.schemas.clientage_schemas import (
    ClientageCategoryCreate,
    ClientageCategoryListResponseV1,
    ClientageCategoryResponseV1,
    ClientageCategoryUpdate,
    ClientTypeRequest,
)
from src.api.schemas.common import MessageResponse
from src.api.services.clientage_service import ClientageService

router = APIRouter(prefix="/clientage", tags=["clientage"])
ClientageServiceDep = Annotated[ClientageService, Depends(get_clientage_service)]


@router.get("", response_model=ClientageCategoryListResponseV1, response_model_exclude_none=True)
def list_clientage_categories(service: ClientageServiceDep) -> dict[str, object]:
    return build_object_envelope(data=service.list_categories())


@router.get(
    "/{category_id}",
    response_model=ClientageCategoryResponseV1,
    response_model_exclude_none=True,
)
def get_clientage_category(category_id: str, service: ClientageServiceDep) -> dict[str, object]:
    return build_object_envelope(data=service.get_category(category_id))


@router.post(
    "",
    status_code=201,
    response_model=ClientageCategoryResponseV1,
    response_model_exclude_none=True,
)
def create_clientage_category(
    payload: ClientageCategoryCreate,
    service: ClientageServiceDep,
) -> dict[str, object]:
    category = service.create_category(
        category_name=payload.category_name,
        client_types=payload.client_types,
    )
    return build_object_envelope(data=category, message="Category created successfully")


@router.put(
    "/{category_id}",
    response_model=ClientageCategoryResponseV1,
    response_model_exclude_none=True,
)
def update_clientage_category(
    category_id: str,
    payload: ClientageCategoryUpdate,
    service: ClientageServiceDep,
) -> dict[str, object]:
    category = service.update_category(
        category_id,
        category_name=payload.category_name,
        client_types=payload.client_types,
    )
    return build_object_envelope(data=category, message="Category updated successfully")


@router.delete("/{category_id}", response_model=MessageResponse, response_model_exclude_none=True)
def delete_clientage_category(category_id: str, service: ClientageServiceDep) -> dict[str, object]:
    service.delete_category(category_id)
    return build_message_envelope("Category deleted successfully")


@router.post(
    "/{category_id}/client-types",
    response_model=ClientageCategoryResponseV1,
    response_model_exclude_none=True,
)
def add_client_type(
    category_id: str,
    payload: ClientTypeRequest,
    service: ClientageServiceDep,
) -> dict[str, object]:
    category = service.add_client_type(category_id, payload.client_type)
    return build_object_envelope(data=category, message="Client type added successfully")


@router.delete(
    "/{category_id}/client-types",
    response_model=ClientageCategoryResponseV1,
    response_model_exclude_none=True,
)
def remove_client_type(
    category_id: str,
    payload: ClientTypeRequest,
    service: ClientageServiceDep,
) -> dict[str, object]:
    category = service.remove_client_type(category_id, payload.client_type)
    return build_object_envelope(data=category, message="Client type removed successfully")
