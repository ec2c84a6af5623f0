# This file defines the service listing endpoints.
# Listings are created and edited through multipart forms; creation requires the `image` part.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from src.api.api_config import ApiConfig
from src.api.dependencies import get_config, get_pagination, get_service_listing_service
from src.api.pagination import PaginationSpec, build_pagination_meta
from src.api.response_envelope import build_list_envelope, build_message_envelope, build_object_envelope
from src.api.schemas.common import MessageResponse
from src.api.schemas.service_schemas import ServiceListingListResponseV1, ServiceListingResponseV1
from src.api.services.service_listing_service import ServiceListingService
from src.api.uploads import stage_upload

router = APIRouter(prefix="/services", tags=["services"])
ServiceListingDep = Annotated[ServiceListingService, Depends(get_service_listing_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
PaginationDep = Annotated[PaginationSpec, Depends(get_pagination)]


@router.get("", response_model=ServiceListingListResponseV1, response_model_exclude_none=True)
def list_services(
    service: ServiceListingDep,
    pagination: PaginationDep,
    is_active: bool | None = Query(default=None, alias="isActive"),
) -> dict[str, object]:
    result = service.list_services(is_active=is_active, pagination=pagination)
    return build_list_envelope(
        data=list(result["rows"]),
        pagination=build_pagination_meta(pagination=pagination, total_count=int(result["total_count"])),
    )


@router.get("/{service_id}", response_model=ServiceListingResponseV1, response_model_exclude_none=True)
def get_service(service_id: str, service: ServiceListingDep) -> dict[str, object]:
    return build_object_envelope(data=service.get_service(service_id))


@router.post(
    "",
    status_code=201,
    response_model=ServiceListingResponseV1,
    response_model_exclude_none=True,
)
def create_service(
    service: ServiceListingDep,
    config: ConfigDep,
    service_name: str | None = Form(default=None, alias="serviceName"),
    description: str | None = Form(default=None),
    beneficiary: str | None = Form(default=None),
    detail_benefits: list[str] | None = Form(default=None, alias="detailBenefits"),
    image: UploadFile | None = File(default=None),
) -> dict[str, object]:
    with stage_upload(image, config.upload_dir) as staged:
        listing = service.create_service(
            service_name=service_name,
            description=description,
            beneficiary=beneficiary,
            detail_benefits=detail_benefits,
            image=staged,
        )
    return build_object_envelope(data=listing, message="Service created successfully")


@router.put("/{service_id}", response_model=ServiceListingResponseV1, response_model_exclude_none=True)
def update_service(
    service_id: str,
    service: ServiceListingDep,
    config: ConfigDep,
    service_name: str | None = Form(default=None, alias="serviceName"),
    description: str | None = Form(default=None),
    beneficiary: str | None = Form(default=None),
    detail_benefits: list[str] | None = Form(default=None, alias="detailBenefits"),
    image: UploadFile | None = File(default=None),
) -> dict[str, object]:
    with stage_upload(image, config.upload_dir) as staged:
        listing = service.update_service(
            service_id,
            service_name=service_name,
            description=description,
            beneficiary=beneficiary,
            detail_benefits=detail_benefits,
            image=staged,
        )
    return build_object_envelope(data=listing, message="Service updated successfully")


@router.patch(
    "/{service_id}/toggle-status",
    response_model=ServiceListingResponseV1,
    response_model_exclude_none=True,
)
def toggle_service_status(service_id: str, service: ServiceListingDep) -> dict[str, object]:
    listing = service.toggle_status(service_id)
    state = "activated" if listing["is_active"] else "deactivated"
    return build_object_envelope(data=listing, message=f"Service {state} successfully")


@router.delete("/{service_id}", response_model=MessageResponse, response_model_exclude_none=True)
def delete_service(service_id: str, service: ServiceListingDep) -> dict[str, object]:
    service.delete_service(service_id)
    return build_message_envelope("Service deleted successfully")
