# This file implements the lifecycle of the firm's service listings.
# Every listing must carry an image at creation; replacing or deleting the listing
# replaces or deletes the hosted image with it.

from __future__ import annotations

from typing import Any

from src.api.api_config import ApiConfig
from src.api.db_access import DatabaseClient
from src.api.ddl import SERVICE_TABLE
from src.api.error_handlers import NotFoundError, ValidationError
from src.api.field_parsing import clean_text, find_missing_fields, parse_list_field
from src.api.identifiers import new_document_id, utc_now_iso
from src.api.image_lifecycle import ImageManager
from src.api.media_client import MediaClient
from src.api.pagination import PaginationSpec
from src.api.services.content_service import LOGGER, ContentService, dump_list, load_list
from src.api.uploads import StagedUpload

SERVICE_ORDER_SQL = "created_at DESC, id DESC"


class ServiceListingService(ContentService):
    """Lifecycle operations for service listings."""

    table_name = SERVICE_TABLE

    def __init__(self, *, config: ApiConfig, db: DatabaseClient, media: MediaClient) -> None:
        super().__init__(config=config, db=db)
        self.images = ImageManager(media=media, folder=config.media_folder("services"))

    def list_services(self, *, is_active: bool | None, pagination: PaginationSpec) -> dict[str, Any]:
        where_clauses: list[str] = []
        params: dict[str, Any] = {}
        if is_active is not None:
            where_clauses.append("is_active = :is_active")
            params["is_active"] = is_active

        rows, total_count = self._fetch_page(
            where_clauses=where_clauses,
            params=params,
            order_sql=SERVICE_ORDER_SQL,
            pagination=pagination,
        )
        return {"rows": [self._to_service(row) for row in rows], "total_count": total_count}

    def get_service(self, service_id: str) -> dict[str, Any]:
        row = self._get_row(service_id)
        if row is None:
            raise NotFoundError("Service not found")
        return self._to_service(row)

    def create_service(
        self,
        *,
        service_name: str | None,
        description: str | None,
        beneficiary: str | None,
        detail_benefits: str | list[str] | None = None,
        image: StagedUpload | None = None,
    ) -> dict[str, Any]:
        values = {
            "serviceName": clean_text(service_name),
            "description": clean_text(description),
            "beneficiary": clean_text(beneficiary),
        }
        missing = find_missing_fields(values, list(values))
        if missing:
            raise ValidationError.missing_fields(
                missing, "Service name, description, and beneficiary are required"
            )
        if image is None:
            raise ValidationError.image_required("Service image is required")

        asset = self.images.upload(image)
        now = utc_now_iso()
        service_id = new_document_id()
        columns = {
            "id": service_id,
            "service_name": values["serviceName"],
            "image_url": asset.url,
            "image_public_id": asset.public_id,
            "description": values["description"],
            "detail_benefits_json": dump_list(parse_list_field(detail_benefits) or []),
            "beneficiary": values["beneficiary"],
            "is_active": True,
            "created_at": now,
            "updated_at": now,
        }
        try:
            self._insert(columns)
        except Exception:
            self.images.discard_remote(asset.public_id)
            raise

        LOGGER.info("Created service %s", service_id)
        return self.get_service(service_id)

    def update_service(
        self,
        service_id: str,
        *,
        service_name: str | None = None,
        description: str | None = None,
        beneficiary: str | None = None,
        detail_benefits: str | list[str] | None = None,
        image: StagedUpload | None = None,
    ) -> dict[str, Any]:
        row = self._get_row(service_id)
        if row is None:
            raise NotFoundError("Service not found")

        updates: dict[str, Any] = {}
        for column, value in (
            ("service_name", service_name),
            ("description", description),
            ("beneficiary", beneficiary),
        ):
            if clean_text(value):
                updates[column] = clean_text(value)
        parsed_benefits = parse_list_field(detail_benefits)
        if parsed_benefits is not None:
            updates["detail_benefits_json"] = dump_list(parsed_benefits)

        if image is not None:
            asset = self.images.replace(image, row.get("image_public_id"))
            updates["image_url"] = asset.url
            updates["image_public_id"] = asset.public_id

        updates["updated_at"] = utc_now_iso()
        self._update_columns(service_id, updates)
        LOGGER.info("Updated service %s", service_id)
        return self.get_service(service_id)

    def toggle_status(self, service_id: str) -> dict[str, Any]:
        row = self._get_row(service_id)
        if row is None:
            raise NotFoundError("Service not found")
        self._update_columns(
            service_id,
            {"is_active": not bool(row["is_active"]), "updated_at": utc_now_iso()},
        )
        return self.get_service(service_id)

    def delete_service(self, service_id: str) -> None:
        row = self._get_row(service_id)
        if row is None:
            raise NotFoundError("Service not found")
        self.images.discard_remote(row.get("image_public_id"))
        self._delete_row(service_id)
        LOGGER.info("Deleted service %s", service_id)

    @staticmethod
    def _to_service(row: dict[str, Any]) -> dict[str, Any]:
        return {
            "id": row["id"],
            "service_name": row["service_name"],
            "image": row["image_url"],
            "image_public_id": row.get("image_public_id"),
            "description": row["description"],
            "detail_benefits": load_list(row.get("detail_benefits_json")),
            "beneficiary": row["beneficiary"],
            "is_active": bool(row["is_active"]),
            "created_at": row["created_at"],
            "updated_at": row["updated_at"],
        }
