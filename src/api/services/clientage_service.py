# This file implements the clientage taxonomy: named categories holding lists of client types.
# Category names are unique regardless of case; blank client types are dropped on write.

from __future__ import annotations

from typing import Any

from src.api.db_access import DuplicateKeyError
from src.api.ddl import CLIENTAGE_TABLE
from src.api.error_handlers import NotFoundError, ValidationError
from src.api.field_parsing import clean_text
from src.api.identifiers import new_document_id, utc_now_iso
from src.api.schemas.clientage_schemas import NAME_MAX_LENGTH
from src.api.services.content_service import LOGGER, ContentService, dump_list, load_list

DUPLICATE_CATEGORY_MESSAGE = "Category with this name already exists"


def clean_client_types(client_types: list[str]) -> list[str]:
    cleaned = [item.strip() for item in client_types if item and item.strip()]
    too_long = [item for item in cleaned if len(item) > NAME_MAX_LENGTH]
    if too_long:
        raise ValidationError(
            "Validation error",
            errors=[f"Client type cannot exceed {NAME_MAX_LENGTH} characters: {item}" for item in too_long],
        )
    return cleaned


class ClientageService(ContentService):
    """Lifecycle operations for clientage categories."""

    table_name = CLIENTAGE_TABLE

    def list_categories(self) -> list[dict[str, Any]]:
        rows = self.db.fetch_all(f"SELECT * FROM {self.table_name} ORDER BY category_name ASC")
        return [self._to_category(row) for row in rows]

    def get_category(self, category_id: str) -> dict[str, Any]:
        row = self._get_row(category_id)
        if row is None:
            raise NotFoundError("Category not found")
        return self._to_category(row)

    def create_category(self, *, category_name: str, client_types: list[str]) -> dict[str, Any]:
        name = clean_text(category_name)
        if not name:
            raise ValidationError.missing_fields(["categoryName"], "Category name is required")
        cleaned_types = clean_client_types(client_types)
        if not cleaned_types:
            raise ValidationError("Client types array is required and cannot be empty")

        if self._find_by_name(name) is not None:
            raise ValidationError.duplicate(DUPLICATE_CATEGORY_MESSAGE)

        now = utc_now_iso()
        category_id = new_document_id()
        try:
            self._insert(
                {
                    "id": category_id,
                    "category_name": name,
                    "client_types_json": dump_list(cleaned_types),
                    "created_at": now,
                    "updated_at": now,
                }
            )
        except DuplicateKeyError as exc:
            raise ValidationError.duplicate(DUPLICATE_CATEGORY_MESSAGE) from exc

        LOGGER.info("Created clientage category %s", category_id)
        return self.get_category(category_id)

    def update_category(
        self,
        category_id: str,
        *,
        category_name: str | None = None,
        client_types: list[str] | None = None,
    ) -> dict[str, Any]:
        row = self._get_row(category_id)
        if row is None:
            raise NotFoundError("Category not found")

        updates: dict[str, Any] = {}
        name = clean_text(category_name)
        if name and name != row["category_name"]:
            existing = self._find_by_name(name, exclude_id=category_id)
            if existing is not None:
                raise ValidationError.duplicate(DUPLICATE_CATEGORY_MESSAGE)
            updates["category_name"] = name
        if client_types is not None:
            updates["client_types_json"] = dump_list(clean_client_types(client_types))

        updates["updated_at"] = utc_now_iso()
        try:
            self._update_columns(category_id, updates)
        except DuplicateKeyError as exc:
            raise ValidationError.duplicate(DUPLICATE_CATEGORY_MESSAGE) from exc
        return self.get_category(category_id)

    def delete_category(self, category_id: str) -> None:
        if self._get_row(category_id) is None:
            raise NotFoundError("Category not found")
        self._delete_row(category_id)
        LOGGER.info("Deleted clientage category %s", category_id)

    def add_client_type(self, category_id: str, client_type: str | None) -> dict[str, Any]:
        value = clean_text(client_type)
        if not value:
            raise ValidationError.missing_fields(["clientType"], "Client type is required")

        row = self._get_row(category_id)
        if row is None:
            raise NotFoundError("Category not found")

        current = load_list(row.get("client_types_json"))
        if value in current:
            raise ValidationError.duplicate("Client type already exists in this category")
        current.extend(clean_client_types([value]))
        self._update_columns(
            category_id,
            {"client_types_json": dump_list(current), "updated_at": utc_now_iso()},
        )
        return self.get_category(category_id)

    def remove_client_type(self, category_id: str, client_type: str | None) -> dict[str, Any]:
        if not client_type:
            raise ValidationError.missing_fields(["clientType"], "Client type is required")

        row = self._get_row(category_id)
        if row is None:
            raise NotFoundError("Category not found")

        remaining = [item for item in load_list(row.get("client_types_json")) if item != client_type]
        self._update_columns(
            category_id,
            {"client_types_json": dump_list(remaining), "updated_at": utc_now_iso()},
        )
        return self.get_category(category_id)

    def _find_by_name(self, name: str, *, exclude_id: str | None = None) -> dict[str, Any] | None:
        query = f"SELECT * FROM {self.table_name} WHERE LOWER(category_name) = LOWER(:name)"
        params: dict[str, Any] = {"name": name}
        if exclude_id is not None:
            query += " AND id <> :exclude_id"
            params["exclude_id"] = exclude_id
        return self.db.fetch_one(query, params)

    @staticmethod
    def _to_category(row: dict[str, Any]) -> dict[str, Any]:
        return {
            "id": row["id"],
            "category_name": row["category_name"],
            "client_types": load_list(row.get("client_types_json")),
            "created_at": row["created_at"],
            "updated_at": row["updated_at"],
        }
