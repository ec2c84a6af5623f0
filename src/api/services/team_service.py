# This file implements the team member lifecycle, keyed by the human-readable employee ID.
# Members get EMP001-style IDs when none is supplied, must carry a profile image,
# and support a soft delete (hidden, image kept) besides the permanent delete.
# Read-side statistics over active members live here as well.

from __future__ import annotations

from typing import Any

from src.api.api_config import ApiConfig
from src.api.db_access import DatabaseClient, DuplicateKeyError
from src.api.ddl import TEAM_TABLE
from src.api.error_handlers import NotFoundError, ValidationError
from src.api.field_parsing import clean_text, find_missing_fields, parse_list_field
from src.api.identifiers import new_document_id, next_emp_id, normalize_emp_id, utc_now_iso
from src.api.image_lifecycle import TEAM_TRANSFORMATION, ImageManager
from src.api.media_client import MediaClient
from src.api.pagination import PaginationSpec
from src.api.services.content_service import (
    LOGGER,
    ContentService,
    contains_clause,
    dump_list,
    like_pattern,
    load_list,
)
from src.api.uploads import StagedUpload

TEAM_ORDER_SQL = "created_at DESC, emp_id DESC"
ALL_FILTER_VALUE = "all"
DUPLICATE_EMP_ID_MESSAGE = "Employee ID already exists"


def parse_experience(raw: str | int | None) -> int | None:
    """Years of experience as a non-negative integer; `None` when not supplied."""

    if raw is None:
        return None
    if isinstance(raw, int):
        value = raw
    else:
        text = raw.strip()
        if not text:
            return None
        try:
            value = int(text)
        except ValueError as exc:
            raise ValidationError(
                "Validation failed",
                errors=["experience must be a whole number of years"],
            ) from exc
    if value < 0:
        raise ValidationError("Validation failed", errors=["experience cannot be negative"])
    return value


class TeamService(ContentService):
    """Lifecycle operations and statistics for team members."""

    table_name = TEAM_TABLE

    def __init__(self, *, config: ApiConfig, db: DatabaseClient, media: MediaClient) -> None:
        super().__init__(config=config, db=db)
        self.images = ImageManager(
            media=media,
            folder=config.media_folder("team-members"),
            transformation=TEAM_TRANSFORMATION,
        )

    def list_members(
        self,
        *,
        department: str | None,
        role: str | None,
        is_active: bool = True,
        pagination: PaginationSpec,
    ) -> dict[str, Any]:
        where_clauses = ["is_active = :is_active"]
        params: dict[str, Any] = {"is_active": is_active}

        if department and department.strip().lower() != ALL_FILTER_VALUE:
            where_clauses.append(contains_clause("department", "department"))
            params["department"] = like_pattern(department)
        if role and role.strip().lower() != ALL_FILTER_VALUE:
            where_clauses.append(contains_clause("role", "role"))
            params["role"] = like_pattern(role)

        rows, total_count = self._fetch_page(
            where_clauses=where_clauses,
            params=params,
            order_sql=TEAM_ORDER_SQL,
            pagination=pagination,
        )
        return {"rows": [self._to_member(row) for row in rows], "total_count": total_count}

    def get_member(self, emp_id: str) -> dict[str, Any]:
        row = self._get_by_emp_id(emp_id, active_only=True)
        if row is None:
            raise NotFoundError("Team member not found")
        return self._to_member(row)

    def create_member(
        self,
        *,
        name: str | None,
        qualification: str | list[str] | None,
        experience: str | int | None,
        expertise: str | list[str] | None,
        role: str | None,
        info: str | None,
        about_me: str | None,
        department: str | None = None,
        emp_id: str | None = None,
        image: StagedUpload | None = None,
    ) -> dict[str, Any]:
        values: dict[str, Any] = {
            "name": clean_text(name),
            "qualification": parse_list_field(qualification),
            "experience": parse_experience(experience),
            "expertise": parse_list_field(expertise),
            "role": clean_text(role),
            "info": clean_text(info),
            "aboutMe": clean_text(about_me),
        }
        missing = find_missing_fields(values, list(values))
        if missing:
            raise ValidationError.missing_fields(missing)

        requested_emp_id = clean_text(emp_id)
        if requested_emp_id:
            requested_emp_id = normalize_emp_id(requested_emp_id)
            if self._get_by_emp_id(requested_emp_id, active_only=False) is not None:
                raise ValidationError.duplicate(DUPLICATE_EMP_ID_MESSAGE)

        if image is None:
            raise ValidationError.image_required("Profile image is required")

        asset = self.images.upload(image)
        assigned_emp_id = requested_emp_id or self._allocate_emp_id()
        now = utc_now_iso()
        columns = {
            "id": new_document_id(),
            "emp_id": assigned_emp_id,
            "name": values["name"],
            "qualification_json": dump_list(values["qualification"]),
            "experience": values["experience"],
            "expertise_json": dump_list(values["expertise"]),
            "department": clean_text(department),
            "role": values["role"],
            "info": values["info"],
            "about_me": values["aboutMe"],
            "image_public_id": asset.public_id,
            "image_url": asset.url,
            "is_active": True,
            "created_at": now,
            "updated_at": now,
        }
        try:
            self._insert(columns)
        except DuplicateKeyError as exc:
            # Another request claimed the same ID between allocation and insert.
            self.images.discard_remote(asset.public_id)
            raise ValidationError.duplicate(DUPLICATE_EMP_ID_MESSAGE) from exc
        except Exception:
            self.images.discard_remote(asset.public_id)
            raise

        LOGGER.info("Created team member %s", assigned_emp_id)
        return self._to_member(self._get_by_emp_id(assigned_emp_id, active_only=False) or columns)

    def update_member(
        self,
        emp_id: str,
        *,
        name: str | None = None,
        qualification: str | list[str] | None = None,
        experience: str | int | None = None,
        expertise: str | list[str] | None = None,
        department: str | None = None,
        role: str | None = None,
        info: str | None = None,
        about_me: str | None = None,
        image: StagedUpload | None = None,
    ) -> dict[str, Any]:
        row = self._get_by_emp_id(emp_id, active_only=False)
        if row is None:
            raise NotFoundError("Team member not found")

        updates: dict[str, Any] = {}
        for column, value in (("name", name), ("role", role), ("info", info), ("about_me", about_me)):
            if clean_text(value):
                updates[column] = clean_text(value)

        parsed_qualification = parse_list_field(qualification)
        if parsed_qualification:
            updates["qualification_json"] = dump_list(parsed_qualification)
        parsed_expertise = parse_list_field(expertise)
        if parsed_expertise:
            updates["expertise_json"] = dump_list(parsed_expertise)

        parsed_experience = parse_experience(experience)
        if parsed_experience is not None:
            updates["experience"] = parsed_experience
        if department is not None:
            # An explicit empty department clears it.
            updates["department"] = clean_text(department)

        if image is not None:
            asset = self.images.replace(image, row.get("image_public_id"))
            updates["image_public_id"] = asset.public_id
            updates["image_url"] = asset.url

        updates["updated_at"] = utc_now_iso()
        self._update_columns(row["id"], updates)
        LOGGER.info("Updated team member %s", row["emp_id"])
        return self._to_member(self._get_row(row["id"]) or row)

    def soft_delete_member(self, emp_id: str) -> None:
        row = self._get_by_emp_id(emp_id, active_only=False)
        if row is None:
            raise NotFoundError("Team member not found")
        self._update_columns(row["id"], {"is_active": False, "updated_at": utc_now_iso()})
        LOGGER.info("Deactivated team member %s", row["emp_id"])

    def hard_delete_member(self, emp_id: str) -> None:
        row = self._get_by_emp_id(emp_id, active_only=False)
        if row is None:
            raise NotFoundError("Team member not found")
        self.images.discard_remote(row.get("image_public_id"))
        self._delete_row(row["id"])
        LOGGER.info("Permanently deleted team member %s", row["emp_id"])

    def get_stats(self) -> dict[str, Any]:
        params = {"is_active": True}
        total_members = int(
            self.db.fetch_scalar(
                f"SELECT COUNT(*) FROM {self.table_name} WHERE is_active = :is_active",
                params,
            )
            or 0
        )
        department_rows = self.db.fetch_all(
            f"""
            SELECT department, COUNT(*) AS count
            FROM {self.table_name}
            WHERE is_active = :is_active
            GROUP BY department
            ORDER BY count DESC, department ASC
            """,
            params,
        )
        role_rows = self.db.fetch_all(
            f"""
            SELECT role, COUNT(*) AS count
            FROM {self.table_name}
            WHERE is_active = :is_active
            GROUP BY role
            ORDER BY count DESC, role ASC
            """,
            params,
        )
        average = self.db.fetch_scalar(
            f"SELECT AVG(experience) FROM {self.table_name} WHERE is_active = :is_active",
            params,
        )
        return {
            "total_members": total_members,
            "department_stats": [
                {"department": row["department"], "count": int(row["count"])} for row in department_rows
            ],
            "role_stats": [{"role": row["role"], "count": int(row["count"])} for row in role_rows],
            "average_experience": float(average) if average is not None else 0.0,
        }

    def _allocate_emp_id(self) -> str:
        rows = self.db.fetch_all(f"SELECT emp_id FROM {self.table_name}")
        return next_emp_id(row["emp_id"] for row in rows)

    def _get_by_emp_id(self, emp_id: str, *, active_only: bool) -> dict[str, Any] | None:
        query = f"SELECT * FROM {self.table_name} WHERE emp_id = :emp_id"
        params: dict[str, Any] = {"emp_id": normalize_emp_id(emp_id)}
        if active_only:
            query += " AND is_active = :is_active"
            params["is_active"] = True
        return self.db.fetch_one(query, params)

    @staticmethod
    def _to_member(row: dict[str, Any]) -> dict[str, Any]:
        return {
            "id": row["id"],
            "emp_id": row["emp_id"],
            "name": row["name"],
            "qualification": load_list(row.get("qualification_json")),
            "experience": int(row["experience"]),
            "expertise": load_list(row.get("expertise_json")),
            "department": row.get("department"),
            "role": row["role"],
            "info": row["info"],
            "about_me": row["about_me"],
            "image": {"id": row["image_public_id"], "url": row["image_url"]},
            "is_active": bool(row["is_active"]),
            "created_at": row["created_at"],
            "updated_at": row["updated_at"],
        }
