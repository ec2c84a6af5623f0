# This file holds the query plumbing shared by the five content services.
# Each service owns one table; this base gives them id lookups, paginated listing,
# deletes, and the JSON encoding used for array columns.

from __future__ import annotations

import json
import logging
from typing import Any

from src.api.api_config import ApiConfig
from src.api.db_access import DatabaseClient
from src.api.pagination import PaginationSpec

LOGGER = logging.getLogger("content")


def like_pattern(term: str) -> str:
    """Case-insensitive substring pattern with LIKE wildcards escaped."""

    escaped = term.strip().lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def contains_clause(column: str, param: str) -> str:
    return f"LOWER({column}) LIKE :{param} ESCAPE '\\'"


def dump_list(values: list[str] | None) -> str:
    return json.dumps(list(values or []))


def load_list(raw: Any) -> list[str]:
    if raw is None or raw == "":
        return []
    if isinstance(raw, list):
        return [str(item) for item in raw]
    decoded = json.loads(raw)
    return [str(item) for item in decoded] if isinstance(decoded, list) else []


class ContentService:
    """Base class for table-backed content services."""

    table_name: str = ""

    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        self.config = config
        self.db = db

    def _get_row(self, document_id: str) -> dict[str, Any] | None:
        query = f"SELECT * FROM {self.table_name} WHERE id = :id"
        return self.db.fetch_one(query, {"id": document_id})

    def _fetch_page(
        self,
        *,
        where_clauses: list[str],
        params: dict[str, Any],
        order_sql: str,
        pagination: PaginationSpec,
    ) -> tuple[list[dict[str, Any]], int]:
        where_sql = " AND ".join(where_clauses) if where_clauses else "1 = 1"

        count_query = f"SELECT COUNT(*) AS total_count FROM {self.table_name} WHERE {where_sql}"
        total_count = int(self.db.fetch_scalar(count_query, params) or 0)

        data_query = f"""
        SELECT *
        FROM {self.table_name}
        WHERE {where_sql}
        ORDER BY {order_sql}
        LIMIT :limit OFFSET :offset
        """
        page_params = dict(params)
        page_params["limit"] = pagination.limit
        page_params["offset"] = pagination.offset
        rows = self.db.fetch_all(data_query, page_params)
        return rows, total_count

    def _update_columns(self, document_id: str, columns: dict[str, Any]) -> None:
        if not columns:
            return
        assignments = ", ".join(f"{column} = :{column}" for column in columns)
        params = dict(columns)
        params["id"] = document_id
        self.db.execute(f"UPDATE {self.table_name} SET {assignments} WHERE id = :id", params)

    def _insert(self, columns: dict[str, Any]) -> None:
        names = ", ".join(columns)
        placeholders = ", ".join(f":{column}" for column in columns)
        self.db.execute(f"INSERT INTO {self.table_name} ({names}) VALUES ({placeholders})", columns)

    def _delete_row(self, document_id: str) -> None:
        self.db.execute(f"DELETE FROM {self.table_name} WHERE id = :id", {"id": document_id})
