# This file implements inbound contact inquiries and the read-side statistics over them.
# Inquiries start as `pending`/unread and are moved along by staff through status and read flags.
# Monthly trends are bucketed in Python so the same code runs on SQLite and PostgreSQL.

from __future__ import annotations

from collections import Counter
from datetime import UTC, datetime
from typing import Any

from src.api.ddl import CONTACT_TABLE
from src.api.error_handlers import NotFoundError, ValidationError
from src.api.identifiers import new_document_id, utc_now_iso
from src.api.pagination import PaginationSpec
from src.api.schemas.contact_schemas import CONTACT_STATUSES, ContactCreate
from src.api.services.content_service import LOGGER, ContentService, contains_clause, like_pattern

CONTACT_ORDER_SQL = "created_at DESC, id DESC"
SEARCH_COLUMNS: tuple[str, ...] = ("first_name", "last_name", "email", "service", "query")
TOP_SERVICES_LIMIT = 10
TREND_MONTHS = 12


def months_ago(now: datetime, months: int) -> datetime:
    """Same day-of-month `months` back, clamped to the end of shorter months."""

    month_index = now.year * 12 + (now.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    for day in (now.day, 30, 29, 28):
        try:
            return now.replace(year=year, month=month, day=day)
        except ValueError:
            continue
    raise ValueError(f"Cannot shift {now!r} back by {months} months")


class ContactService(ContentService):
    """Lifecycle operations and statistics for contact inquiries."""

    table_name = CONTACT_TABLE

    def create_contact(self, payload: ContactCreate) -> dict[str, Any]:
        now = utc_now_iso()
        contact_id = new_document_id()
        self._insert(
            {
                "id": contact_id,
                "first_name": payload.first_name,
                "last_name": payload.last_name,
                "mobile_no": payload.mobile_no,
                "email": payload.email.lower(),
                "service": payload.service,
                "query": payload.query,
                "status": "pending",
                "is_read": False,
                "created_at": now,
                "updated_at": now,
            }
        )
        LOGGER.info("Received contact inquiry %s", contact_id)
        return self.get_contact(contact_id)

    def list_contacts(
        self,
        *,
        status: str | None,
        is_read: bool | None,
        service: str | None,
        search: str | None,
        pagination: PaginationSpec,
    ) -> dict[str, Any]:
        where_clauses: list[str] = []
        params: dict[str, Any] = {}

        if status:
            where_clauses.append("status = :status")
            params["status"] = status
        if is_read is not None:
            where_clauses.append("is_read = :is_read")
            params["is_read"] = is_read
        if service and service.strip():
            where_clauses.append(contains_clause("service", "service"))
            params["service"] = like_pattern(service)
        if search and search.strip():
            matches = " OR ".join(contains_clause(column, "search") for column in SEARCH_COLUMNS)
            where_clauses.append(f"({matches})")
            params["search"] = like_pattern(search)

        rows, total_count = self._fetch_page(
            where_clauses=where_clauses,
            params=params,
            order_sql=CONTACT_ORDER_SQL,
            pagination=pagination,
        )
        return {
            "rows": [self._to_contact(row) for row in rows],
            "total_count": total_count,
            "statistics": {
                "status_breakdown": self._status_breakdown(),
                "unread_count": self._unread_count(),
            },
        }

    def get_contact(self, contact_id: str) -> dict[str, Any]:
        row = self._get_row(contact_id)
        if row is None:
            raise NotFoundError("Contact inquiry not found")
        return self._to_contact(row)

    def update_status(self, contact_id: str, status: str | None) -> dict[str, Any]:
        if status not in CONTACT_STATUSES:
            raise ValidationError(
                f"Invalid status. Valid statuses are: {', '.join(CONTACT_STATUSES)}"
            )
        if self._get_row(contact_id) is None:
            raise NotFoundError("Contact inquiry not found")
        self._update_columns(contact_id, {"status": status, "updated_at": utc_now_iso()})
        return self.get_contact(contact_id)

    def toggle_read(self, contact_id: str) -> dict[str, Any]:
        row = self._get_row(contact_id)
        if row is None:
            raise NotFoundError("Contact inquiry not found")
        self._update_columns(
            contact_id,
            {"is_read": not bool(row["is_read"]), "updated_at": utc_now_iso()},
        )
        return self.get_contact(contact_id)

    def delete_contact(self, contact_id: str) -> None:
        if self._get_row(contact_id) is None:
            raise NotFoundError("Contact inquiry not found")
        self._delete_row(contact_id)
        LOGGER.info("Deleted contact inquiry %s", contact_id)

    def get_stats(self, *, now: datetime | None = None) -> dict[str, Any]:
        total = int(self.db.fetch_scalar(f"SELECT COUNT(*) FROM {self.table_name}") or 0)
        service_rows = self.db.fetch_all(
            f"""
            SELECT service, COUNT(*) AS count
            FROM {self.table_name}
            GROUP BY service
            ORDER BY count DESC, service ASC
            LIMIT :limit
            """,
            {"limit": TOP_SERVICES_LIMIT},
        )
        return {
            "total_contacts": total,
            "unread_contacts": self._unread_count(),
            "status_breakdown": self._status_breakdown(),
            "top_services": [{"service": row["service"], "count": int(row["count"])} for row in service_rows],
            "monthly_trends": self._monthly_trends(now or datetime.now(tz=UTC)),
        }

    def _status_breakdown(self) -> list[dict[str, Any]]:
        rows = self.db.fetch_all(
            f"""
            SELECT status, COUNT(*) AS count
            FROM {self.table_name}
            GROUP BY status
            ORDER BY count DESC, status ASC
            """
        )
        return [{"status": row["status"], "count": int(row["count"])} for row in rows]

    def _unread_count(self) -> int:
        return int(
            self.db.fetch_scalar(
                f"SELECT COUNT(*) FROM {self.table_name} WHERE is_read = :is_read",
                {"is_read": False},
            )
            or 0
        )

    def _monthly_trends(self, now: datetime) -> list[dict[str, int]]:
        cutoff = months_ago(now.astimezone(UTC), TREND_MONTHS).isoformat(timespec="microseconds")
        rows = self.db.fetch_all(
            f"SELECT created_at FROM {self.table_name} WHERE created_at >= :cutoff",
            {"cutoff": cutoff},
        )
        buckets: Counter[tuple[int, int]] = Counter()
        for row in rows:
            created = datetime.fromisoformat(str(row["created_at"]))
            buckets[(created.year, created.month)] += 1
        return [
            {"year": year, "month": month, "count": count}
            for (year, month), count in sorted(buckets.items())
        ]

    @staticmethod
    def _to_contact(row: dict[str, Any]) -> dict[str, Any]:
        return {
            "id": row["id"],
            "first_name": row["first_name"],
            "last_name": row["last_name"],
            "mobile_no": row["mobile_no"],
            "email": row["email"],
            "service": row["service"],
            "query": row["query"],
            "status": row["status"],
            "is_read": bool(row["is_read"]),
            "created_at": row["created_at"],
            "updated_at": row["updated_at"],
        }
