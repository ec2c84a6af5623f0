# This file allocates store identifiers and the human-readable team member IDs.
# Team member IDs follow EMP001, EMP002, ... by taking the highest existing number and adding one.
# The allocation is not atomic: two concurrent creations can compute the same ID, and the
# UNIQUE constraint on `emp_id` makes the second insert fail with a duplicate error.

from __future__ import annotations

import re
import uuid
from collections.abc import Iterable
from datetime import UTC, datetime

EMP_PREFIX = "EMP"
EMP_NUMBER_WIDTH = 3

_EMP_ID_RE = re.compile(rf"^{EMP_PREFIX}(\d+)$", re.IGNORECASE)


def new_document_id() -> str:
    return uuid.uuid4().hex


def utc_now_iso() -> str:
    """UTC timestamp with fixed microsecond precision so text order matches time order."""

    return datetime.now(tz=UTC).isoformat(timespec="microseconds")


def normalize_emp_id(value: str) -> str:
    return value.strip().upper()


def parse_emp_number(emp_id: str | None) -> int | None:
    if not emp_id:
        return None
    match = _EMP_ID_RE.match(emp_id.strip())
    return int(match.group(1)) if match else None


def format_emp_id(number: int) -> str:
    return f"{EMP_PREFIX}{number:0{EMP_NUMBER_WIDTH}d}"


def next_emp_id(existing_emp_ids: Iterable[str | None]) -> str:
    """Return the ID after the current maximum; custom IDs without a number are ignored."""

    numbers = [n for n in (parse_emp_number(emp_id) for emp_id in existing_emp_ids) if n is not None]
    return format_emp_id(max(numbers, default=0) + 1)
