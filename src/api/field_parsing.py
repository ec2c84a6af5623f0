# This file normalizes the loosely-typed inputs that arrive from forms and JSON bodies.
# Array fields may be a native list, a JSON array string, or a comma-delimited string;
# one parser turns all three into a clean list so every resource behaves the same way.
# It also holds the small derived-field rules (read time, required checks, mobile numbers).

from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal

WORDS_PER_MINUTE = 200

_MOBILE_CHARS_RE = re.compile(r"^\+?[\d\s().\-]+$")
MOBILE_MIN_DIGITS = 10
MOBILE_MAX_DIGITS = 15


@dataclass(frozen=True)
class ListInput:
    """Raw array input tagged by the shape it arrived in."""

    kind: Literal["list", "json", "csv"]
    value: Any


def classify_list_input(raw: str | Sequence[str] | None) -> ListInput | None:
    """Tag a raw array value; `None` means the field was not supplied."""

    if raw is None:
        return None
    if not isinstance(raw, str):
        items = list(raw)
        # A single repeated form value is indistinguishable from a plain string.
        if len(items) == 1 and isinstance(items[0], str):
            return classify_list_input(items[0])
        return ListInput(kind="list", value=items)

    text = raw.strip()
    if text.startswith("["):
        try:
            decoded = json.loads(text)
        except json.JSONDecodeError:
            return ListInput(kind="csv", value=text)
        if isinstance(decoded, list):
            return ListInput(kind="json", value=decoded)
    return ListInput(kind="csv", value=text)


def parse_list_field(raw: str | Sequence[str] | None) -> list[str] | None:
    """Normalize an array field into trimmed, non-blank strings.

    >>> parse_list_field("A, B ,C")
    ['A', 'B', 'C']
    >>> parse_list_field('["A","B"]')
    ['A', 'B']
    """

    tagged = classify_list_input(raw)
    if tagged is None:
        return None
    if tagged.kind == "csv":
        items: list[Any] = tagged.value.split(",")
    else:
        items = list(tagged.value)
    cleaned = [str(item).strip() for item in items if item is not None]
    return [item for item in cleaned if item]


def clean_text(value: str | None) -> str | None:
    """Trim a scalar form value; blank strings count as not supplied."""

    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def find_missing_fields(values: Mapping[str, Any], required: Sequence[str]) -> list[str]:
    missing: list[str] = []
    for field in required:
        value = values.get(field)
        if value is None:
            missing.append(field)
        elif isinstance(value, str) and not value.strip():
            missing.append(field)
        elif isinstance(value, (list, tuple)) and not value:
            missing.append(field)
    return missing


def count_words(content: str) -> int:
    return len(content.split())


def calculate_read_time(content: str) -> int:
    """Minutes to read at 200 words per minute, never less than one."""

    return max(1, math.ceil(count_words(content) / WORDS_PER_MINUTE))


def is_valid_mobile(value: str) -> bool:
    """Accept digits with optional leading `+`, spaces, dots, dashes and parentheses; 10-15 digits."""

    candidate = value.strip()
    if not _MOBILE_CHARS_RE.match(candidate):
        return False
    digits = sum(char.isdigit() for char in candidate)
    return MOBILE_MIN_DIGITS <= digits <= MOBILE_MAX_DIGITS

