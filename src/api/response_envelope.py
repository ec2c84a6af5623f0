# This file builds the success envelope shared by every content endpoint.
# Payloads sit under a resource-specific key (`data`, `blog`, `blogs`, `categories`).
# The helpers return plain dictionaries that Pydantic response models validate at runtime.

from __future__ import annotations

from typing import Any


def build_object_envelope(
    *,
    data: Any,
    message: str | None = None,
    payload_key: str = "data",
    **extra: Any,
) -> dict[str, Any]:
    """Build the standard single-payload envelope."""

    payload: dict[str, Any] = {"success": True}
    if message is not None:
        payload["message"] = message
    payload[payload_key] = data
    payload.update(extra)
    return payload


def build_list_envelope(
    *,
    data: list[dict[str, Any]],
    pagination: dict[str, Any],
    payload_key: str = "data",
    message: str | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build the standard paginated list envelope."""

    return build_object_envelope(
        data=data,
        message=message,
        payload_key=payload_key,
        pagination=pagination,
        **extra,
    )


def build_message_envelope(message: str) -> dict[str, Any]:
    """Envelope for operations that return no payload, such as deletes."""

    return {"success": True, "message": message}
