# This file tests that every failure path renders the shared error envelope.

from __future__ import annotations

from pathlib import Path

from src.api.app import app
from src.api.dependencies import get_blog_service
from tests.api.support import FakeDBClient, api_test_client, build_test_config


class ExplodingBlogService:
    def get_blog(self, blog_id: str) -> dict[str, object]:
        raise RuntimeError(f"database exploded while reading {blog_id}")


def test_unexpected_errors_become_opaque_500(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    with api_test_client(
        config=config,
        db_client=FakeDBClient(),
        raise_server_exceptions=False,
    ) as client:
        app.dependency_overrides[get_blog_service] = ExplodingBlogService
        response = client.get("/api/blogs/abc")

    assert response.status_code == 500
    payload = response.json()
    assert payload == {
        "success": False,
        "message": "Internal server error",
        "error_code": "INTERNAL_SERVER_ERROR",
    }
    assert "exploded" not in response.text


def test_unknown_route_uses_error_envelope(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    with api_test_client(config=config, db_client=FakeDBClient()) as client:
        response = client.get("/api/nothing-here")

    assert response.status_code == 404
    payload = response.json()
    assert payload["success"] is False
    assert payload["error_code"] == "HTTP_ERROR"


def test_request_validation_errors_map_to_400(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    with api_test_client(config=config) as client:
        response = client.get("/api/team", params={"isActive": "maybe"})

    assert response.status_code == 400
    payload = response.json()
    assert payload["error_code"] == "VALIDATION_ERROR"
    assert payload["errors"][0].startswith("isActive")


def test_body_field_named_query_keeps_its_name(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    with api_test_client(config=config) as client:
        response = client.post(
            "/api/contacts",
            json={
                "firstName": "Anita",
                "lastName": "Rao",
                "mobileNo": "9876543210",
                "email": "anita@example.com",
                "service": "Audit",
            },
        )

    assert response.status_code == 400
    assert response.json()["errors"] == ["query: Field required"]
