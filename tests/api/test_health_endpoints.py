# This file tests API health, readiness, and version endpoints.
# The tests confirm request IDs and readiness details are always returned.

from __future__ import annotations

from pathlib import Path

from src.api.ddl import BLOG_TABLE, CONTENT_TABLES
from tests.api.support import FakeDBClient, api_test_client, build_test_config


def test_health_endpoint_returns_expected_fields(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    with api_test_client(config=config, db_client=FakeDBClient()) as client:
        response = client.get("/api/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["status"] == "ok"
    assert payload["message"] == "Server is running successfully"
    assert payload["environment"] == "test"
    assert payload["service_name"] == config.api_name
    assert payload["request_id"]
    assert "timestamp" in payload
    assert response.headers["x-request-id"] == payload["request_id"]
    assert "x-response-time-ms" in response.headers


def test_health_echoes_incoming_request_id(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    with api_test_client(config=config, db_client=FakeDBClient()) as client:
        response = client.get("/api/health", headers={"x-request-id": "req-123"})

    assert response.json()["request_id"] == "req-123"
    assert response.headers["x-request-id"] == "req-123"


def test_ready_endpoint_reports_all_tables_present(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    db_client = FakeDBClient(connected=True, existing_tables=set(CONTENT_TABLES))
    with api_test_client(config=config, db_client=db_client) as client:
        response = client.get("/api/ready")

    assert response.status_code == 200
    payload = response.json()
    assert payload["db_connected"] is True
    assert payload["tables_ready"] is True
    assert payload["missing_tables"] == []
    assert payload["ready"] is True
    assert payload["database"] == "reachable"


def test_ready_endpoint_lists_missing_tables(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    present = set(CONTENT_TABLES) - {BLOG_TABLE}
    with api_test_client(config=config, db_client=FakeDBClient(existing_tables=present)) as client:
        payload = client.get("/api/ready").json()

    assert payload["ready"] is False
    assert payload["missing_tables"] == [BLOG_TABLE]


def test_ready_endpoint_when_database_is_unreachable(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    with api_test_client(config=config, db_client=FakeDBClient(connected=False)) as client:
        payload = client.get("/api/ready").json()

    assert payload["db_connected"] is False
    assert payload["database"] == "unreachable"
    assert payload["ready"] is False
    assert sorted(payload["missing_tables"]) == sorted(CONTENT_TABLES)


def test_ready_endpoint_against_real_schema(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    with api_test_client(config=config) as client:
        payload = client.get("/api/ready").json()

    assert payload["ready"] is True


def test_version_endpoint_returns_version_metadata(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    with api_test_client(config=config, db_client=FakeDBClient()) as client:
        response = client.get("/api/version")

    assert response.status_code == 200
    payload = response.json()
    assert payload["api_prefix"] == "/api"
    assert payload["app_version"] == config.app_version
    assert payload["project"] == config.api_name
    assert payload["version"] == config.app_version


def test_metrics_endpoint_exposes_request_counters(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    with api_test_client(config=config, db_client=FakeDBClient()) as client:
        client.get("/api/health")
        response = client.get("/metrics")

    assert response.status_code == 200
    assert "api_http_requests_total" in response.text
