# This file tests the team member endpoints and the employee ID allocation rules.
# Soft deletes hide members from reads while keeping the row; permanent deletes remove both row and image.

from __future__ import annotations

from pathlib import Path

import pytest

from src.api.ddl import TEAM_TABLE
from src.api.error_handlers import ValidationError
from src.api.image_lifecycle import TEAM_TRANSFORMATION
from src.api.services.team_service import TeamService
from src.api.uploads import StagedUpload
from tests.api.support import FakeMediaClient, api_test_client, build_test_config, build_test_db, image_file

MEMBER_FORM = {
    "name": "Priya Nair",
    "qualification": "CA, CS",
    "experience": "8",
    "expertise": "A, B ,C",
    "department": "Audit & Assurance",
    "role": "Partner",
    "info": "Leads statutory audits.",
    "aboutMe": "Twenty years in practice.",
}


def _create_member(client, **overrides: object):
    return client.post("/api/team", data={**MEMBER_FORM, **overrides}, files=image_file())


def test_first_member_gets_emp001_and_ids_increment(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    media = FakeMediaClient()
    with api_test_client(config=config, media_client=media) as client:
        first = _create_member(client)
        second = _create_member(client, name="Rahul Mehta")

    assert first.status_code == 201
    assert first.json()["message"] == "Team member created successfully"
    member = first.json()["data"]
    assert member["empId"] == "EMP001"
    assert member["expertise"] == ["A", "B", "C"]
    assert member["qualification"] == ["CA", "CS"]
    assert member["experience"] == 8
    assert member["image"] == {
        "id": "ca-firm/team-members/asset-1",
        "url": "https://media.test/ca-firm/team-members/asset-1.png",
    }
    assert media.uploads[0]["transformation"] == TEAM_TRANSFORMATION
    assert second.json()["data"]["empId"] == "EMP002"


def test_explicit_emp_id_is_uppercased_and_next_id_follows_maximum(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    with api_test_client(config=config) as client:
        _create_member(client)
        explicit = _create_member(client, empId="emp010").json()["data"]
        following = _create_member(client).json()["data"]

    assert explicit["empId"] == "EMP010"
    assert following["empId"] == "EMP011"


def test_duplicate_emp_id_is_rejected_before_upload(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    media = FakeMediaClient()
    with api_test_client(config=config, media_client=media) as client:
        _create_member(client, empId="EMP005")
        response = _create_member(client, empId="emp005")

    assert response.status_code == 400
    payload = response.json()
    assert payload["message"] == "Employee ID already exists"
    assert payload["error_code"] == "DUPLICATE_RESOURCE"
    assert len(media.uploads) == 1
    assert list(config.upload_dir.iterdir()) == []


def test_create_member_requires_profile_image(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    with api_test_client(config=config) as client:
        response = client.post("/api/team", data=MEMBER_FORM)

    assert response.status_code == 400
    assert response.json()["message"] == "Profile image is required"
    assert response.json()["error_code"] == "IMAGE_REQUIRED"


def test_create_member_reports_missing_fields(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    form = {key: value for key, value in MEMBER_FORM.items() if key not in {"aboutMe", "expertise"}}
    with api_test_client(config=config) as client:
        response = client.post("/api/team", data=form, files=image_file())

    assert response.status_code == 400
    errors = response.json()["errors"]
    assert "aboutMe is required" in errors
    assert "expertise is required" in errors


def test_invalid_experience_is_rejected(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    with api_test_client(config=config) as client:
        response = _create_member(client, experience="eight")

    assert response.status_code == 400
    assert response.json()["errors"] == ["experience must be a whole number of years"]


def test_soft_delete_hides_member_but_keeps_row(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    db = build_test_db(config)
    media = FakeMediaClient()
    with api_test_client(config=config, db_client=db, media_client=media) as client:
        _create_member(client)
        deleted = client.delete("/api/team/EMP001")
        lookup = client.get("/api/team/EMP001")
        listing = client.get("/api/team").json()

    assert deleted.json()["message"] == "Team member deleted successfully"
    assert lookup.status_code == 404
    assert lookup.json()["message"] == "Team member not found"
    assert listing["count"] == 0
    row = db.fetch_one(f"SELECT is_active FROM {TEAM_TABLE} WHERE emp_id = :emp_id", {"emp_id": "EMP001"})
    assert row is not None
    assert not row["is_active"]
    assert media.delete_attempts == []


def test_permanent_delete_removes_row_and_image(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    db = build_test_db(config)
    media = FakeMediaClient()
    with api_test_client(config=config, db_client=db, media_client=media) as client:
        created = _create_member(client).json()["data"]
        client.delete("/api/team/EMP001")
        response = client.delete("/api/team/emp001/permanent")

    assert response.status_code == 200
    assert response.json()["message"] == "Team member permanently deleted"
    assert media.deleted == [created["image"]["id"]]
    assert db.fetch_scalar(f"SELECT COUNT(*) FROM {TEAM_TABLE}") == 0


def test_lookup_is_case_insensitive_on_emp_id(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    with api_test_client(config=config) as client:
        _create_member(client)
        response = client.get("/api/team/emp001")

    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Priya Nair"


def test_list_filters_by_department_and_role(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    with api_test_client(config=config) as client:
        _create_member(client)
        _create_member(client, name="Tax Person", department="Direct Tax", role="Manager")
        _create_member(client, name="No Dept", department="", role="Associate")

        audit = client.get("/api/team", params={"department": "audit"}).json()
        everyone = client.get("/api/team", params={"department": "all", "role": "all"}).json()
        managers = client.get("/api/team", params={"role": "MANAG"}).json()

    assert [member["name"] for member in audit["data"]] == ["Priya Nair"]
    assert everyone["count"] == 3
    assert everyone["pagination"]["totalItems"] == 3
    assert [member["name"] for member in managers["data"]] == ["Tax Person"]


def test_update_member_keeps_image_and_can_clear_department(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    media = FakeMediaClient()
    with api_test_client(config=config, media_client=media) as client:
        created = _create_member(client).json()["data"]
        response = client.put(
            "/api/team/EMP001",
            data={"role": "Senior Partner", "department": "", "expertise": '["X","Y"]'},
        )

    assert response.status_code == 200
    assert response.json()["message"] == "Team member updated successfully"
    updated = response.json()["data"]
    assert updated["role"] == "Senior Partner"
    assert "department" not in updated
    assert updated["expertise"] == ["X", "Y"]
    assert updated["qualification"] == created["qualification"]
    assert updated["image"] == created["image"]
    assert media.delete_attempts == []


def test_update_member_with_new_image_replaces_asset(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    media = FakeMediaClient()
    with api_test_client(config=config, media_client=media) as client:
        created = _create_member(client).json()["data"]
        updated = client.put("/api/team/EMP001", files=image_file("new.png")).json()["data"]

    assert media.deleted == [created["image"]["id"]]
    assert updated["image"]["id"] == "ca-firm/team-members/asset-2"


def test_team_stats(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    with api_test_client(config=config) as client:
        empty = client.get("/api/team/stats").json()["data"]
        _create_member(client, experience="10")
        _create_member(client, name="Second", experience="4")
        _create_member(client, name="Third", department="Direct Tax", role="Manager", experience="1")
        _create_member(client, name="Gone", experience="30")
        client.delete("/api/team/EMP004")
        stats = client.get("/api/team/stats").json()["data"]

    assert empty == {"totalMembers": 0, "departmentStats": [], "roleStats": [], "averageExperience": 0.0}
    assert stats["totalMembers"] == 3
    assert stats["departmentStats"][0] == {"department": "Audit & Assurance", "count": 2}
    assert stats["roleStats"] == [{"role": "Partner", "count": 2}, {"role": "Manager", "count": 1}]
    assert stats["averageExperience"] == pytest.approx(5.0)


def test_concurrent_id_collision_surfaces_as_duplicate(tmp_path: Path) -> None:
    config = build_test_config(tmp_path)
    db = build_test_db(config)
    media = FakeMediaClient()
    service = TeamService(config=config, db=db, media=media)

    def staged(name: str) -> StagedUpload:
        path = tmp_path / name
        path.write_bytes(b"img")
        return StagedUpload(path=path, filename=name)

    fields = {
        "name": "Priya Nair",
        "qualification": "CA",
        "experience": "3",
        "expertise": "Audit",
        "role": "Partner",
        "info": "Info",
        "about_me": "About",
    }
    service.create_member(**fields, image=staged("one.png"))
    # Simulate a second writer that computed its ID before the first insert landed.
    service._allocate_emp_id = lambda: "EMP001"  # type: ignore[method-assign]

    with pytest.raises(ValidationError) as excinfo:
        service.create_member(**fields, image=staged("two.png"))

    assert excinfo.value.error_code == "DUPLICATE_RESOURCE"
    assert media.deleted == ["ca-firm/team-members/asset-2"]
    assert db.fetch_scalar(f"SELECT COUNT(*) FROM {TEAM_TABLE}") == 1
