# This file defines the team member endpoints, addressed by employee ID (EMP001 style).
# DELETE hides a member; DELETE .../permanent removes the record and its profile image.
# `/team/stats` is declared before `/{emp_id}` so it is never read as an employee ID.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from src.api.api_config import ApiConfig
from src.api.dependencies import (
    clearable_form_value,
    get_config,
    get_pagination,
    get_submitted_fields,
    get_team_service,
)
from src.api.pagination import PaginationSpec, build_pagination_meta
from src.api.response_envelope import build_list_envelope, build_message_envelope, build_object_envelope
from src.api.schemas.common import MessageResponse
from src.api.schemas.team_schemas import TeamMemberListResponseV1, TeamMemberResponseV1, TeamStatsResponseV1
from src.api.services.team_service import TeamService
from src.api.uploads import stage_upload

router = APIRouter(prefix="/team", tags=["team"])
TeamServiceDep = Annotated[TeamService, Depends(get_team_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
PaginationDep = Annotated[PaginationSpec, Depends(get_pagination)]
SubmittedFieldsDep = Annotated[frozenset[str], Depends(get_submitted_fields)]


@router.get("", response_model=TeamMemberListResponseV1, response_model_exclude_none=True)
def list_team_members(
    service: TeamServiceDep,
    pagination: PaginationDep,
    department: str | None = Query(default=None),
    role: str | None = Query(default=None),
    is_active: bool = Query(default=True, alias="isActive"),
) -> dict[str, object]:
    result = service.list_members(
        department=department,
        role=role,
        is_active=is_active,
        pagination=pagination,
    )
    rows = list(result["rows"])
    return build_list_envelope(
        data=rows,
        pagination=build_pagination_meta(pagination=pagination, total_count=int(result["total_count"])),
        count=len(rows),
    )


@router.get("/stats", response_model=TeamStatsResponseV1, response_model_exclude_none=True)
def team_stats(service: TeamServiceDep) -> dict[str, object]:
    return build_object_envelope(data=service.get_stats())


@router.get("/{emp_id}", response_model=TeamMemberResponseV1, response_model_exclude_none=True)
def get_team_member(emp_id: str, service: TeamServiceDep) -> dict[str, object]:
    return build_object_envelope(data=service.get_member(emp_id))


@router.post(
    "",
    status_code=201,
    response_model=TeamMemberResponseV1,
    response_model_exclude_none=True,
)
def create_team_member(
    service: TeamServiceDep,
    config: ConfigDep,
    emp_id: str | None = Form(default=None, alias="empId"),
    name: str | None = Form(default=None),
    qualification: list[str] | None = Form(default=None),
    experience: str | None = Form(default=None),
    expertise: list[str] | None = Form(default=None),
    department: str | None = Form(default=None),
    role: str | None = Form(default=None),
    info: str | None = Form(default=None),
    about_me: str | None = Form(default=None, alias="aboutMe"),
    image: UploadFile | None = File(default=None),
) -> dict[str, object]:
    with stage_upload(image, config.upload_dir) as staged:
        member = service.create_member(
            emp_id=emp_id,
            name=name,
            qualification=qualification,
            experience=experience,
            expertise=expertise,
            department=department,
            role=role,
            info=info,
            about_me=about_me,
            image=staged,
        )
    return build_object_envelope(data=member, message="Team member created successfully")


@router.put("/{emp_id}", response_model=TeamMemberResponseV1, response_model_exclude_none=True)
def update_team_member(
    emp_id: str,
    service: TeamServiceDep,
    config: ConfigDep,
    submitted: SubmittedFieldsDep,
    name: str | None = Form(default=None),
    qualification: list[str] | None = Form(default=None),
    experience: str | None = Form(default=None),
    expertise: list[str] | None = Form(default=None),
    department: str | None = Form(default=None),
    role: str | None = Form(default=None),
    info: str | None = Form(default=None),
    about_me: str | None = Form(default=None, alias="aboutMe"),
    image: UploadFile | None = File(default=None),
) -> dict[str, object]:
    with stage_upload(image, config.upload_dir) as staged:
        member = service.update_member(
            emp_id,
            name=name,
            qualification=qualification,
            experience=experience,
            expertise=expertise,
            department=clearable_form_value(department, "department", submitted),
            role=role,
            info=info,
            about_me=about_me,
            image=staged,
        )
    return build_object_envelope(data=member, message="Team member updated successfully")


@router.delete("/{emp_id}", response_model=MessageResponse, response_model_exclude_none=True)
def delete_team_member(emp_id: str, service: TeamServiceDep) -> dict[str, object]:
    service.soft_delete_member(emp_id)
    return build_message_envelope("Team member deleted successfully")


@router.delete(
    "/{emp_id}/permanent",
    response_model=MessageResponse,
    response_model_exclude_none=True,
)
def permanently_delete_team_member(emp_id: str, service: TeamServiceDep) -> dict[str, object]:
    service.hard_delete_member(emp_id)
    return build_message_envelope("Team member permanently deleted")
