# This file defines team member response contracts and the team statistics payload.

from __future__ import annotations

from datetime import datetime

from src.api.schemas.common import CamelModel, EnvelopeFields, PaginationMetadata


class TeamImageV1(CamelModel):
    id: str
    url: str


class TeamMemberV1(CamelModel):
    id: str
    emp_id: str
    name: str
    qualification: list[str]
    experience: int
    expertise: list[str]
    department: str | None = None
    role: str
    info: str
    about_me: str
    image: TeamImageV1
    is_active: bool
    created_at: datetime
    updated_at: datetime


class TeamMemberResponseV1(EnvelopeFields):
    data: TeamMemberV1


class TeamMemberListResponseV1(EnvelopeFields):
    count: int
    data: list[TeamMemberV1]
    pagination: PaginationMetadata


class DepartmentCountV1(CamelModel):
    department: str | None = None
    count: int


class RoleCountV1(CamelModel):
    role: str
    count: int


class TeamStatsV1(CamelModel):
    total_members: int
    department_stats: list[DepartmentCountV1]
    role_stats: list[RoleCountV1]
    average_experience: float


class TeamStatsResponseV1(EnvelopeFields):
    data: TeamStatsV1
