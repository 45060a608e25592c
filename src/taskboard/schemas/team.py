"""Team schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class TeamCreate(BaseModel):
    name: str = Field(max_length=200)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("team name is required")
        if len(v) > 100:
            raise ValueError("team name must be at most 100 characters")
        return v


class TeamRead(BaseModel):
    id: UUID
    name: str
    owner_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TeamMemberRead(BaseModel):
    team_id: UUID
    user_id: UUID
    role: str
    created_at: datetime

    model_config = {"from_attributes": True}


class MyTeamsResponse(BaseModel):
    user_id: UUID
    teams: list[TeamRead]


class TeamMembersResponse(BaseModel):
    team_id: UUID
    members: list[TeamMemberRead]


class AddMemberRequest(BaseModel):
    user_id: UUID
    role: str


class AddMemberResponse(BaseModel):
    team_id: UUID
    member: TeamMemberRead
