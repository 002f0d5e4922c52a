from typing import List, Optional
from datetime import datetime
from uuid import UUID

from pydantic import field_validator

from .base import APIModel, clean_text, reject_null
from .user import UserSummary


class TeamCreate(APIModel):
    name: str
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, value):
        return clean_text(value)

    @field_validator("description")
    @classmethod
    def strip_description(cls, value):
        return value.strip() if value is not None else value


class TeamUpdate(APIModel):
    name: Optional[str] = None
    # explicit null clears the description
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, value):
        return clean_text(reject_null(value))

    @field_validator("description")
    @classmethod
    def strip_description(cls, value):
        return value.strip() if value is not None else value


class Team(APIModel):
    id: UUID
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TeamMemberOut(APIModel):
    user: UserSummary


class TeamWithMembers(Team):
    members: List[TeamMemberOut] = []


# -----------------------
# MEMBERSHIP
# -----------------------

class TeamMemberAdd(APIModel):
    user_id: UUID


class TeamMember(APIModel):
    user_id: UUID
    team_id: UUID
    created_at: Optional[datetime] = None
