from typing import Optional
from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from .base import APIModel, clean_text, reject_null
from ..models.user import Role


class UserCreate(APIModel):
    name: str
    email: EmailStr
    password: str = Field(min_length=6)
    role: Role = Role.member

    @field_validator("name")
    @classmethod
    def check_name(cls, value):
        return clean_text(value)


class UserUpdate(APIModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    role: Optional[Role] = None

    @field_validator("name", "email", "role")
    @classmethod
    def check_not_null(cls, value):
        return reject_null(value)

    @field_validator("name")
    @classmethod
    def check_name(cls, value):
        return clean_text(value)


class User(APIModel):
    id: UUID
    name: str
    email: str
    role: Role
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserSummary(APIModel):
    id: UUID
    name: str
    email: str
    role: Role
