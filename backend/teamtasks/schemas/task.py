from typing import Optional
from uuid import UUID
from datetime import datetime

from pydantic import field_validator

from .base import APIModel, clean_text, reject_null
from .user import UserSummary
from .team import Team
from ..models.task import TaskStatusEnum, TaskPriorityEnum


class TaskCreate(APIModel):
    title: str
    description: Optional[str] = None
    status: TaskStatusEnum = TaskStatusEnum.pending
    priority: TaskPriorityEnum = TaskPriorityEnum.medium
    assigned_to: UUID
    team_id: UUID

    @field_validator("title")
    @classmethod
    def check_title(cls, value):
        return clean_text(value)

    @field_validator("description")
    @classmethod
    def strip_description(cls, value):
        return value.strip() if value is not None else value


class TaskUpdate(APIModel):
    title: Optional[str] = None
    # explicit null clears the description
    description: Optional[str] = None
    status: Optional[TaskStatusEnum] = None
    priority: Optional[TaskPriorityEnum] = None
    assigned_to: Optional[UUID] = None

    @field_validator("title", "status", "priority", "assigned_to")
    @classmethod
    def check_not_null(cls, value):
        return reject_null(value)

    @field_validator("title")
    @classmethod
    def check_title(cls, value):
        return clean_text(value)

    @field_validator("description")
    @classmethod
    def strip_description(cls, value):
        return value.strip() if value is not None else value


class Task(APIModel):
    id: UUID
    title: str
    description: Optional[str] = None
    status: TaskStatusEnum
    priority: TaskPriorityEnum
    assigned_to: UUID
    team_id: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TaskDetail(Task):
    """Task with its assignee and team, as returned by the list endpoint."""

    assignee: Optional[UserSummary] = None
    team: Optional[Team] = None


class TaskHistory(APIModel):
    id: UUID
    task_id: UUID
    old_status: TaskStatusEnum
    new_status: TaskStatusEnum
    changed_by: UUID
    changed_at: datetime
