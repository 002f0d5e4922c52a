from .user import User, Role
from .team import Team, TeamMember
from .task import Task, TaskHistory, TaskStatusEnum, TaskPriorityEnum
from ..core.database import Base
__all__ = [
    "User",
    "Role",
    "Team",
    "TeamMember",
    "Task",
    "TaskHistory",
    "TaskStatusEnum",
    "TaskPriorityEnum",
    "Base"
]
