from sqlalchemy import Column, Text, TIMESTAMP, Uuid, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
import uuid

from ..core.database import Base


class TaskStatusEnum(str, enum.Enum):
    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"


class TaskPriorityEnum(str, enum.Enum):
    high = "high"
    medium = "medium"
    low = "low"


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(Text, nullable=False)
    description = Column(Text)
    status = Column(
        SAEnum(TaskStatusEnum, name="task_status", native_enum=False),
        nullable=False,
        default=TaskStatusEnum.pending,
    )
    priority = Column(
        SAEnum(TaskPriorityEnum, name="task_priority", native_enum=False),
        nullable=False,
        default=TaskPriorityEnum.medium,
    )
    assigned_to = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    # nullable so tasks survive the deletion of their team
    team_id = Column(Uuid, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())

    assignee = relationship("User")
    team = relationship("Team")


class TaskHistory(Base):
    __tablename__ = "task_history"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    task_id = Column(Uuid, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    old_status = Column(SAEnum(TaskStatusEnum, name="task_status", native_enum=False), nullable=False)
    new_status = Column(SAEnum(TaskStatusEnum, name="task_status", native_enum=False), nullable=False)
    # plain id like an audit log entry; history outlives the user who wrote it
    changed_by = Column(Uuid, nullable=False)
    changed_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
