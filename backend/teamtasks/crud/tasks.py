# backend/teamtasks/crud/tasks.py
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from teamtasks.models import Task, TaskHistory


async def get_task(db: AsyncSession, task_id: UUID) -> Optional[Task]:
    return await db.get(Task, task_id)


async def list_tasks(db: AsyncSession, team_ids: Optional[Sequence[UUID]] = None) -> List[Task]:
    """All tasks, or only those in ``team_ids`` when given. Loads assignee and team."""
    q = select(Task).options(selectinload(Task.assignee), selectinload(Task.team))
    if team_ids is not None:
        if not team_ids:
            return []
        q = q.where(Task.team_id.in_(list(team_ids)))
    q = q.order_by(Task.created_at.desc())
    rows = await db.scalars(q)
    return rows.all()


async def create_task(db: AsyncSession, **fields) -> Task:
    task = Task(**fields)
    db.add(task)
    await db.commit()
    await db.refresh(task)
    return task


async def delete_task(db: AsyncSession, task: Task) -> None:
    await db.execute(delete(TaskHistory).where(TaskHistory.task_id == task.id))
    await db.delete(task)
    await db.commit()


# -------------------------------
# HISTORY
# -------------------------------

def add_history(db: AsyncSession, **fields) -> TaskHistory:
    """Stage a history row; committed together with the task change."""
    entry = TaskHistory(**fields)
    db.add(entry)
    return entry


async def list_history(db: AsyncSession, task_id: UUID) -> List[TaskHistory]:
    rows = await db.scalars(
        select(TaskHistory)
        .where(TaskHistory.task_id == task_id)
        .order_by(TaskHistory.changed_at.desc())
    )
    return rows.all()
