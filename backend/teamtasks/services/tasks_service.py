# backend/teamtasks/services/tasks_service.py

from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from teamtasks.core.auth import Caller
from teamtasks.core.errors import NotFound
from teamtasks.core.utils_logging import log_user_action
from teamtasks.crud import tasks as crud_tasks
from teamtasks.crud import teams as crud_teams
from teamtasks.crud import users as crud_users
from teamtasks.crud.teams import Memberships
from teamtasks.models import Task, TaskHistory
from teamtasks.schemas.task import TaskCreate, TaskUpdate
from teamtasks.services import task_lifecycle
from teamtasks.services.policy import policy_for


async def get_task_or_404(db: AsyncSession, task_id: UUID) -> Task:
    task = await crud_tasks.get_task(db, task_id)
    if not task:
        raise NotFound("Task not found")
    return task


async def create_task(db: AsyncSession, caller: Caller, payload: TaskCreate) -> Task:
    # member rules come before existence checks on the referenced rows
    await policy_for(caller).ensure_can_create_task(
        caller, payload.assigned_to, payload.team_id, Memberships(db)
    )

    if not await crud_users.get_user(db, payload.assigned_to):
        raise NotFound("Assigned user not found")

    if not await crud_teams.get_team(db, payload.team_id):
        raise NotFound("Team not found")

    task = await crud_tasks.create_task(
        db,
        title=payload.title,
        description=payload.description,
        status=payload.status,
        priority=payload.priority,
        assigned_to=payload.assigned_to,
        team_id=payload.team_id,
    )
    log_user_action(caller.id, "Task created", task_id=str(task.id), team_id=str(task.team_id))
    return task


async def list_tasks(db: AsyncSession, caller: Caller) -> List[Task]:
    team_ids = await policy_for(caller).visible_team_ids(caller, Memberships(db))
    return await crud_tasks.list_tasks(db, team_ids)


async def get_task(db: AsyncSession, caller: Caller, task_id: UUID) -> Task:
    task = await get_task_or_404(db, task_id)
    await policy_for(caller).ensure_can_view_task(caller, task, Memberships(db))
    return task


async def update_task(db: AsyncSession, caller: Caller, task_id: UUID, payload: TaskUpdate) -> Task:
    changes = payload.model_dump(exclude_unset=True)
    task = await get_task_or_404(db, task_id)

    policy_for(caller).ensure_can_update_task(caller, task, changes)

    if "assigned_to" in changes and not await crud_users.get_user(db, changes["assigned_to"]):
        raise NotFound("Assigned user not found")

    task = await task_lifecycle.apply_update(db, task, changes, caller)
    log_user_action(caller.id, "Task updated", task_id=str(task.id))
    return task


async def delete_task(db: AsyncSession, caller: Caller, task_id: UUID) -> None:
    task = await get_task_or_404(db, task_id)
    await crud_tasks.delete_task(db, task)
    log_user_action(caller.id, "Task deleted", task_id=str(task_id))


async def get_history(db: AsyncSession, caller: Caller, task_id: UUID) -> List[TaskHistory]:
    task = await get_task_or_404(db, task_id)
    await policy_for(caller).ensure_can_view_task(caller, task, Memberships(db))
    return await crud_tasks.list_history(db, task_id)
