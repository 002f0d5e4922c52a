# backend/teamtasks/api/tasks.py

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from teamtasks.core.auth import Caller, get_caller, require_admin
from teamtasks.core.database import get_db
from teamtasks.schemas.task import Task, TaskCreate, TaskDetail, TaskHistory, TaskUpdate
from teamtasks.services import tasks_service

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: TaskCreate,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    return await tasks_service.create_task(db, caller, payload)


@router.get("", response_model=List[TaskDetail])
async def list_tasks(
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    return await tasks_service.list_tasks(db, caller)


@router.get("/{task_id}", response_model=Task)
async def get_task(
    task_id: UUID,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    return await tasks_service.get_task(db, caller, task_id)


@router.put("/{task_id}", response_model=Task)
async def update_task(
    task_id: UUID,
    payload: TaskUpdate,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    return await tasks_service.update_task(db, caller, task_id, payload)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: UUID,
    caller: Caller = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await tasks_service.delete_task(db, caller, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{task_id}/history", response_model=List[TaskHistory])
async def get_task_history(
    task_id: UUID,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    return await tasks_service.get_history(db, caller, task_id)
