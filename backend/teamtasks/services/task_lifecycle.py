# backend/teamtasks/services/task_lifecycle.py

from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from teamtasks.core.auth import Caller
from teamtasks.core.utils_logging import log_user_action
from teamtasks.crud import tasks as crud_tasks
from teamtasks.models import Task, TaskHistory


def merge_changes(task: Task, changes: dict):
    """
    Apply ``changes`` onto ``task`` in place and return the status it had before.
    Keys missing from ``changes`` keep their current value.
    """
    previous_status = task.status
    for field, value in changes.items():
        setattr(task, field, value)
    return previous_status


def status_transition(previous_status, task: Task):
    """Return (old, new) when the status value changed, else None."""
    if previous_status == task.status:
        return None
    return previous_status, task.status


async def apply_update(db: AsyncSession, task: Task, changes: dict, caller: Caller) -> Task:
    """
    Persist a task patch and record a history entry when its status moved.

    A reaffirmed status and a patch without a status both leave the history
    untouched. The task row and its history row commit together.
    """
    previous_status = merge_changes(task, changes)
    transition = status_transition(previous_status, task)

    entry: TaskHistory | None = None
    if transition is not None:
        old_status, new_status = transition
        entry = crud_tasks.add_history(
            db,
            task_id=task.id,
            old_status=old_status,
            new_status=new_status,
            changed_by=caller.id,
            changed_at=datetime.now(timezone.utc),
        )

    db.add(task)
    await db.commit()
    await db.refresh(task)

    if entry is not None:
        log_user_action(
            caller.id,
            "Task status changed",
            task_id=str(task.id),
            old_status=entry.old_status.value,
            new_status=entry.new_status.value,
        )

    return task
