# backend/teamtasks/crud/users.py
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from teamtasks.models import User, TeamMember, Task


async def get_user(db: AsyncSession, user_id: UUID) -> Optional[User]:
    return await db.get(User, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    return await db.scalar(select(User).where(User.email == email))


async def list_users(db: AsyncSession) -> List[User]:
    rows = await db.scalars(select(User).order_by(User.created_at, User.email))
    return rows.all()


async def create_user(db: AsyncSession, **fields) -> User:
    user = User(**fields)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def update_user(db: AsyncSession, user: User, changes: dict) -> User:
    for field, value in changes.items():
        setattr(user, field, value)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def count_assigned_tasks(db: AsyncSession, user_id: UUID) -> int:
    return await db.scalar(
        select(func.count()).select_from(Task).where(Task.assigned_to == user_id)
    )


async def delete_user(db: AsyncSession, user: User) -> None:
    await db.execute(delete(TeamMember).where(TeamMember.user_id == user.id))
    await db.delete(user)
    await db.commit()
