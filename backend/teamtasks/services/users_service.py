# backend/teamtasks/services/users_service.py

from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from teamtasks.core.auth import Caller, hash_password, verify_password, create_access_token
from teamtasks.core.errors import Conflict, NotFound, Unauthenticated
from teamtasks.core.utils_logging import log_user_action
from teamtasks.crud import users as crud_users
from teamtasks.models import User
from teamtasks.schemas.user import UserCreate, UserUpdate
from teamtasks.services.policy import policy_for


async def ensure_email_available(db: AsyncSession, email: str) -> None:
    if await crud_users.get_user_by_email(db, email):
        raise Conflict("User with same email already exists")


async def create_user(db: AsyncSession, caller: Caller, payload: UserCreate) -> User:
    await ensure_email_available(db, payload.email)

    user = await crud_users.create_user(
        db,
        name=payload.name,
        email=payload.email,
        password_hash=hash_password(payload.password),
        role=payload.role,
    )
    log_user_action(caller.id, "User created", target_user_id=str(user.id))
    return user


async def list_users(db: AsyncSession) -> List[User]:
    return await crud_users.list_users(db)


async def get_user(db: AsyncSession, caller: Caller, user_id: UUID) -> User:
    policy_for(caller).ensure_can_view_user(caller, user_id)

    user = await crud_users.get_user(db, user_id)
    if not user:
        raise NotFound("User not found")
    return user


async def update_user(db: AsyncSession, caller: Caller, user_id: UUID, payload: UserUpdate) -> User:
    changes = payload.model_dump(exclude_unset=True)
    policy_for(caller).ensure_can_update_user(caller, user_id, changes)

    user = await crud_users.get_user(db, user_id)
    if not user:
        raise NotFound("User not found")

    if "email" in changes and changes["email"] != user.email:
        await ensure_email_available(db, changes["email"])

    user = await crud_users.update_user(db, user, changes)
    log_user_action(caller.id, "User updated", target_user_id=str(user.id))
    return user


async def delete_user(db: AsyncSession, caller: Caller, user_id: UUID) -> None:
    user = await crud_users.get_user(db, user_id)
    if not user:
        raise NotFound("User not found")

    if await crud_users.count_assigned_tasks(db, user.id):
        raise Conflict("User still has assigned tasks")

    await crud_users.delete_user(db, user)
    log_user_action(caller.id, "User deleted", target_user_id=str(user_id))


# ------------------------------------------------
# SESSIONS
# ------------------------------------------------

async def authenticate(db: AsyncSession, email: str, password: str) -> tuple[User, str]:
    """Check credentials and issue an access token."""
    user = await crud_users.get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        raise Unauthenticated("Invalid email or password")

    token = create_access_token(user)
    log_user_action(user.id, "Session created")
    return user, token
