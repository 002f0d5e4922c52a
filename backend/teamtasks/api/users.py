# backend/teamtasks/api/users.py

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from teamtasks.core.auth import Caller, get_caller, require_admin
from teamtasks.core.database import get_db
from teamtasks.schemas.user import User, UserCreate, UserSummary, UserUpdate
from teamtasks.services import users_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserCreate,
    caller: Caller = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await users_service.create_user(db, caller, payload)


@router.get("", response_model=List[UserSummary])
async def list_users(
    caller: Caller = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await users_service.list_users(db)


@router.get("/{user_id}", response_model=User)
async def get_user(
    user_id: UUID,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    return await users_service.get_user(db, caller, user_id)


@router.put("/{user_id}", response_model=User)
async def update_user(
    user_id: UUID,
    payload: UserUpdate,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    return await users_service.update_user(db, caller, user_id, payload)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UUID,
    caller: Caller = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await users_service.delete_user(db, caller, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
