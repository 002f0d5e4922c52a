# backend/teamtasks/api/teams.py

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from teamtasks.core.auth import Caller, require_admin, require_any_role
from teamtasks.core.database import get_db
from teamtasks.schemas.team import (
    Team,
    TeamCreate,
    TeamMember,
    TeamMemberAdd,
    TeamUpdate,
    TeamWithMembers,
)
from teamtasks.services import teams_service

router = APIRouter(prefix="/teams", tags=["teams"])


@router.get("", response_model=List[TeamWithMembers])
async def list_teams(
    caller: Caller = Depends(require_any_role),
    db: AsyncSession = Depends(get_db),
):
    return await teams_service.list_teams(db)


@router.post("", response_model=Team, status_code=status.HTTP_201_CREATED)
async def create_team(
    payload: TeamCreate,
    caller: Caller = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await teams_service.create_team(db, caller, payload)


@router.put("/{team_id}", response_model=Team)
async def update_team(
    team_id: UUID,
    payload: TeamUpdate,
    caller: Caller = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await teams_service.update_team(db, caller, team_id, payload)


@router.delete("/{team_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_team(
    team_id: UUID,
    caller: Caller = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await teams_service.delete_team(db, caller, team_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# -------------------------
# MEMBERSHIP
# -------------------------

@router.post("/{team_id}/members", response_model=TeamMember, status_code=status.HTTP_201_CREATED)
async def add_member(
    team_id: UUID,
    payload: TeamMemberAdd,
    caller: Caller = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await teams_service.add_member(db, caller, team_id, payload.user_id)


@router.delete("/{team_id}/members/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_member(
    team_id: UUID,
    user_id: UUID,
    caller: Caller = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await teams_service.remove_member(db, caller, team_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
