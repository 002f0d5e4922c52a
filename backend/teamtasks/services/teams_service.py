# backend/teamtasks/services/teams_service.py

from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from teamtasks.core.auth import Caller
from teamtasks.core.errors import Conflict, NotFound
from teamtasks.core.utils_logging import log_user_action
from teamtasks.crud import teams as crud_teams
from teamtasks.crud import users as crud_users
from teamtasks.models import Team, TeamMember
from teamtasks.schemas.team import TeamCreate, TeamUpdate


async def ensure_name_available(db: AsyncSession, name: str) -> None:
    # exact, case-sensitive match
    if await crud_teams.get_team_by_name(db, name):
        raise Conflict("Team with same name already exists")


async def get_team_or_404(db: AsyncSession, team_id: UUID) -> Team:
    team = await crud_teams.get_team(db, team_id)
    if not team:
        raise NotFound("Team not found")
    return team


async def create_team(db: AsyncSession, caller: Caller, payload: TeamCreate) -> Team:
    await ensure_name_available(db, payload.name)

    team = await crud_teams.create_team(db, payload.name, payload.description)
    log_user_action(caller.id, "Team created", team_id=str(team.id))
    return team


async def list_teams(db: AsyncSession) -> List[Team]:
    return await crud_teams.list_teams_with_members(db)


async def update_team(db: AsyncSession, caller: Caller, team_id: UUID, payload: TeamUpdate) -> Team:
    changes = payload.model_dump(exclude_unset=True)
    team = await get_team_or_404(db, team_id)

    if "name" in changes and changes["name"] != team.name:
        await ensure_name_available(db, changes["name"])

    team = await crud_teams.update_team(db, team, changes)
    log_user_action(caller.id, "Team updated", team_id=str(team.id))
    return team


async def delete_team(db: AsyncSession, caller: Caller, team_id: UUID) -> None:
    team = await get_team_or_404(db, team_id)
    await crud_teams.delete_team(db, team)
    log_user_action(caller.id, "Team deleted", team_id=str(team_id))


# -------------------------------
# MEMBERSHIP
# -------------------------------

async def add_member(db: AsyncSession, caller: Caller, team_id: UUID, user_id: UUID) -> TeamMember:
    await get_team_or_404(db, team_id)

    if not await crud_users.get_user(db, user_id):
        raise NotFound("User not found")

    if await crud_teams.get_membership(db, user_id, team_id):
        raise Conflict("User is already a member of this team")

    member = await crud_teams.add_member(db, user_id, team_id)
    log_user_action(caller.id, "Team member added", team_id=str(team_id), target_user_id=str(user_id))
    return member


async def remove_member(db: AsyncSession, caller: Caller, team_id: UUID, user_id: UUID) -> None:
    member = await crud_teams.get_membership(db, user_id, team_id)
    if not member:
        raise NotFound("Member not found in this team")

    await crud_teams.remove_member(db, member)
    log_user_action(caller.id, "Team member removed", team_id=str(team_id), target_user_id=str(user_id))
