# backend/teamtasks/crud/teams.py
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from teamtasks.models import Team, TeamMember, Task


async def get_team(db: AsyncSession, team_id: UUID) -> Optional[Team]:
    return await db.get(Team, team_id)


async def get_team_by_name(db: AsyncSession, name: str) -> Optional[Team]:
    return await db.scalar(select(Team).where(Team.name == name))


async def list_teams_with_members(db: AsyncSession) -> List[Team]:
    rows = await db.scalars(
        select(Team)
        .options(selectinload(Team.members).selectinload(TeamMember.user))
        .order_by(Team.name)
    )
    return rows.all()


async def create_team(db: AsyncSession, name: str, description: Optional[str] = None) -> Team:
    team = Team(name=name, description=description)
    db.add(team)
    await db.commit()
    await db.refresh(team)
    return team


async def update_team(db: AsyncSession, team: Team, changes: dict) -> Team:
    for field, value in changes.items():
        setattr(team, field, value)
    db.add(team)
    await db.commit()
    await db.refresh(team)
    return team


async def delete_team(db: AsyncSession, team: Team) -> None:
    # tasks stay, detached from the team
    await db.execute(update(Task).where(Task.team_id == team.id).values(team_id=None))
    await db.execute(delete(TeamMember).where(TeamMember.team_id == team.id))
    await db.delete(team)
    await db.commit()


# -------------------------------
# MEMBERSHIP
# -------------------------------

async def get_membership(db: AsyncSession, user_id: UUID, team_id: UUID) -> Optional[TeamMember]:
    return await db.get(TeamMember, (user_id, team_id))


async def add_member(db: AsyncSession, user_id: UUID, team_id: UUID) -> TeamMember:
    member = TeamMember(user_id=user_id, team_id=team_id)
    db.add(member)
    await db.commit()
    await db.refresh(member)
    return member


async def remove_member(db: AsyncSession, member: TeamMember) -> None:
    await db.delete(member)
    await db.commit()


async def team_ids_for_user(db: AsyncSession, user_id: UUID) -> List[UUID]:
    rows = await db.scalars(select(TeamMember.team_id).where(TeamMember.user_id == user_id))
    return rows.all()


class Memberships:
    """Membership lookup handed to the access policy."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def is_member(self, user_id: UUID, team_id: UUID) -> bool:
        return await get_membership(self.db, user_id, team_id) is not None

    async def team_ids_for(self, user_id: UUID) -> List[UUID]:
        return await team_ids_for_user(self.db, user_id)
