# backend/teamtasks/services/policy.py

"""
Access rules for tasks and users.

One policy object per role, chosen once per operation with ``policy_for``.
Every ``ensure_*`` method returns quietly when the action is allowed and
raises ``Forbidden`` otherwise. Team membership is read through a lookup
object (see ``teamtasks.crud.teams.Memberships``) so the rules themselves
carry no queries.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Protocol
from uuid import UUID

from teamtasks.core.auth import Caller
from teamtasks.core.errors import Forbidden
from teamtasks.models.user import Role


class MembershipLookup(Protocol):
    async def is_member(self, user_id: UUID, team_id: UUID) -> bool: ...

    async def team_ids_for(self, user_id: UUID) -> List[UUID]: ...


class AccessPolicy(ABC):
    role: Role

    # ---- tasks ----
    @abstractmethod
    async def ensure_can_create_task(
        self, caller: Caller, assigned_to: UUID, team_id: UUID, memberships: MembershipLookup
    ) -> None:
        ...

    @abstractmethod
    async def ensure_can_view_task(self, caller: Caller, task, memberships: MembershipLookup) -> None:
        ...

    @abstractmethod
    async def visible_team_ids(self, caller: Caller, memberships: MembershipLookup) -> Optional[List[UUID]]:
        """Team ids whose tasks the caller may list, or None for every task."""

    @abstractmethod
    def ensure_can_update_task(self, caller: Caller, task, changes: dict) -> None:
        ...

    # ---- users ----
    @abstractmethod
    def ensure_can_view_user(self, caller: Caller, user_id: UUID) -> None:
        ...

    @abstractmethod
    def ensure_can_update_user(self, caller: Caller, user_id: UUID, changes: dict) -> None:
        ...


class AdminPolicy(AccessPolicy):
    role = Role.admin

    async def ensure_can_create_task(self, caller, assigned_to, team_id, memberships):
        return None

    async def ensure_can_view_task(self, caller, task, memberships):
        return None

    async def visible_team_ids(self, caller, memberships):
        return None

    def ensure_can_update_task(self, caller, task, changes):
        return None

    def ensure_can_view_user(self, caller, user_id):
        return None

    def ensure_can_update_user(self, caller, user_id, changes):
        return None


class MemberPolicy(AccessPolicy):
    role = Role.member

    async def ensure_can_create_task(self, caller, assigned_to, team_id, memberships):
        if assigned_to != caller.id:
            raise Forbidden("A member can only assign a task to themselves")

        if not await memberships.is_member(caller.id, team_id):
            raise Forbidden("You can only create tasks for a team you belong to")

    async def ensure_can_view_task(self, caller, task, memberships):
        # team-less tasks are admin-only
        if task.team_id is None:
            raise Forbidden("Access denied")

        if not await memberships.is_member(caller.id, task.team_id):
            raise Forbidden("Access denied")

    async def visible_team_ids(self, caller, memberships):
        return list(await memberships.team_ids_for(caller.id))

    def ensure_can_update_task(self, caller, task, changes):
        if task.assigned_to != caller.id:
            raise Forbidden("Access denied")

        if "assigned_to" in changes:
            raise Forbidden("A member cannot reassign a task")

    def ensure_can_view_user(self, caller, user_id):
        if user_id != caller.id:
            raise Forbidden("Access denied")

    def ensure_can_update_user(self, caller, user_id, changes):
        if user_id != caller.id:
            raise Forbidden("Access denied")

        if "role" in changes:
            raise Forbidden("Access denied: only admins can change user roles")


POLICIES = {
    Role.admin: AdminPolicy(),
    Role.member: MemberPolicy(),
}


def policy_for(caller: Caller) -> AccessPolicy:
    return POLICIES[caller.role]
