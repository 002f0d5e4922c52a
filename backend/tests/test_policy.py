# tests/test_policy.py

from __future__ import annotations

from types import SimpleNamespace
from uuid import uuid4

import pytest

from teamtasks.core.auth import Caller
from teamtasks.core.errors import Forbidden
from teamtasks.models import Role
from teamtasks.services.policy import AccessPolicy, AdminPolicy, MemberPolicy, policy_for


class FakeMemberships:
    """
    In-memory membership lookup.

    Counts lookups so tests can assert that admin decisions never hit it.
    """

    def __init__(self, pairs=()):
        self.pairs = set(pairs)
        self.calls = 0

    async def is_member(self, user_id, team_id):
        self.calls += 1
        return (user_id, team_id) in self.pairs

    async def team_ids_for(self, user_id):
        self.calls += 1
        return [team_id for uid, team_id in self.pairs if uid == user_id]


def _caller(role: Role) -> Caller:
    return Caller(id=uuid4(), role=role)


def _task(assigned_to=None, team_id=None):
    return SimpleNamespace(id=uuid4(), assigned_to=assigned_to or uuid4(), team_id=team_id)


def test_policy_for_dispatches_on_role():
    assert isinstance(policy_for(_caller(Role.admin)), AdminPolicy)
    assert isinstance(policy_for(_caller(Role.member)), MemberPolicy)


# -------------------------
# task creation
# -------------------------

async def test_member_cannot_assign_task_to_someone_else():
    caller = _caller(Role.member)
    team_id = uuid4()
    memberships = FakeMemberships({(caller.id, team_id)})

    with pytest.raises(Forbidden, match="only assign a task to themselves"):
        await policy_for(caller).ensure_can_create_task(caller, uuid4(), team_id, memberships)

    # self-check fires before any membership lookup
    assert memberships.calls == 0


async def test_member_must_belong_to_the_team_of_a_new_task():
    caller = _caller(Role.member)

    with pytest.raises(Forbidden, match="team you belong to"):
        await policy_for(caller).ensure_can_create_task(caller, caller.id, uuid4(), FakeMemberships())


async def test_member_can_create_own_task_in_own_team():
    caller = _caller(Role.member)
    team_id = uuid4()
    memberships = FakeMemberships({(caller.id, team_id)})

    await policy_for(caller).ensure_can_create_task(caller, caller.id, team_id, memberships)


async def test_admin_creates_tasks_for_anyone_without_membership_lookup():
    caller = _caller(Role.admin)
    memberships = FakeMemberships()

    await policy_for(caller).ensure_can_create_task(caller, uuid4(), uuid4(), memberships)
    assert memberships.calls == 0


# -------------------------
# task visibility
# -------------------------

async def test_member_sees_task_of_own_team():
    caller = _caller(Role.member)
    task = _task(team_id=uuid4())
    await policy_for(caller).ensure_can_view_task(caller, task, FakeMemberships({(caller.id, task.team_id)}))


async def test_member_denied_task_of_foreign_team():
    caller = _caller(Role.member)
    task = _task(team_id=uuid4())

    with pytest.raises(Forbidden):
        await policy_for(caller).ensure_can_view_task(caller, task, FakeMemberships())


async def test_teamless_task_is_admin_only():
    task = _task(team_id=None)
    member = _caller(Role.member)

    with pytest.raises(Forbidden):
        await policy_for(member).ensure_can_view_task(member, task, FakeMemberships())

    admin = _caller(Role.admin)
    await policy_for(admin).ensure_can_view_task(admin, task, FakeMemberships())


async def test_visible_team_ids():
    member = _caller(Role.member)
    team_a, team_b = uuid4(), uuid4()
    memberships = FakeMemberships({(member.id, team_a), (member.id, team_b), (uuid4(), uuid4())})

    assert set(await policy_for(member).visible_team_ids(member, memberships)) == {team_a, team_b}

    admin = _caller(Role.admin)
    assert await policy_for(admin).visible_team_ids(admin, memberships) is None


# -------------------------
# task update
# -------------------------

def test_member_updates_only_own_tasks():
    caller = _caller(Role.member)

    policy_for(caller).ensure_can_update_task(caller, _task(assigned_to=caller.id), {"title": "New"})

    with pytest.raises(Forbidden):
        policy_for(caller).ensure_can_update_task(caller, _task(), {"title": "New"})


def test_member_cannot_reassign():
    caller = _caller(Role.member)
    task = _task(assigned_to=caller.id)

    with pytest.raises(Forbidden, match="cannot reassign"):
        policy_for(caller).ensure_can_update_task(caller, task, {"assigned_to": uuid4()})


def test_admin_can_reassign_any_task():
    caller = _caller(Role.admin)
    policy_for(caller).ensure_can_update_task(caller, _task(), {"assigned_to": uuid4()})


# -------------------------
# users
# -------------------------

def test_member_reads_and_updates_only_self():
    caller = _caller(Role.member)
    policy = policy_for(caller)

    policy.ensure_can_view_user(caller, caller.id)
    policy.ensure_can_update_user(caller, caller.id, {"name": "New name"})

    with pytest.raises(Forbidden):
        policy.ensure_can_view_user(caller, uuid4())
    with pytest.raises(Forbidden):
        policy.ensure_can_update_user(caller, uuid4(), {"name": "New name"})


def test_member_cannot_change_own_role():
    caller = _caller(Role.member)

    with pytest.raises(Forbidden, match="only admins can change user roles"):
        policy_for(caller).ensure_can_update_user(caller, caller.id, {"role": Role.admin})


def test_admin_can_change_any_role():
    caller = _caller(Role.admin)
    policy_for(caller).ensure_can_update_user(caller, uuid4(), {"role": Role.admin})


def test_incomplete_role_policy_cannot_be_instantiated():
    class ReadOnlyPolicy(AccessPolicy):
        role = Role.member

        async def ensure_can_view_task(self, caller, task, memberships):
            return None

    with pytest.raises(TypeError):
        ReadOnlyPolicy()
