# tests/test_users_api.py

from __future__ import annotations

from uuid import UUID, uuid4

from teamtasks.core.auth import verify_password
from teamtasks.models import User

from .helpers import auth, error_message


async def test_admin_creates_user_without_exposing_password(client, db, admin):
    res = await client.post(
        "/users",
        json={"name": " Ursula ", "email": "ursula@example.com", "password": "secret123"},
        headers=auth(admin),
    )

    assert res.status_code == 201
    body = res.json()
    assert body["name"] == "Ursula"
    assert body["role"] == "member"
    assert "password" not in body
    assert "passwordHash" not in body

    stored = await db.get(User, UUID(body["id"]))
    assert stored.password_hash != "secret123"
    assert verify_password("secret123", stored.password_hash)


async def test_duplicate_email_is_a_conflict(client, admin, member):
    res = await client.post(
        "/users",
        json={"name": "Copy", "email": member.email, "password": "secret123"},
        headers=auth(admin),
    )
    assert res.status_code == 409
    assert error_message(res) == "User with same email already exists"


async def test_create_user_validates_body(client, admin):
    res = await client.post(
        "/users", json={"name": "U", "email": "nope", "password": "123"}, headers=auth(admin)
    )
    assert res.status_code == 400
    fields = {issue["field"] for issue in res.json()["issues"]}
    assert fields == {"name", "email", "password"}


async def test_member_cannot_create_list_or_delete_users(client, member, outsider):
    body = {"name": "New", "email": "new@example.com", "password": "secret123"}
    assert (await client.post("/users", json=body, headers=auth(member))).status_code == 403
    assert (await client.get("/users", headers=auth(member))).status_code == 403
    assert (await client.delete(f"/users/{outsider.id}", headers=auth(member))).status_code == 403


async def test_admin_lists_users(client, admin, member):
    res = await client.get("/users", headers=auth(admin))

    assert res.status_code == 200
    emails = {u["email"] for u in res.json()}
    assert emails == {admin.email, member.email}
    assert all("passwordHash" not in u for u in res.json())


async def test_read_self_or_as_admin(client, admin, member, outsider):
    assert (await client.get(f"/users/{member.id}", headers=auth(member))).status_code == 200
    assert (await client.get(f"/users/{member.id}", headers=auth(admin))).status_code == 200
    assert (await client.get(f"/users/{outsider.id}", headers=auth(member))).status_code == 403

    # members are refused before existence is checked
    assert (await client.get(f"/users/{uuid4()}", headers=auth(member))).status_code == 403
    assert (await client.get(f"/users/{uuid4()}", headers=auth(admin))).status_code == 404


async def test_member_updates_own_profile(client, member):
    res = await client.put(
        f"/users/{member.id}", json={"name": "Maria Silva", "email": "maria@example.com"}, headers=auth(member)
    )

    assert res.status_code == 200
    assert res.json()["name"] == "Maria Silva"
    assert res.json()["email"] == "maria@example.com"
    assert res.json()["role"] == "member"


async def test_member_cannot_update_others(client, member, outsider):
    res = await client.put(f"/users/{outsider.id}", json={"name": "Hacked"}, headers=auth(member))
    assert res.status_code == 403


async def test_member_cannot_change_own_role(client, member):
    res = await client.put(f"/users/{member.id}", json={"role": "admin"}, headers=auth(member))

    assert res.status_code == 403
    assert "only admins can change user roles" in error_message(res)


async def test_admin_promotes_member(client, admin, member):
    res = await client.put(f"/users/{member.id}", json={"role": "admin"}, headers=auth(admin))
    assert res.status_code == 200
    assert res.json()["role"] == "admin"

    # role is read from storage, so the old token now carries admin rights
    assert (await client.get("/users", headers=auth(member))).status_code == 200


async def test_update_email_conflict(client, admin, member, outsider):
    res = await client.put(f"/users/{member.id}", json={"email": outsider.email}, headers=auth(admin))
    assert res.status_code == 409

    res = await client.put(f"/users/{member.id}", json={"email": member.email}, headers=auth(member))
    assert res.status_code == 200


async def test_update_missing_user_is_not_found(client, admin):
    res = await client.put(f"/users/{uuid4()}", json={"name": "Ghost"}, headers=auth(admin))
    assert res.status_code == 404


async def test_delete_user(client, db, factory, admin, outsider):
    team = await factory.team()
    await factory.membership(outsider, team)

    res = await client.delete(f"/users/{outsider.id}", headers=auth(admin))
    assert res.status_code == 204
    assert res.content == b""
    assert await db.get(User, outsider.id) is None

    assert (await client.delete(f"/users/{outsider.id}", headers=auth(admin))).status_code == 404


async def test_delete_user_with_assigned_tasks_is_a_conflict(client, factory, admin, member, eng):
    await factory.task(member, eng)

    res = await client.delete(f"/users/{member.id}", headers=auth(admin))
    assert res.status_code == 409


async def test_deleted_user_token_is_rejected(client, admin, outsider):
    headers = auth(outsider)
    assert (await client.delete(f"/users/{outsider.id}", headers=auth(admin))).status_code == 204

    res = await client.get(f"/users/{outsider.id}", headers=headers)
    assert res.status_code == 401
