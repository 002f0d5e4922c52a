# tests/conftest.py

from __future__ import annotations

import os

# Settings are read at import time; point them at throwaway values first.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["LOG_FILE"] = ""
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from teamtasks.core.auth import hash_password
from teamtasks.core.database import Base, get_db
from teamtasks.main import app
from teamtasks.models import Role, Task, Team, TeamMember, User


@pytest_asyncio.fixture()
async def session_factory():
    """
    Fresh in-memory SQLite database per test.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)

    await engine.dispose()


@pytest_asyncio.fixture()
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


class Factory:
    """Inserts rows directly, bypassing the API."""

    def __init__(self, session_factory):
        self.session_factory = session_factory
        self._counter = 0

    async def _save(self, obj):
        async with self.session_factory() as session:
            session.add(obj)
            await session.commit()
            await session.refresh(obj)
        return obj

    async def user(self, name: str = "Member", role: Role = Role.member, email: str | None = None,
                   password: str = "secret123") -> User:
        self._counter += 1
        email = email or f"user{self._counter}@example.com"
        return await self._save(
            User(name=name, email=email, password_hash=hash_password(password), role=role)
        )

    async def admin(self, name: str = "Admin") -> User:
        return await self.user(name=name, role=Role.admin)

    async def team(self, name: str | None = None, description: str | None = None) -> Team:
        self._counter += 1
        return await self._save(Team(name=name or f"Team {self._counter}", description=description))

    async def membership(self, user: User, team: Team) -> TeamMember:
        return await self._save(TeamMember(user_id=user.id, team_id=team.id))

    async def task(self, assignee: User, team: Team | None, title: str = "Write report", **fields) -> Task:
        return await self._save(
            Task(title=title, assigned_to=assignee.id, team_id=team.id if team else None, **fields)
        )


@pytest.fixture()
def factory(session_factory) -> Factory:
    return Factory(session_factory)


@pytest_asyncio.fixture()
async def admin(factory) -> User:
    return await factory.admin()


@pytest_asyncio.fixture()
async def member(factory) -> User:
    return await factory.user(name="Maria")


@pytest_asyncio.fixture()
async def outsider(factory) -> User:
    return await factory.user(name="Otto")


@pytest_asyncio.fixture()
async def eng(factory, member) -> Team:
    """Team "Eng" with ``member`` in it."""
    team = await factory.team(name="Eng")
    await factory.membership(member, team)
    return team
