"""Test infrastructure — in-memory SQLite engine, session, seeded data, httpx client.

Each test gets a fresh in-memory database (StaticPool keeps the single
connection alive for the lifetime of the engine).
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

import member_query.domain  # noqa: F401  register all models with metadata
from member_query.db.base import Base, get_db
from member_query.domain.member import Member
from member_query.domain.team import Team
from member_query.main import app

TEST_DATABASE_URL = "sqlite+aiosqlite://"


# ---------------------------------------------------------------------------
# Engine, session, client
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    eng = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI test client — every request shares the test session."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


class StatementLog:
    """Records every SQL statement sent to the database."""

    def __init__(self):
        self.statements: list[str] = []

    def clear(self) -> None:
        self.statements.clear()

    @property
    def count_queries(self) -> list[str]:
        return [s for s in self.statements if "count(" in s.lower()]

    @property
    def selects(self) -> list[str]:
        return [s for s in self.statements if s.lstrip().upper().startswith("SELECT")]


@pytest.fixture
def sql_log(engine: AsyncEngine):
    log = StatementLog()

    def _record(conn, cursor, statement, parameters, context, executemany):
        log.statements.append(statement)

    event.listen(engine.sync_engine, "before_cursor_execute", _record)
    yield log
    event.remove(engine.sync_engine, "before_cursor_execute", _record)


# ---------------------------------------------------------------------------
# Data fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def add_members(db: AsyncSession):
    """Insert (username, age, team) rows in order and flush."""
    async def _add(*rows: tuple) -> list[Member]:
        created = []
        for username, age, team in rows:
            member = Member(username=username, age=age)
            if team is not None:
                member.change_team(team)
            db.add(member)
            created.append(member)
        await db.flush()
        return created

    return _add


@pytest_asyncio.fixture
async def teams(db: AsyncSession) -> dict[str, Team]:
    team_a = Team(name="TeamA")
    team_b = Team(name="TeamB")
    db.add_all([team_a, team_b])
    await db.flush()
    return {"TeamA": team_a, "TeamB": team_b}


@pytest_asyncio.fixture
async def members(add_members, teams) -> list[Member]:
    """member1..member4 aged 10/20/30/40; 1-2 in TeamA, 3-4 in TeamB."""
    return await add_members(
        ("member1", 10, teams["TeamA"]),
        ("member2", 20, teams["TeamA"]),
        ("member3", 30, teams["TeamB"]),
        ("member4", 40, teams["TeamB"]),
    )
