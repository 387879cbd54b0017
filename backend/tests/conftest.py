# tests/conftest.py
import asyncio
import os
import tempfile

# Point the app at a throwaway SQLite file before anything imports settings
_TEST_DB = os.path.join(tempfile.mkdtemp(prefix="pitchcraft-tests-"), "pitchcraft.db")
os.environ["MODE"] = "testing"
os.environ["ASYNC_DATABASE_URI"] = f"sqlite+aiosqlite:///{_TEST_DB}"
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-length-for-hs256"
os.environ["DB_READ_RETRY_DELAY"] = "0"

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel

import pitchcraft.models  # noqa: F401  registers tables
from pitchcraft.db.database import AsyncSessionLocal, engine
from pitchcraft.main import app
from pitchcraft.models.user import User
from pitchcraft.schemas.auth import SessionContext
from pitchcraft.schemas.pitch import GeneratedPitch, IdeaInput


async def _reset_schema():
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)


@pytest.fixture(autouse=True)
def reset_db():
    """Fresh tables for every test."""
    asyncio.run(_reset_schema())
    yield


# -------- Database --------
@pytest.fixture
async def db():
    async with AsyncSessionLocal() as session:
        yield session


async def _make_user(db, email: str) -> User:
    user = User(email=email, hashed_password=None)
    db.add(user)
    await db.commit()
    return user


@pytest.fixture
async def user(db):
    return await _make_user(db, "founder@example.com")


@pytest.fixture
async def other_user(db):
    return await _make_user(db, "rival@example.com")


@pytest.fixture
def session(user):
    return SessionContext(uid=user.id, email=user.email)


# -------- Sample data --------
@pytest.fixture
def idea():
    return IdeaInput(
        idea_name="",
        description="A 30-character idea description.",
        industry="Technology",
        tone="formal",
    )


@pytest.fixture
def generated():
    return GeneratedPitch(
        pitch_name="Acme",
        tagline="Mentors on demand, always",
        pitch="Acme connects students with industry mentors. Book a session in seconds.",
        problem_statement="Students lack access to working professionals.",
        solution_statement="A marketplace for 1-on-1 career calls and mock interviews.",
        target_audience="Final-year university students looking for their first job.",
        landing_copy="Your career, accelerated.\nReal mentors. Real advice.\nStart today.",
    )


# -------- Test client --------
@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def signup():
    """Sign a client up; its cookie jar then carries the session."""
    def _signup(client: TestClient, email: str = "founder@example.com", password: str = "hunter22"):
        r = client.post("/api/v1/auth/signup", json={"email": email, "password": password})
        assert r.status_code == 201, r.text
        return r.json()
    return _signup
