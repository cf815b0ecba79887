"""
ClassHub Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── db_engine: in-memory aiosqlite engine with every table created
    ├── api_client: HTTPX AsyncClient whose requests use db_engine
    ├── make_token / auth_headers: PyJWT bearer tokens for a teacher or student
    └── create_teacher / create_student / create_classroom: API-level factories
"""

import os

# Settings are read when classhub is first imported; override them first.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET"] = "classhub-test-secret-0123456789abcdef"
os.environ["RATE_LIMIT_REQUESTS"] = "10000"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["ENVIRONMENT"] = "dev"

from typing import Any, AsyncGenerator, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import jwt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import classhub.models  # noqa: F401
from classhub.config import settings
from classhub.database import Base, get_db_session


# ══════════════════════════════════════════════════════════════════════════
# Unit-test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_teacher(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = teacher
            result = await teacher_service.get(mock_db_session, teacher.id)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# API Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """A fresh in-memory database per test; StaticPool keeps it on one connection."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def api_client(db_engine) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    The session dependency is replaced by one bound to `db_engine` with the
    same commit-on-success / rollback-on-error behaviour as production.
    """
    from classhub.main import app

    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def make_token():
    def _make(subject: Any, role: str, secret: Optional[str] = None) -> str:
        return jwt.encode(
            {"sub": str(subject), "type": role},
            secret or settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
    return _make


@pytest.fixture
def auth_headers(make_token):
    def _headers(subject: Any, role: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {make_token(subject, role)}"}
    return _headers


@pytest.fixture
def create_teacher(api_client):
    async def _create(name: str = "Ada Lovelace", email: str = "ada@school.test") -> Dict[str, Any]:
        response = await api_client.post("/teachers", json={"name": name, "email": email})
        assert response.status_code == 201, response.text
        return response.json()
    return _create


@pytest.fixture
def create_student(api_client):
    async def _create(name: str, email: str) -> Dict[str, Any]:
        response = await api_client.post("/students", json={"name": name, "email": email})
        assert response.status_code == 201, response.text
        return response.json()
    return _create


@pytest.fixture
def create_classroom(api_client):
    async def _create(
        teacher_id: str,
        student_ids: Optional[List[str]] = None,
        name: str = "Algebra I",
    ) -> Dict[str, Any]:
        response = await api_client.post(
            "/classrooms",
            json={"name": name, "teacher": teacher_id, "students": student_ids or []},
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _create
