import os

# Settings are cached on first use, so the environment must be set before
# anything from the application is imported.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["JWT_SECRET"] = "test-secret-key-for-signing-tokens-0123456789"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["EUREKA_ENABLED"] = "false"
os.environ["LEVELING_POLICY"] = "overall"

import jwt
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from eduplatform.data.seed import ADMIN_ID, STUDENT_ID, TEACHER_ID, SeededData, seed_demo_data
from eduplatform.dependencies.db import get_database
from eduplatform.main import app
from eduplatform.model import Base


def make_token(user_id: str, role: str = "student", **claims) -> str:
    payload = {"userId": user_id, "role": role, **claims}
    return jwt.encode(payload, os.environ["JWT_SECRET"], algorithm=os.environ["JWT_ALGORITHM"])


def auth_headers(user_id: str, role: str = "student", **claims) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id, role, **claims)}"}


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def seeded(session_factory) -> SeededData:
    async with session_factory() as session:
        return await seed_demo_data(session)


@pytest.fixture
async def client(session_factory):
    async def override_get_database():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_database] = override_get_database
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def student_headers() -> dict:
    return auth_headers(STUDENT_ID, "student", email="student@eduplatform.com", fullName="Jane Student")


@pytest.fixture
def teacher_headers() -> dict:
    return auth_headers(TEACHER_ID, "teacher", email="teacher@eduplatform.com", fullName="John Teacher")


@pytest.fixture
def admin_headers() -> dict:
    return auth_headers(ADMIN_ID, "admin")


@pytest.fixture
def headers_for():
    """Build bearer headers for an arbitrary identity."""
    return auth_headers
