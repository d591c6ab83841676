import asyncio
import time
import uuid

import jwt
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from eduplatform.data.seed import STUDENT_ID
from eduplatform.dependencies.db import get_database
from eduplatform.main import app
from eduplatform.model import Base, User
from eduplatform.model.enums import UserRole
from eduplatform.repositories import UserRepository
from eduplatform.services.auth_service import AuthService


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_first_request_creates_user(client, seeded, headers_for):
    headers = headers_for("fresh-student", "student", email="fresh@example.com", fullName="Fresh Student")

    response = await client.get("/api/v1/users/me", headers=headers)

    profile = response.json()["data"]
    assert profile["id"] == "fresh-student"
    assert profile["name"] == "Fresh Student"
    assert profile["role"] == "student"
    assert profile["level"] is None
    assert profile["badges"] == []


async def test_profile_lists_badges(client, seeded, student_headers):
    enrolled = await client.post(
        "/api/v1/enrollments", json={"courseId": str(seeded.course.id)}, headers=student_headers
    )
    await client.post(
        f"/api/v1/enrollments/{enrolled.json()['data']['id']}/assessment",
        json={"answers": [1, 3, 1, 1, 1]},
        headers=student_headers,
    )

    profile = (await client.get("/api/v1/users/me", headers=student_headers)).json()["data"]

    assert [b["title"] for b in profile["badges"]] == ["English for Beginners Completion"]
    assert profile["badges"][0]["course"]["title"] == "English for Beginners"


async def test_get_badge_by_id(client, seeded, student_headers):
    enrolled = await client.post(
        "/api/v1/enrollments", json={"courseId": str(seeded.course.id)}, headers=student_headers
    )
    result = await client.post(
        f"/api/v1/enrollments/{enrolled.json()['data']['id']}/assessment",
        json={"answers": [1, 3, 1, 1, 1]},
        headers=student_headers,
    )
    badge_id = result.json()["data"]["badge"]["id"]

    response = await client.get(f"/api/v1/badges/{badge_id}", headers=student_headers)

    assert response.status_code == 200
    assert response.json()["data"]["description"] == "Completed English for Beginners with 100% score"


async def test_unknown_badge(client, seeded, student_headers):
    response = await client.get(f"/api/v1/badges/{uuid.uuid4()}", headers=student_headers)

    assert response.status_code == 404


async def test_malformed_authorization_header(client, seeded):
    response = await client.get("/api/v1/users/me", headers={"Authorization": "Token abc"})

    assert response.status_code == 401


async def test_token_with_wrong_signature(client, seeded):
    token = jwt.encode({"userId": "demo-student"}, "another-secret-key-that-is-long-enough!", algorithm="HS256")

    response = await client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


async def test_expired_token(client, seeded, headers_for):
    headers = headers_for("demo-student", "student", exp=int(time.time()) - 60)

    response = await client.get("/api/v1/users/me", headers=headers)

    assert response.status_code == 401
    assert response.json()["message"] == "Token expired"


def test_most_privileged_role_wins():
    assert AuthService._resolve_role({"roles": ["student", "ADMIN"]}).value == "admin"
    assert AuthService._resolve_role({"role": "teacher", "roles": ["student"]}).value == "teacher"
    assert AuthService._resolve_role({"roles": ["ROLE_USER"]}).value == "student"
    assert AuthService._resolve_role({}).value == "student"


@pytest.fixture
async def file_database(tmp_path):
    """Session factory over a SQLite file, one connection per session, bound to the app."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'users.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    async def override_get_database():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_database] = override_get_database
    yield factory
    app.dependency_overrides.clear()
    await engine.dispose()


async def test_concurrent_first_requests_create_one_user(file_database, headers_for):
    headers = headers_for("brand-new-student", "student", fullName="Brand New")

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        responses = await asyncio.gather(
            client.get("/api/v1/users/me", headers=headers),
            client.get("/api/v1/users/me", headers=headers),
            client.get("/api/v1/badges/my-badges", headers=headers),
        )

    assert [r.status_code for r in responses] == [200, 200, 200]
    async with file_database() as session:
        count = await session.scalar(select(func.count()).select_from(User).where(User.id == "brand-new-student"))
    assert count == 1


class StaleFirstRead(UserRepository):
    """Misses the row on its first lookup, as a request racing another insert would."""

    def __init__(self, session):
        super().__init__(session)
        self._missed = False

    async def get_by_id(self, id):
        if not self._missed:
            self._missed = True
            return None
        return await super().get_by_id(id)


async def test_sync_recovers_when_row_was_inserted_meanwhile(session_factory, seeded):
    async with session_factory() as session:
        user = await StaleFirstRead(session).sync_from_claims(
            STUDENT_ID, UserRole.STUDENT, email="student@eduplatform.com", name="Jane S."
        )

        assert user.id == STUDENT_ID
        assert user.name == "Jane S."

    async with session_factory() as session:
        stored = await UserRepository(session).get_by_id(STUDENT_ID)
        assert stored.name == "Jane S."
