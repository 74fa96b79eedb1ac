"""Shared pytest fixtures for the lingochat test suite.

Provides:
  - MockLLMProvider: LLMProvider returning configurable text or raising
  - MockRedisClient: in-memory RedisClient with an optional outage switch
  - FakeWebSocket: records frames sent through the RoomBroadcaster
  - session_factory: async sessions over a throwaway SQLite database
  - app / client: the FastAPI app wired to SQLite and the lookup translator

All external services are mocked; no test talks to Gemini, Redis or Postgres.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

import lingochat.models  # noqa: F401
from lingochat.core.exceptions import RedisConnectionError
from lingochat.core.security import hash_password
from lingochat.db.database import Base, build_engine, build_session_factory
from lingochat.main import create_app
from lingochat.models.room import Room
from lingochat.models.user import User, avatar_for
from lingochat.services.chat.broadcaster import RoomBroadcaster
from lingochat.services.language.translator import LookupTranslator
from lingochat.services.llm.base import LLMProvider, LLMResponse


# ---------------------------------------------------------------------------
# Mock LLM Provider
# ---------------------------------------------------------------------------


class MockLLMProvider(LLMProvider):
    """Mock LLM provider for testing. Returns configurable responses."""

    def __init__(
        self,
        generate_text: str = "Mock response",
        error: Exception | None = None,
    ) -> None:
        self._generate_text = generate_text
        self._error = error
        self.generate_calls: list[dict[str, Any]] = []

    async def generate(
        self,
        prompt: str,
        system_prompt: str,
        max_tokens: int = 1000,
        temperature: float = 0.3,
    ) -> LLMResponse:
        self.generate_calls.append(
            {
                "prompt": prompt,
                "system_prompt": system_prompt,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
        )
        if self._error is not None:
            raise self._error
        return LLMResponse(
            text=self._generate_text,
            input_tokens=50,
            output_tokens=10,
        )


# ---------------------------------------------------------------------------
# Mock Redis Client
# ---------------------------------------------------------------------------


class MockRedisClient:
    """In-memory mock of RedisClient for testing."""

    def __init__(self, available: bool = True) -> None:
        self.available = available
        self._store: dict[str, str] = {}
        self._ttls: dict[str, int] = {}

    def _check(self) -> None:
        if not self.available:
            raise RedisConnectionError("Redis unavailable")

    async def set_with_ttl(self, key: str, value: str, ttl_seconds: int) -> None:
        self._check()
        self._store[key] = value
        self._ttls[key] = ttl_seconds

    async def get(self, key: str) -> str | None:
        self._check()
        return self._store.get(key)


# ---------------------------------------------------------------------------
# Fake WebSocket
# ---------------------------------------------------------------------------


class FakeWebSocket:
    """Stands in for a Starlette WebSocket inside the RoomBroadcaster."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.frames: list[dict[str, Any]] = []

    async def send_json(self, data: Any, mode: str = "text") -> None:
        if self.fail:
            raise RuntimeError("socket closed")
        self.frames.append(data)

    def events(self, name: str) -> list[Any]:
        return [f["data"] for f in self.frames if f["event"] == name]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_llm() -> MockLLMProvider:
    """Mock LLM provider fixture."""
    return MockLLMProvider()


@pytest.fixture
def mock_redis() -> MockRedisClient:
    """Mock Redis client fixture."""
    return MockRedisClient()


@pytest.fixture
def broadcaster() -> RoomBroadcaster:
    return RoomBroadcaster()


@pytest.fixture
def database_url(tmp_path: Any) -> str:
    """A fresh SQLite file with the full schema, as an async URL.

    The schema is created through a plain sync engine so fixture setup never
    touches the event loop the async test runs on.
    """
    path = tmp_path / "lingochat.db"
    sync_engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
def session_factory(database_url: str) -> async_sessionmaker[AsyncSession]:
    """Async session factory. NullPool keeps no connection across event loops."""
    return build_session_factory(build_engine(database_url, poolclass=NullPool))


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession],
    broadcaster: RoomBroadcaster,
) -> FastAPI:
    return create_app(
        session_factory=session_factory,
        translator=LookupTranslator(),
        broadcaster=broadcaster,
    )


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


# ---------------------------------------------------------------------------
# Seed helpers
# ---------------------------------------------------------------------------


async def create_user(
    factory: async_sessionmaker[AsyncSession],
    email: str,
    name: str,
    preferred_language: str = "en",
) -> User:
    async with factory() as db:
        user = User(
            email=email,
            password_hash=hash_password("secret"),
            name=name,
            preferred_language=preferred_language,
            avatar=avatar_for(email),
        )
        db.add(user)
        await db.commit()
        return user


async def create_room(
    factory: async_sessionmaker[AsyncSession],
    *participants: User,
    name: str = "Test room",
) -> uuid.UUID:
    async with factory() as db:
        members = [await db.get(User, p.id) for p in participants]
        room = Room(name=name, participants=members)
        db.add(room)
        await db.commit()
        return room.id


def register(
    client: TestClient,
    email: str,
    name: str,
    preferred_language: str = "en",
    password: str = "secret",
) -> dict[str, Any]:
    """Register through the API; returns the ``{token, user}`` body."""
    response = client.post(
        "/api/auth/register",
        json={
            "email": email,
            "password": password,
            "name": name,
            "preferredLanguage": preferred_language,
        },
    )
    assert response.status_code == 200, response.text
    return response.json()


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
