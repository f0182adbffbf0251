"""Shared fixtures for campus portal backend tests."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from campus_portal.api.approvals import get_rate_limiter
from campus_portal.core.database import get_db
from campus_portal.core.rate_limit import InMemoryRateLimiter
from campus_portal.core.security import create_access_token
from campus_portal.main import app
from campus_portal.models import Base
from campus_portal.services.email_service import EmailDeliveryError, OutgoingEmail, get_mailer
from campus_portal.services.storage_service import LocalObjectStore, get_object_store


class RecordingMailer:
    """Collects outgoing email instead of calling the provider."""

    def __init__(self) -> None:
        self.sent: list[OutgoingEmail] = []
        self.fail = False

    async def send(self, email: OutgoingEmail) -> None:
        if self.fail:
            raise EmailDeliveryError("provider unavailable")
        self.sent.append(email)


@pytest_asyncio.fixture
async def engine_test(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    # A file database so each session gets its own connection.
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine_test: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine_test, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def rate_limiter() -> InMemoryRateLimiter:
    return InMemoryRateLimiter(max_requests=10, window_seconds=60)


@pytest.fixture
def object_store(tmp_path) -> LocalObjectStore:
    return LocalObjectStore(tmp_path / "storage")


@pytest_asyncio.fixture
async def client(session_factory, mailer, rate_limiter, object_store) -> AsyncGenerator[AsyncClient, None]:
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_rate_limiter] = lambda: rate_limiter
    app.dependency_overrides[get_object_store] = lambda: object_store

    transport = ASGITransport(app=app)  # type: ignore[arg-type]
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def make_token(subject: str = "user-1", email: str | None = "student@inst.edu") -> str:
    return create_access_token(subject=subject, email=email)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token('user-1')}"}


@pytest.fixture
def other_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token('user-2')}"}
