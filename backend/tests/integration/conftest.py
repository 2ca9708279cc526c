"""Fixtures for tests that run against a real (temporary SQLite) database."""

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from car_inventory.config import get_settings
from car_inventory.domain.entities import User, UserRole
from car_inventory.infrastructure.database import Base
from car_inventory.infrastructure.database.repositories import SQLAlchemyUserRepository
from car_inventory.infrastructure.database.session import get_db_session
from car_inventory.infrastructure.dependencies import get_photo_storage, get_token_service
from car_inventory.infrastructure.security import PasslibPasswordHasher
from car_inventory.infrastructure.storage.local_photo_storage import LocalPhotoStorage
from car_inventory.main import app

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "Admin12345"


@pytest_asyncio.fixture
async def session_factory(tmp_path: Path) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def photo_storage(tmp_path: Path) -> LocalPhotoStorage:
    settings = get_settings()
    return LocalPhotoStorage(
        tmp_path / "uploads",
        url_prefix=settings.photo_url_prefix,
        max_size=settings.max_upload_size_bytes,
    )


@pytest_asyncio.fixture
async def client(session_factory, photo_storage) -> AsyncIterator[AsyncClient]:
    async def _session_override() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _session_override
    app.dependency_overrides[get_photo_storage] = lambda: photo_storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def user_headers(client: AsyncClient) -> dict[str, str]:
    response = await client.post(
        "/api/v1/auth/register",
        json={"email": "seller@example.com", "password": "Password123", "name": "Seller"},
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest_asyncio.fixture
async def admin_headers(session_factory) -> dict[str, str]:
    async with session_factory() as session:
        admin = await SQLAlchemyUserRepository(session).create(
            User(
                email=ADMIN_EMAIL,
                name="Admin",
                password_hash=PasslibPasswordHasher().hash(ADMIN_PASSWORD),
                role=UserRole.ADMIN,
            )
        )
        await session.commit()
    return {"Authorization": f"Bearer {get_token_service().create_access_token(admin)}"}
