"""Tests for user registration and login."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from app.models.database import Base
from app.models.user import User
from app.services.users import UserService


@pytest_asyncio.fixture
async def db_session():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def user_service():
    return UserService()


@pytest.mark.asyncio
async def test_register(db_session, user_service):
    user = await user_service.register(db_session, "asha@example.com", "secret", "Asha Rao")
    assert user.id is not None
    assert user.full_name == "Asha Rao"


@pytest.mark.asyncio
async def test_register_duplicate_email(db_session, user_service):
    await user_service.register(db_session, "asha@example.com", "secret", "Asha Rao")
    again = await user_service.register(db_session, "asha@example.com", "other", "Asha")
    assert again is None


@pytest.mark.asyncio
async def test_authenticate(db_session, user_service):
    created = await user_service.register(db_session, "asha@example.com", "secret", "Asha")
    user = await user_service.authenticate(db_session, "asha@example.com", "secret")
    assert user is not None
    assert user.id == created.id


@pytest.mark.asyncio
async def test_authenticate_wrong_password(db_session, user_service):
    await user_service.register(db_session, "asha@example.com", "secret", "Asha")
    assert await user_service.authenticate(db_session, "asha@example.com", "nope") is None
    assert await user_service.authenticate(db_session, "ghost@example.com", "secret") is None


@pytest.mark.asyncio
async def test_get_user(db_session, user_service):
    created = await user_service.register(db_session, "asha@example.com", "secret", "Asha")
    assert (await user_service.get_user(db_session, created.id)).email == "asha@example.com"
    assert await user_service.get_user(db_session, 999) is None
