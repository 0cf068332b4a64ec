import os

# Keep the module-level engine off PostgreSQL while testing
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
import pytest_asyncio
from datetime import date
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from finance_manager.main import FinanceServices, init_db
from finance_manager.schemas.user import UserCreate

TODAY = date(2024, 6, 15)

@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    await init_db(engine)
    yield engine
    await engine.dispose()

@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session

@pytest.fixture
def services(db):
    return FinanceServices.for_session(db, today=lambda: TODAY)

async def register(services, username, full_name="Test User"):
    profile = await services.users.register_user(
        UserCreate(username=username, password="secret123", full_name=full_name)
    )
    return profile.id

@pytest_asyncio.fixture
async def user_id(services):
    return await register(services, "alice@example.com", "Alice")

@pytest_asyncio.fixture
async def other_user_id(services):
    return await register(services, "bob@example.com", "Bob")
