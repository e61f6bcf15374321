# ============================================================================
# Test Configuration & Fixtures
# ============================================================================
import os

# Must be set before the app (and database module) are imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("DEBUG", "false")

import pytest
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from unittest.mock import AsyncMock, MagicMock

from app.main import app
from app.api.deps import get_account_service
from app.core.database import Base, get_db
from app.core.security import create_access_token, get_password_hash
from app.models.user import User
from app.services.accounts.account_service import AccountService

# Test database URL (use SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///./test.db"

# NullPool: every test runs on its own event loop
test_engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    poolclass=NullPool,
)

test_session_maker = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

@pytest.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with test_session_maker() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

@pytest.fixture
def session_maker():
    """Session factory for code that opens its own sessions"""
    return test_session_maker

@pytest.fixture
def mock_cache():
    """Redis cache double backed by a dict"""
    store = {}

    async def _get(key):
        return store.get(key)

    async def _set(key, value, ttl=3600):
        store[key] = value

    async def _delete(key):
        store.pop(key, None)

    async def _increment(key, window):
        store[key] = int(store.get(key, 0)) + 1
        return store[key]

    cache = MagicMock()
    cache.store = store
    cache.get = AsyncMock(side_effect=_get)
    cache.set = AsyncMock(side_effect=_set)
    cache.delete = AsyncMock(side_effect=_delete)
    cache.increment = AsyncMock(side_effect=_increment)
    cache.ttl = AsyncMock(return_value=180)
    return cache

@pytest.fixture(scope="function")
async def client(db_session: AsyncSession, mock_cache) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with overridden database and cache"""
    async def override_get_db():
        yield db_session

    async def override_account_service():
        return AccountService(db_session, mock_cache)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_account_service] = override_account_service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()

@pytest.fixture
def make_user(db_session: AsyncSession):
    """Factory inserting a user with arbitrary progression values"""
    counter = {"n": 0}

    async def _make_user(**fields) -> User:
        counter["n"] += 1
        n = counter["n"]
        fields.setdefault("username", f"player{n}")
        fields.setdefault("email", f"player{n}@example.com")
        password = fields.pop("password", "password123")
        user = User(password_hash=get_password_hash(password), **fields)
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _make_user

@pytest.fixture
def auth_headers():
    def _headers(user: User) -> dict:
        token = create_access_token({"sub": str(user.id)})
        return {"Authorization": f"Bearer {token}"}
    return _headers

@pytest.fixture
def sample_user_data():
    """Sample registration payload"""
    return {
        "username": "tatenda",
        "email": "tatenda@example.com",
        "password": "password123",
    }
