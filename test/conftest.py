"""
Pytest configuration and fixtures for VidShare tests
"""

import os
import sys
import tempfile
from collections.abc import AsyncGenerator
from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

# Import Base first, before importing the app
from vidshare.auth import create_access_token, hash_password
from vidshare.config import settings
from vidshare.database import Base, enable_sqlite_foreign_keys
from vidshare.models import Channel, User, Video
from vidshare.utils.session import InMemoryViewSessionStore, get_view_session_store


# Test database URL - a throwaway SQLite file by default
# Can be overridden with TEST_DATABASE_URL environment variable
def get_test_database_url():
    """Get test database URL from environment or use a temporary SQLite file"""
    test_url = os.getenv("TEST_DATABASE_URL")
    if test_url:
        return test_url

    db_path = os.path.join(tempfile.gettempdir(), f"vidshare_test_{os.getpid()}.db")  # noqa: PTH118
    return f"sqlite+aiosqlite:///{db_path}"


TEST_DATABASE_URL = get_test_database_url()

# Create test engine and session maker BEFORE importing the app.
# NullPool: every test runs in its own event loop, so connections must not outlive it.
test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
enable_sqlite_foreign_keys(test_engine)

TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, autoflush=False, expire_on_commit=False)

# Now import and patch the app's database components
import vidshare.database as database_module  # noqa: E402
from main import app  # noqa: E402

# Replace the app's engine and session maker with test versions
database_module.engine = test_engine
database_module.AsyncSessionLocal = TestSessionLocal


@pytest.fixture(scope="function")
async def setup_test_database():
    """
    Create a fresh database for each test function that needs it.
    Tests should depend on this fixture (or fixtures that depend on it like test_db)
    to trigger database setup.
    """
    # Drop all tables first to ensure clean state
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(scope="function")
async def test_db(setup_test_database) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a database session for tests that need it.
    Depends on setup_test_database to ensure database is initialized.
    """
    async with TestSessionLocal() as session:
        yield session


class FakeClock:
    """Monotonic clock the tests can move forward"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def view_store(clock: FakeClock) -> InMemoryViewSessionStore:
    """In-memory anonymous view store with a 60 second session lifetime"""
    return InMemoryViewSessionStore(ttl_seconds=60, clock=clock)


@pytest.fixture
async def client(setup_test_database, view_store) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app, backed by the test database and the in-memory view store"""
    app.dependency_overrides[get_view_session_store] = lambda: view_store
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as async_client:
        yield async_client
    app.dependency_overrides.clear()


async def _create_user(db: AsyncSession, username: str, email: str, password: str) -> User:
    user = User(username=username, email=email, hashed_password=hash_password(password))
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest.fixture
async def test_user(test_db: AsyncSession) -> User:
    """Create a test user"""
    return await _create_user(test_db, "testuser", "testuser@example.com", "testpassword")


@pytest.fixture
async def other_user(test_db: AsyncSession) -> User:
    """Create a second, unrelated user"""
    return await _create_user(test_db, "otheruser", "other@example.com", "otherpassword")


def _auth_headers(user: User) -> dict:
    access_token = create_access_token(data={"sub": user.id}, expires_delta=timedelta(minutes=30))
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    """Generate authentication headers for test user"""
    return _auth_headers(test_user)


@pytest.fixture
def other_auth_headers(other_user: User) -> dict:
    """Generate authentication headers for the second user"""
    return _auth_headers(other_user)


@pytest.fixture
async def test_channel(test_db: AsyncSession, test_user: User) -> Channel:
    """Give the test user a channel"""
    channel = Channel(user_id=test_user.id, name="Test Channel")
    test_user.has_channel = True
    test_db.add(channel)
    await test_db.commit()
    await test_db.refresh(channel)
    return channel


@pytest.fixture
async def test_video(test_db: AsyncSession, test_user: User, test_channel: Channel) -> Video:
    """Create a video published by the test user"""
    video = Video(
        title="Test Video",
        description="A video for tests",
        video_url="https://cdn.example.com/videos/test.mp4",
        thumbnail_url="https://cdn.example.com/thumbs/test.jpg",
        created_by=test_user.id,
    )
    test_db.add(video)
    await test_db.commit()
    await test_db.refresh(video)
    return video


@pytest.fixture
def session_factory(setup_test_database) -> async_sessionmaker:
    """Session maker for tests that need several independent sessions at once"""
    return TestSessionLocal


@pytest.fixture
def trusted_proxy(monkeypatch):
    """Honour X-Forwarded-For, as when deployed behind a reverse proxy"""
    monkeypatch.setattr(settings, "trust_forwarded_for", True)
