"""
Pytest configuration and fixtures
"""

import itertools
import os
import pytest
import pytest_asyncio
from datetime import datetime, timedelta
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool, StaticPool
from typing import AsyncGenerator
from core.session import ViewerContext
from directory.repository import SQLAlchemyRepository
from models import Base, Resource, ResourceNote, User, UserRole, ResourceStatus

# In-memory SQLite by default; point at PostgreSQL with TEST_DATABASE_URL
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

BASE_TIME = datetime(2024, 1, 15, 10, 0, 0)


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine"""
    if TEST_DATABASE_URL.startswith("sqlite"):
        # One shared connection keeps the in-memory database alive
        engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    else:
        engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
    
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    yield engine
    
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for tests"""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
    
    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def repository(db_session):
    return SQLAlchemyRepository(db_session)


@pytest.fixture
def case_manager():
    return ViewerContext(user_id="1", username="casey", role=UserRole.CASE_MANAGER)


@pytest.fixture
def admin():
    return ViewerContext(user_id="2", username="ada", role=UserRole.ADMIN)


@pytest.fixture
def anonymous():
    return ViewerContext.anonymous()


@pytest.fixture
def make_resource(db_session):
    """
    Factory inserting resources directly. Each call is one minute newer than
    the previous one unless last_updated is given.
    """
    counter = itertools.count()
    
    async def _make(**overrides):
        n = next(counter)
        stamp = BASE_TIME + timedelta(minutes=n)
        values = {
            "organization": f"Organization {n}",
            "program": None,
            "category": "Food",
            "status": ResourceStatus.AVAILABLE,
            "zipcode": "94103",
            "contact_details": {},
            "created_at": stamp,
            "last_updated": stamp,
        }
        values.update(overrides)
        resource = Resource(**values)
        db_session.add(resource)
        await db_session.commit()
        return resource
    
    return _make


@pytest.fixture
def make_note(db_session):
    async def _make(resource_id, content, created_at):
        note = ResourceNote(
            resource_id=resource_id,
            user_id=None,
            username="Anonymous",
            content=content,
            created_at=created_at,
        )
        db_session.add(note)
        await db_session.commit()
        return note
    
    return _make


@pytest_asyncio.fixture
async def case_manager_user(db_session):
    """A persisted user behind the token 'session-1'"""
    user = User(id=1, username="casey", full_name="Casey Jones", role=UserRole.CASE_MANAGER)
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
def sample_resource_data():
    """Valid payload for contributing a resource"""
    return {
        "organization": "Mission Food Hub",
        "program": "Weekly Pantry",
        "category": "Food",
        "zipcode": "94103",
        "contact_details": {
            "address": "701 Alabama St, San Francisco, CA",
            "phone": "(415) 555-0134",
            "services": ["Groceries", "Hot meals"],
            "hours": [{"day": "Monday", "hours": "9am-12pm"}]
        }
    }


@pytest.fixture
def base_time():
    """Timestamp of the first resource built by make_resource"""
    return BASE_TIME
