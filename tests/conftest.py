"""Pytest configuration and fixtures."""

import os
import uuid
from datetime import datetime

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("ALLOWED_HOSTS", '["test", "localhost"]')

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from account_rules.main import app
from account_rules.core.database import Base, get_db_session
from account_rules.core.settings import Settings, get_settings
from account_rules.models import Account, Activity, Call, Contact, Invitation, User

# Test database URL (using SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def db_session():
    """Create a test database session on a fresh in-memory database."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    TestSessionLocal = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with TestSessionLocal() as session:
        yield session

    await test_engine.dispose()


@pytest.fixture
def settings():
    """Settings with subscriptions required and a small free tier."""
    return Settings(
        environment="test",
        requires_subscription=True,
        number_of_allowed_contacts_free_account=3,
    )


@pytest_asyncio.fixture
async def client(db_session, settings):
    """Create a test client with database and settings overrides."""

    async def get_test_db():
        yield db_session

    app.dependency_overrides[get_db_session] = get_test_db
    app.dependency_overrides[get_settings] = lambda: settings

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


class RecordFactory:
    """Seeds accounts and their owned records into the test session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def account(self, **kwargs) -> Account:
        data = {
            "name": "Test Account",
            "has_access_to_paid_version_for_free": False,
            "subscription_status": "none",
        }
        data.update(kwargs)
        account = Account(**data)
        self.session.add(account)
        await self.session.flush()
        return account

    async def users(self, account: Account, count: int = 1) -> list:
        users = [
            User(account_id=account.id, email=f"user-{uuid.uuid4().hex[:8]}@example.com")
            for _ in range(count)
        ]
        self.session.add_all(users)
        await self.session.flush()
        return users

    async def invitations(self, account: Account, count: int = 1) -> list:
        invitations = [
            Invitation(account_id=account.id, email=f"invite-{uuid.uuid4().hex[:8]}@example.com")
            for _ in range(count)
        ]
        self.session.add_all(invitations)
        await self.session.flush()
        return invitations

    async def contacts(self, account: Account, count: int = 1, **kwargs) -> list:
        contacts = [
            Contact(account_id=account.id, first_name=f"Contact {i}", **kwargs)
            for i in range(count)
        ]
        self.session.add_all(contacts)
        await self.session.flush()
        return contacts

    async def activities(self, account: Account, count: int, happened_at: datetime) -> list:
        activities = [
            Activity(account_id=account.id, summary="Dinner", happened_at=happened_at)
            for _ in range(count)
        ]
        self.session.add_all(activities)
        await self.session.flush()
        return activities

    async def calls(self, contact: Contact, count: int, called_at: datetime) -> list:
        calls = [
            Call(account_id=contact.account_id, contact_id=contact.id, called_at=called_at)
            for _ in range(count)
        ]
        self.session.add_all(calls)
        await self.session.flush()
        return calls


@pytest.fixture
def factory(db_session):
    """Factory for seeding test records."""
    return RecordFactory(db_session)
