"""
Test configuration and fixtures for the MediCamp API.

Each test gets a fresh in-memory SQLite database, an httpx client bound to
the ASGI app, and a fake payment processor in place of Stripe.
"""

import os
from collections.abc import AsyncGenerator

# Select the testing environment before any medicamp module loads settings
os.environ["MEDICAMP_ENV"] = "testing"
os.environ.setdefault(
    "MEDICAMP_SECRET_KEY", "testing-secret-key-at-least-thirty-two-characters"
)

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from faker import Faker  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from hypothesis import HealthCheck  # noqa: E402
from hypothesis import settings as hypothesis_settings  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from medicamp.database import Base, get_async_session  # noqa: E402
from medicamp.main import app  # noqa: E402
from medicamp.models import Camp, Registration, User, UserType  # noqa: E402
from medicamp.services import get_payment_processor  # noqa: E402
from tests.fixtures.factories import add_registration, auth_headers  # noqa: E402
from tests.fixtures.faker_providers import create_faker  # noqa: E402

hypothesis_settings.register_profile(
    "test",
    max_examples=10,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)
hypothesis_settings.load_profile("test")

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakePaymentProcessor:
    """Records requested amounts and returns a fixed client secret."""

    client_secret = "pi_test_secret_123"

    def __init__(self):
        self.amounts: list[float] = []

    async def create_payment_intent(self, amount: float) -> str:
        self.amounts.append(amount)
        return self.client_secret


@pytest.fixture
def fake() -> Faker:
    return create_faker()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
def payment_processor() -> FakePaymentProcessor:
    return FakePaymentProcessor()


@pytest_asyncio.fixture
async def client(session_maker, payment_processor) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app with database and Stripe overridden."""

    async def override_get_async_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_payment_processor] = lambda: payment_processor

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def participant(db_session) -> User:
    user = User(email="participant@example.com", name="Pat Participant")
    db_session.add(user)
    await db_session.commit()
    return user


@pytest_asyncio.fixture
async def organizer(db_session) -> User:
    user = User(
        email="organizer@example.com", name="Olive Organizer", type=UserType.ORGANIZER
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
def participant_headers(participant) -> dict[str, str]:
    return auth_headers(participant.email, participant.name)


@pytest.fixture
def organizer_headers(organizer) -> dict[str, str]:
    return auth_headers(organizer.email, organizer.name)


@pytest_asyncio.fixture
async def camp(db_session, fake) -> Camp:
    camp = Camp(
        camp_name=fake.camp_name(),
        location=fake.city(),
        healthcare_professional=fake.healthcare_professional(),
        date_time=fake.camp_datetime(),
        camp_fees=25.0,
    )
    db_session.add(camp)
    await db_session.commit()
    return camp


@pytest_asyncio.fixture
async def registration(db_session, camp, participant) -> Registration:
    return await add_registration(db_session, camp, participant.email)
