import pytest
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import NullPool
import tempfile
import os
from httpx import AsyncClient, ASGITransport

from parking_reservation.application.payments import AbstractPaymentGateway, PaymentResult
from parking_reservation.application.services.analytics_service import AnalyticsService
from parking_reservation.application.services.booking_service import BookingService
from parking_reservation.application.services.slot_service import SlotService
from parking_reservation.application.services.user_service import UserService
from parking_reservation.config.settings_env import Settings
from parking_reservation.infrastructure.persistence.models.models import Base
from parking_reservation.infrastructure.persistence.sqlalchemy_repositories import (
    SQLAlchemyUserRepository,
    SQLAlchemyParkingSlotRepository,
    SQLAlchemyBookingRepository,
)


class FakePaymentGateway(AbstractPaymentGateway):
    """Records gateway calls and answers with configurable statuses."""

    def __init__(self, charge_status: str = "succeeded", refund_status: str = "succeeded"):
        self.charge_status = charge_status
        self.refund_status = refund_status
        self.charges = []
        self.refunds = []

    async def charge(self, amount_cents, currency, payment_method_id, description, metadata=None):
        self.charges.append({
            "amount_cents": amount_cents,
            "currency": currency,
            "payment_method_id": payment_method_id,
            "description": description,
            "metadata": metadata,
        })
        return PaymentResult(id=f"pi_test_{len(self.charges)}", status=self.charge_status, amount_cents=amount_cents)

    async def refund(self, payment_id, amount_cents):
        self.refunds.append({"payment_id": payment_id, "amount_cents": amount_cents})
        return PaymentResult(id=f"re_test_{len(self.refunds)}", status=self.refund_status, amount_cents=amount_cents)


@pytest.fixture(scope="function")
async def test_db():
    """Create a test database for each test function."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as tmp_file:
        test_db_path = tmp_file.name

    test_db_url = f"sqlite+aiosqlite:///{test_db_path}"
    engine = create_async_engine(
        test_db_url,
        poolclass=NullPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    yield async_session_maker

    await engine.dispose()
    os.unlink(test_db_path)


@pytest.fixture
async def db_session(test_db):
    """Create a database session for a test."""
    async with test_db() as session:
        yield session
        await session.rollback()


@pytest.fixture
def test_settings():
    """Provide test settings."""
    return Settings(
        DATABASE_URL="sqlite:///:memory:",
        ASYNC_DATABASE_URL="sqlite+aiosqlite:///:memory:",
        STRIPE_SECRET_KEY="sk_test_123",
        REFUND_PERCENTAGE=80,
        SEED_SLOT_COUNT=10
    )


@pytest.fixture
async def sample_users(db_session: AsyncSession):
    """Create an admin and two regular users."""
    from parking_reservation.infrastructure.persistence.models.models import User

    users = {
        "admin": User(name="Ada Admin", email="ada@example.com", role="admin"),
        "alice": User(name="Alice", email="alice@example.com", role="user"),
        "bob": User(name="Bob", email="bob@example.com", role="user"),
    }
    db_session.add_all(users.values())
    await db_session.commit()
    for user in users.values():
        await db_session.refresh(user)
    return users


@pytest.fixture
async def init_parking_slots(db_session: AsyncSession):
    """Create A-01..A-05; A-05 is under maintenance."""
    from parking_reservation.infrastructure.persistence.models.models import ParkingSlot

    slot_types = ["standard", "standard", "disabled", "electric", "family"]
    slots = []
    for position, slot_type in enumerate(slot_types, start=1):
        slot = ParkingSlot(
            slot_number=f"A-{position:02d}",
            slot_type=slot_type,
            status="maintenance" if position == 5 else "available",
            hourly_rate=5.0,
            daily_rate=30.0
        )
        slots.append(slot)
        db_session.add(slot)

    await db_session.commit()
    for slot in slots:
        await db_session.refresh(slot)
    return slots


@pytest.fixture
def payment_gateway():
    return FakePaymentGateway()


@pytest.fixture
async def booking_service(db_session, payment_gateway):
    """Create a BookingService instance with test database session."""
    return BookingService(
        booking_repo=SQLAlchemyBookingRepository(db_session),
        parking_slot_repo=SQLAlchemyParkingSlotRepository(db_session),
        payment_gateway=payment_gateway,
        currency="usd",
        refund_percentage=80
    )


@pytest.fixture
async def slot_service(db_session):
    return SlotService(
        parking_slot_repo=SQLAlchemyParkingSlotRepository(db_session),
        booking_repo=SQLAlchemyBookingRepository(db_session)
    )


@pytest.fixture
async def analytics_service(db_session):
    return AnalyticsService(
        parking_slot_repo=SQLAlchemyParkingSlotRepository(db_session),
        booking_repo=SQLAlchemyBookingRepository(db_session)
    )


@pytest.fixture
async def user_service(db_session):
    return UserService(SQLAlchemyUserRepository(db_session))


@pytest.fixture
async def api_client(test_db, payment_gateway):
    """HTTP client bound to the app with the test database and fake gateway."""
    from parking_reservation.infrastructure.api.main import app
    from parking_reservation.infrastructure.api.dependencies import get_payment_gateway
    from parking_reservation.infrastructure.persistence.database import get_async_db

    async def override_get_async_db():
        async with test_db() as session:
            yield session

    app.dependency_overrides[get_async_db] = override_get_async_db
    app.dependency_overrides[get_payment_gateway] = lambda: payment_gateway

    async with AsyncClient(transport=ASGITransport(app=app, raise_app_exceptions=False), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
