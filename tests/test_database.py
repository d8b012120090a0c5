import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch
from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session

from parking_reservation.domain.common import SlotStatus, BookingStatus, UserRole
from parking_reservation.domain.entities import User as UserEntity
from parking_reservation.infrastructure.persistence import database
from parking_reservation.infrastructure.persistence.database import init_db, seed_slot_type
from parking_reservation.infrastructure.persistence.models.models import User, ParkingSlot, Booking
from parking_reservation.infrastructure.persistence.sqlalchemy_repositories import (
    SQLAlchemyUserRepository,
    SQLAlchemyParkingSlotRepository,
    SQLAlchemyBookingRepository,
)

BASE_TIME = datetime(2030, 1, 7, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def sync_engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'seed.db'}")
    yield engine
    engine.dispose()


class TestInitDb:
    """Test table creation and seeding."""

    def test_seeds_slots_and_admin(self, sync_engine):
        with patch.object(database.settings, "SEED_SLOT_COUNT", 8), \
                patch.object(database.settings, "SEED_ADMIN_EMAIL", "Boss@Example.com"):
            init_db(sync_engine)

        with Session(sync_engine) as session:
            slots = session.execute(select(ParkingSlot).order_by(ParkingSlot.slot_number)).scalars().all()
            admins = session.execute(select(User).where(User.role == "admin")).scalars().all()

        assert [s.slot_number for s in slots] == [f"A-{n:02d}" for n in range(1, 9)]
        assert [s.slot_type for s in slots] == [
            "disabled", "disabled", "family", "family", "electric", "electric", "standard", "standard"
        ]
        assert all(s.status == "available" for s in slots)
        assert [a.email for a in admins] == ["boss@example.com"]

    def test_is_idempotent(self, sync_engine):
        with patch.object(database.settings, "SEED_SLOT_COUNT", 3):
            init_db(sync_engine)
            init_db(sync_engine)

        with Session(sync_engine) as session:
            assert len(session.execute(select(ParkingSlot)).scalars().all()) == 3
            assert len(session.execute(select(User)).scalars().all()) == 1

    def test_skips_admin_without_email(self, sync_engine):
        with patch.object(database.settings, "SEED_SLOT_COUNT", 0), \
                patch.object(database.settings, "SEED_ADMIN_EMAIL", None):
            init_db(sync_engine)

        with Session(sync_engine) as session:
            assert session.execute(select(User)).scalars().all() == []
            assert session.execute(select(ParkingSlot)).scalars().all() == []

    @pytest.mark.parametrize("position, expected", [
        (1, "disabled"), (3, "family"), (6, "electric"), (7, "standard"), (40, "standard")
    ])
    def test_seed_slot_type(self, position, expected):
        assert seed_slot_type(position) == expected


class TestModels:
    """Test model constraints."""

    async def test_unique_slot_number(self, db_session, init_parking_slots):
        db_session.add(ParkingSlot(slot_number="A-01", hourly_rate=5.0, daily_rate=30.0))
        with pytest.raises(Exception):  # IntegrityError
            await db_session.commit()

    async def test_unique_email(self, db_session, sample_users):
        db_session.add(User(name="Alice Again", email="alice@example.com"))
        with pytest.raises(Exception):  # IntegrityError
            await db_session.commit()

    async def test_slot_defaults(self, db_session):
        slot = ParkingSlot(slot_number="D-01")
        db_session.add(slot)
        await db_session.commit()
        await db_session.refresh(slot)

        assert slot.status == "available"
        assert slot.slot_type == "standard"
        assert slot.hourly_rate == 5.0
        assert slot.daily_rate == 30.0

    async def test_booking_relationships(self, db_session, sample_users, init_parking_slots):
        booking = Booking(
            user_id=sample_users["alice"].id,
            slot_id=init_parking_slots[0].id,
            start_time=BASE_TIME,
            end_time=BASE_TIME + timedelta(hours=1),
            duration_hours=1.0,
            amount=5.0
        )
        db_session.add(booking)
        await db_session.commit()
        await db_session.refresh(booking, ["user", "slot"])

        assert booking.status == "active"
        assert booking.payment_status == "pending"
        assert booking.created_at is not None
        assert booking.user.email == "alice@example.com"
        assert booking.slot.slot_number == "A-01"
        assert booking.start_time == BASE_TIME


class TestRepositories:
    """Test repository queries not covered through the services."""

    async def test_user_repository(self, db_session):
        repo = SQLAlchemyUserRepository(db_session)
        created = await repo.add(UserEntity(name="Carol", email="Carol@Example.com", role=UserRole.ADMIN))

        assert created.id is not None
        assert created.email == "carol@example.com"
        assert (await repo.get_by_email("CAROL@example.com")).id == created.id
        assert (await repo.get_by_id(created.id)).is_admin is True
        assert await repo.get_by_id(999) is None

    async def test_slot_repository_lookups(self, db_session, init_parking_slots):
        repo = SQLAlchemyParkingSlotRepository(db_session)

        assert (await repo.get_by_slot_number("A-03")).id == init_parking_slots[2].id
        assert await repo.get_by_slot_number("Z-99") is None
        assert len(await repo.get_all()) == 5
        assert [s.slot_number for s in await repo.get_by_status(SlotStatus.MAINTENANCE)] == ["A-05"]
        assert await repo.count_by_status() == {SlotStatus.AVAILABLE: 4, SlotStatus.MAINTENANCE: 1}

    async def test_find_overlapping_across_slots(self, db_session, sample_users, init_parking_slots):
        for slot, offset, status in [
            (init_parking_slots[0], 0, "active"),
            (init_parking_slots[1], 1, "active"),
            (init_parking_slots[2], 1, "cancelled"),
            (init_parking_slots[3], 2, "completed"),
        ]:
            db_session.add(Booking(
                user_id=sample_users["alice"].id,
                slot_id=slot.id,
                start_time=BASE_TIME + timedelta(hours=offset),
                end_time=BASE_TIME + timedelta(hours=offset + 2),
                duration_hours=2.0,
                amount=10.0,
                status=status
            ))
        await db_session.commit()

        repo = SQLAlchemyBookingRepository(db_session)
        found = await repo.find_overlapping(BASE_TIME + timedelta(hours=1), BASE_TIME + timedelta(hours=2))
        on_first_slot = await repo.find_overlapping(
            BASE_TIME + timedelta(hours=1), BASE_TIME + timedelta(hours=2), slot_id=init_parking_slots[0].id
        )
        touching = await repo.find_overlapping(BASE_TIME + timedelta(hours=3), BASE_TIME + timedelta(hours=5))

        assert {b.slot_id for b in found} == {init_parking_slots[0].id, init_parking_slots[1].id}
        assert [b.slot_id for b in on_first_slot] == [init_parking_slots[0].id]
        assert [b.slot_id for b in touching] == [init_parking_slots[1].id]
        assert await repo.count_by_status(BookingStatus.ACTIVE) == 2
        assert await repo.count_by_status(BookingStatus.CANCELLED, slot_id=init_parking_slots[2].id) == 1
