from typing import List, Optional, Dict
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, and_, delete, update
from sqlalchemy.orm import selectinload

from parking_reservation.domain.entities import User, ParkingSlot, Booking
from parking_reservation.domain.common import SlotStatus, SlotType, PaymentStatus, BookingStatus, UserRole
from parking_reservation.infrastructure.persistence.models.models import (
    User as ORMUser,
    ParkingSlot as ORMParkingSlot,
    Booking as ORMBooking,
)
from parking_reservation.application.repositories import (
    AbstractUserRepository,
    AbstractParkingSlotRepository,
    AbstractBookingRepository,
)


def _to_user(orm_user: ORMUser) -> User:
    return User(
        id=orm_user.id,
        name=orm_user.name,
        email=orm_user.email,
        role=UserRole(orm_user.role),
        created_at=orm_user.created_at
    )


def _to_slot(orm_slot: ORMParkingSlot) -> ParkingSlot:
    return ParkingSlot(
        id=orm_slot.id,
        slot_number=orm_slot.slot_number,
        slot_type=SlotType(orm_slot.slot_type),
        status=SlotStatus(orm_slot.status),
        hourly_rate=orm_slot.hourly_rate,
        daily_rate=orm_slot.daily_rate
    )


def _to_booking(orm_booking: ORMBooking, with_slot: bool = False, with_user: bool = False) -> Booking:
    return Booking(
        id=orm_booking.id,
        user_id=orm_booking.user_id,
        slot_id=orm_booking.slot_id,
        start_time=orm_booking.start_time,
        end_time=orm_booking.end_time,
        duration_hours=orm_booking.duration_hours,
        amount=orm_booking.amount,
        payment_status=PaymentStatus(orm_booking.payment_status),
        payment_id=orm_booking.payment_id,
        refund_id=orm_booking.refund_id,
        refund_amount=orm_booking.refund_amount,
        status=BookingStatus(orm_booking.status),
        created_at=orm_booking.created_at,
        slot=_to_slot(orm_booking.slot) if with_slot and orm_booking.slot else None,
        user=_to_user(orm_booking.user) if with_user and orm_booking.user else None,
    )


class SQLAlchemyUserRepository(AbstractUserRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: int) -> Optional[User]:
        orm_user = await self.session.get(ORMUser, user_id)
        return _to_user(orm_user) if orm_user else None

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(
            select(ORMUser).where(ORMUser.email == email.lower())
        )
        orm_user = result.scalars().first()
        return _to_user(orm_user) if orm_user else None

    async def add(self, user: User) -> User:
        orm_user = ORMUser(
            name=user.name,
            email=user.email.lower(),
            role=UserRole(user.role).value
        )
        self.session.add(orm_user)
        await self.session.flush()
        await self.session.refresh(orm_user)
        await self.session.commit()
        return _to_user(orm_user)

    async def get_all(self) -> List[User]:
        result = await self.session.execute(select(ORMUser).order_by(ORMUser.id))
        return [_to_user(u) for u in result.scalars().all()]


class SQLAlchemyParkingSlotRepository(AbstractParkingSlotRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, slot_id: int) -> Optional[ParkingSlot]:
        orm_slot = await self.session.get(ORMParkingSlot, slot_id)
        return _to_slot(orm_slot) if orm_slot else None

    async def get_by_slot_number(self, slot_number: str) -> Optional[ParkingSlot]:
        result = await self.session.execute(
            select(ORMParkingSlot).where(ORMParkingSlot.slot_number == slot_number)
        )
        orm_slot = result.scalars().first()
        return _to_slot(orm_slot) if orm_slot else None

    async def get_all(self) -> List[ParkingSlot]:
        result = await self.session.execute(
            select(ORMParkingSlot).order_by(ORMParkingSlot.slot_number)
        )
        return [_to_slot(s) for s in result.scalars().all()]

    async def get_by_status(self, status: SlotStatus) -> List[ParkingSlot]:
        result = await self.session.execute(
            select(ORMParkingSlot)
            .where(ORMParkingSlot.status == SlotStatus(status).value)
            .order_by(ORMParkingSlot.slot_number)
        )
        return [_to_slot(s) for s in result.scalars().all()]

    async def add(self, slot: ParkingSlot) -> ParkingSlot:
        orm_slot = ORMParkingSlot(
            slot_number=slot.slot_number,
            slot_type=SlotType(slot.slot_type).value,
            status=SlotStatus(slot.status).value,
            hourly_rate=slot.hourly_rate,
            daily_rate=slot.daily_rate
        )
        self.session.add(orm_slot)
        await self.session.flush()
        await self.session.refresh(orm_slot)
        await self.session.commit()
        return _to_slot(orm_slot)

    async def update(self, slot: ParkingSlot) -> ParkingSlot:
        orm_slot = await self.session.get(ORMParkingSlot, slot.id)
        if orm_slot:
            orm_slot.slot_number = slot.slot_number
            orm_slot.slot_type = SlotType(slot.slot_type).value
            orm_slot.status = SlotStatus(slot.status).value
            orm_slot.hourly_rate = slot.hourly_rate
            orm_slot.daily_rate = slot.daily_rate
            await self.session.flush()
            await self.session.refresh(orm_slot)
            await self.session.commit()
            return _to_slot(orm_slot)
        raise ValueError(f"Parking slot with ID {slot.id} not found.")

    async def delete(self, slot_id: int) -> None:
        # Bookings outlive their slot; detach them before the row goes
        await self.session.execute(
            update(ORMBooking)
            .where(ORMBooking.slot_id == slot_id)
            .values(slot_id=None)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.execute(
            delete(ORMParkingSlot)
            .where(ORMParkingSlot.id == slot_id)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.commit()

    async def count_by_status(self) -> Dict[SlotStatus, int]:
        result = await self.session.execute(
            select(ORMParkingSlot.status, func.count(ORMParkingSlot.id).label('count'))
            .group_by(ORMParkingSlot.status)
        )
        return {SlotStatus(row.status): row.count for row in result}


class SQLAlchemyBookingRepository(AbstractBookingRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, booking_id: int) -> Optional[Booking]:
        result = await self.session.execute(
            select(ORMBooking)
            .where(ORMBooking.id == booking_id)
            .options(selectinload(ORMBooking.slot))
        )
        orm_booking = result.scalars().first()
        return _to_booking(orm_booking, with_slot=True) if orm_booking else None

    async def add(self, booking: Booking) -> Booking:
        orm_booking = ORMBooking(
            user_id=booking.user_id,
            slot_id=booking.slot_id,
            start_time=booking.start_time,
            end_time=booking.end_time,
            duration_hours=booking.duration_hours,
            amount=booking.amount,
            payment_status=PaymentStatus(booking.payment_status).value,
            payment_id=booking.payment_id,
            status=BookingStatus(booking.status).value
        )
        self.session.add(orm_booking)
        await self.session.flush()
        await self.session.refresh(orm_booking, ["slot"])
        await self.session.commit()
        return _to_booking(orm_booking, with_slot=True)

    async def update(self, booking: Booking) -> Booking:
        orm_booking = await self.session.get(ORMBooking, booking.id)
        if orm_booking:
            orm_booking.status = BookingStatus(booking.status).value
            orm_booking.payment_status = PaymentStatus(booking.payment_status).value
            orm_booking.refund_id = booking.refund_id
            orm_booking.refund_amount = booking.refund_amount
            await self.session.flush()
            await self.session.refresh(orm_booking, ["slot"])
            await self.session.commit()
            return _to_booking(orm_booking, with_slot=True)
        raise ValueError(f"Booking with ID {booking.id} not found.")

    async def find_overlapping(
        self, start_time: datetime, end_time: datetime, slot_id: Optional[int] = None
    ) -> List[Booking]:
        conditions = [
            ORMBooking.status == BookingStatus.ACTIVE.value,
            ORMBooking.start_time < end_time,
            ORMBooking.end_time > start_time,
        ]
        if slot_id is not None:
            conditions.append(ORMBooking.slot_id == slot_id)

        result = await self.session.execute(
            select(ORMBooking).where(and_(*conditions)).order_by(ORMBooking.start_time)
        )
        return [_to_booking(b) for b in result.scalars().all()]

    async def get_by_user(self, user_id: int) -> List[Booking]:
        result = await self.session.execute(
            select(ORMBooking)
            .where(ORMBooking.user_id == user_id)
            .options(selectinload(ORMBooking.slot))
            .order_by(ORMBooking.created_at.desc(), ORMBooking.id.desc())
        )
        return [_to_booking(b, with_slot=True) for b in result.scalars().all()]

    async def get_all(self) -> List[Booking]:
        result = await self.session.execute(
            select(ORMBooking)
            .options(selectinload(ORMBooking.slot), selectinload(ORMBooking.user))
            .order_by(ORMBooking.created_at.desc(), ORMBooking.id.desc())
        )
        return [_to_booking(b, with_slot=True, with_user=True) for b in result.scalars().all()]

    async def count_by_status(self, status: BookingStatus, slot_id: Optional[int] = None) -> int:
        query = select(func.count(ORMBooking.id)).where(ORMBooking.status == BookingStatus(status).value)
        if slot_id is not None:
            query = query.where(ORMBooking.slot_id == slot_id)
        result = await self.session.execute(query)
        return result.scalar() or 0
