from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from parking_reservation.application.payments import AbstractPaymentGateway
from parking_reservation.application.services.analytics_service import AnalyticsService
from parking_reservation.application.services.booking_service import BookingService
from parking_reservation.application.services.slot_service import SlotService
from parking_reservation.application.services.user_service import UserService
from parking_reservation.domain.entities import User
from parking_reservation.infrastructure.payments import StripePaymentGateway
from parking_reservation.infrastructure.persistence.database import get_async_db
from parking_reservation.infrastructure.persistence.sqlalchemy_repositories import (
    SQLAlchemyUserRepository,
    SQLAlchemyParkingSlotRepository,
    SQLAlchemyBookingRepository,
)


def get_payment_gateway() -> AbstractPaymentGateway:
    return StripePaymentGateway()


def get_user_service(db: AsyncSession = Depends(get_async_db)) -> UserService:
    return UserService(SQLAlchemyUserRepository(db))


def get_slot_service(db: AsyncSession = Depends(get_async_db)) -> SlotService:
    return SlotService(
        parking_slot_repo=SQLAlchemyParkingSlotRepository(db),
        booking_repo=SQLAlchemyBookingRepository(db)
    )


def get_booking_service(
    db: AsyncSession = Depends(get_async_db),
    payment_gateway: AbstractPaymentGateway = Depends(get_payment_gateway)
) -> BookingService:
    return BookingService(
        booking_repo=SQLAlchemyBookingRepository(db),
        parking_slot_repo=SQLAlchemyParkingSlotRepository(db),
        payment_gateway=payment_gateway
    )


def get_analytics_service(db: AsyncSession = Depends(get_async_db)) -> AnalyticsService:
    return AnalyticsService(
        parking_slot_repo=SQLAlchemyParkingSlotRepository(db),
        booking_repo=SQLAlchemyBookingRepository(db)
    )


async def get_current_user(
    x_user_id: Optional[str] = Header(default=None),
    user_service: UserService = Depends(get_user_service)
) -> User:
    """Resolve the caller from the identity header set by the upstream auth gateway."""
    try:
        user_id = int(x_user_id or "")
    except ValueError:
        raise HTTPException(status_code=401, detail="No user identity, authorization denied")

    user = await user_service.get_user(user_id)
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    return user


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        logger.warning(f"User {current_user.id} denied admin access")
        raise HTTPException(status_code=403, detail="Admin access required")
    return current_user
