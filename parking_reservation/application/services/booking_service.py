from datetime import datetime
from typing import Optional, List
from loguru import logger

from parking_reservation.application.payments import AbstractPaymentGateway
from parking_reservation.application.repositories import AbstractParkingSlotRepository, AbstractBookingRepository
from parking_reservation.config.settings_env import settings
from parking_reservation.domain.common import PaymentStatus, BookingStatus
from parking_reservation.domain.entities import Booking
from parking_reservation.domain.exceptions import (
    NotFoundError,
    SlotNotAvailableError,
    BookingOverlapError,
    InvalidTimeRangeError,
    BookingNotCancellableError,
    NotBookingOwnerError,
    PaymentFailedError,
)
from parking_reservation.domain.pricing import duration_in_hours, calculate_amount, to_cents, refund_cents
from parking_reservation.shared.custom_types import ensure_utc


def validate_time_range(start_time: datetime, end_time: datetime) -> tuple[datetime, datetime]:
    start_time, end_time = ensure_utc(start_time), ensure_utc(end_time)
    if end_time <= start_time:
        raise InvalidTimeRangeError("End time must be after start time")
    return start_time, end_time


class BookingService:
    def __init__(
        self,
        booking_repo: AbstractBookingRepository,
        parking_slot_repo: AbstractParkingSlotRepository,
        payment_gateway: AbstractPaymentGateway,
        currency: str = settings.STRIPE_CURRENCY,
        refund_percentage: int = settings.REFUND_PERCENTAGE,
    ):
        self.booking_repo = booking_repo
        self.parking_slot_repo = parking_slot_repo
        self.payment_gateway = payment_gateway
        self.currency = currency
        self.refund_percentage = refund_percentage

    async def create_booking(
        self,
        user_id: int,
        slot_id: int,
        start_time: datetime,
        end_time: datetime,
        payment_method_id: Optional[str] = None,
    ) -> Booking:
        start_time, end_time = validate_time_range(start_time, end_time)

        slot = await self.parking_slot_repo.get_by_id(slot_id)
        if not slot:
            raise NotFoundError("Slot not found")

        if not slot.is_available:
            logger.warning(f"Booking rejected: slot {slot.slot_number} is {slot.status}")
            raise SlotNotAvailableError("Slot is not available")

        # Not guarded against a concurrent booking for the same window
        overlapping = await self.booking_repo.find_overlapping(start_time, end_time, slot_id=slot.id)
        if overlapping:
            logger.warning(
                f"Booking rejected: slot {slot.slot_number} has {len(overlapping)} active booking(s) "
                f"between {start_time.isoformat()} and {end_time.isoformat()}"
            )
            raise BookingOverlapError("Slot is already booked for the selected time")

        duration_hours = duration_in_hours(start_time, end_time)
        amount = calculate_amount(duration_hours, slot.hourly_rate, slot.daily_rate)

        payment = await self.payment_gateway.charge(
            amount_cents=to_cents(amount),
            currency=self.currency,
            payment_method_id=payment_method_id,
            description=f"Parking slot {slot.slot_number} booking",
            metadata={"user_id": str(user_id), "slot_id": str(slot.id)},
        )
        if not payment.succeeded:
            logger.warning(f"Payment {payment.id} for slot {slot.slot_number} ended with status {payment.status}")
            raise PaymentFailedError("Payment failed")

        booking = Booking(
            user_id=user_id,
            slot_id=slot.id,
            start_time=start_time,
            end_time=end_time,
            duration_hours=duration_hours,
            amount=amount,
            payment_status=PaymentStatus.PAID,
            payment_id=payment.id,
            status=BookingStatus.ACTIVE,
        )
        booking = await self.booking_repo.add(booking)

        logger.info(
            f"User {user_id} booked slot {slot.slot_number} for {duration_hours:.2f}h. "
            f"Amount: ${amount:.2f} (payment {payment.id})"
        )
        return booking

    async def cancel_booking(self, user_id: int, booking_id: int) -> Booking:
        booking = await self.booking_repo.get_by_id(booking_id)
        if not booking:
            raise NotFoundError("Booking not found")

        if booking.user_id != user_id:
            logger.warning(f"User {user_id} tried to cancel booking {booking_id} owned by user {booking.user_id}")
            raise NotBookingOwnerError("Not authorized")

        if not booking.is_active:
            raise BookingNotCancellableError("Booking cannot be cancelled")

        amount_cents = refund_cents(booking.amount, self.refund_percentage)
        if amount_cents > 0:
            refund = await self.payment_gateway.refund(booking.payment_id, amount_cents)
            if refund.status in ("failed", "canceled"):
                logger.warning(f"Refund {refund.id} for booking {booking_id} ended with status {refund.status}")
                raise PaymentFailedError("Refund failed")
            booking.refund_id = refund.id

        booking.refund_amount = amount_cents / 100
        booking.status = BookingStatus.CANCELLED
        booking.payment_status = PaymentStatus.REFUNDED
        booking = await self.booking_repo.update(booking)

        logger.info(f"Booking {booking_id} cancelled by user {user_id}. Refund: ${booking.refund_amount:.2f}")
        return booking

    async def get_user_bookings(self, user_id: int) -> List[Booking]:
        return await self.booking_repo.get_by_user(user_id)

    async def get_all_bookings(self) -> List[Booking]:
        return await self.booking_repo.get_all()
