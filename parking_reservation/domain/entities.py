from datetime import datetime
from typing import Optional

from parking_reservation.domain.common import SlotStatus, SlotType, PaymentStatus, BookingStatus, UserRole


class User:
    def __init__(
        self, name: str, email: str, role: UserRole = UserRole.USER, id: Optional[int] = None,
        created_at: Optional[datetime] = None
    ):
        self.id = id
        self.name = name
        self.email = email
        self.role = role
        self.created_at = created_at

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class ParkingSlot:
    def __init__(
        self,
        slot_number: str,
        hourly_rate: float,
        daily_rate: float,
        slot_type: SlotType = SlotType.STANDARD,
        status: SlotStatus = SlotStatus.AVAILABLE,
        id: Optional[int] = None,
    ):
        self.id = id
        self.slot_number = slot_number
        self.slot_type = slot_type
        self.status = status
        self.hourly_rate = hourly_rate
        self.daily_rate = daily_rate

    @property
    def is_available(self) -> bool:
        return self.status == SlotStatus.AVAILABLE


class Booking:
    def __init__(
        self,
        user_id: int,
        slot_id: Optional[int],
        start_time: datetime,
        end_time: datetime,
        duration_hours: float,
        amount: float,
        id: Optional[int] = None,
        payment_status: PaymentStatus = PaymentStatus.PENDING,
        payment_id: Optional[str] = None,
        refund_id: Optional[str] = None,
        refund_amount: Optional[float] = None,
        status: BookingStatus = BookingStatus.ACTIVE,
        created_at: Optional[datetime] = None,
        slot: Optional[ParkingSlot] = None,
        user: Optional[User] = None,
    ):
        self.id = id
        self.user_id = user_id
        self.slot_id = slot_id
        self.start_time = start_time
        self.end_time = end_time
        self.duration_hours = duration_hours
        self.amount = amount
        self.payment_status = payment_status
        self.payment_id = payment_id
        self.refund_id = refund_id
        self.refund_amount = refund_amount
        self.status = status
        self.created_at = created_at
        # Populated by the repository when the caller asks for related rows
        self.slot = slot
        self.user = user

    @property
    def is_active(self) -> bool:
        return self.status == BookingStatus.ACTIVE
