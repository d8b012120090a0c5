from pydantic import BaseModel, Field, field_validator, ConfigDict
from datetime import datetime
from typing import Optional, List

from parking_reservation.domain.common import SlotStatus, SlotType, PaymentStatus, BookingStatus, UserRole
from parking_reservation.shared.custom_types import ensure_utc


class UserSummary(BaseModel):
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class UserResponse(UserSummary):
    id: int
    role: UserRole
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class SlotSummary(BaseModel):
    slot_number: str
    slot_type: SlotType

    model_config = ConfigDict(from_attributes=True)


class ParkingSlotBase(BaseModel):
    slot_number: str = Field(..., min_length=1, max_length=20)
    slot_type: SlotType
    hourly_rate: float = Field(..., gt=0)
    daily_rate: float = Field(..., gt=0)

    @field_validator('slot_number')
    def validate_slot_number(cls, v):  # pylint: disable=no-self-argument
        v = v.strip()
        if not v:
            raise ValueError("Slot number is required")
        return v


class ParkingSlotCreate(ParkingSlotBase):
    status: Optional[SlotStatus] = None


class ParkingSlotUpdate(ParkingSlotBase):
    status: Optional[SlotStatus] = None


class ParkingSlotResponse(ParkingSlotBase):
    id: int
    status: SlotStatus

    model_config = ConfigDict(from_attributes=True)


class BookingCreate(BaseModel):
    slot_id: int
    start_time: datetime
    end_time: datetime
    payment_method_id: Optional[str] = None

    @field_validator('start_time', 'end_time')
    @classmethod
    def make_datetime_aware(cls, dt: datetime) -> datetime:
        return ensure_utc(dt)


class BookingResponse(BaseModel):
    id: int
    user_id: int
    slot_id: Optional[int] = None
    start_time: datetime
    end_time: datetime
    duration_hours: float
    amount: float
    payment_status: PaymentStatus
    payment_id: Optional[str] = None
    refund_id: Optional[str] = None
    refund_amount: Optional[float] = None
    status: BookingStatus
    created_at: Optional[datetime] = None
    slot: Optional[SlotSummary] = None
    user: Optional[UserSummary] = None

    @field_validator('start_time', 'end_time', 'created_at')
    @classmethod
    def make_datetime_aware(cls, dt: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(dt)

    model_config = ConfigDict(from_attributes=True)


class OccupancyStats(BaseModel):
    total_slots: int
    available_slots: int
    booked_slots: int
    maintenance_slots: int
    active_bookings: int
    occupancy_rate: float


class MessageResponse(BaseModel):
    msg: str


class FieldError(BaseModel):
    field: str
    msg: str


class ValidationErrorResponse(BaseModel):
    errors: List[FieldError]
