from datetime import datetime
from typing import Optional, List
from loguru import logger

from parking_reservation.application.repositories import AbstractParkingSlotRepository, AbstractBookingRepository
from parking_reservation.application.services.booking_service import validate_time_range
from parking_reservation.domain.common import SlotStatus, SlotType, BookingStatus
from parking_reservation.domain.entities import ParkingSlot
from parking_reservation.domain.exceptions import NotFoundError, DuplicateSlotError, SlotInUseError


class SlotService:
    def __init__(
        self,
        parking_slot_repo: AbstractParkingSlotRepository,
        booking_repo: AbstractBookingRepository
    ):
        self.parking_slot_repo = parking_slot_repo
        self.booking_repo = booking_repo

    async def get_available_slots(self) -> List[ParkingSlot]:
        return await self.parking_slot_repo.get_by_status(SlotStatus.AVAILABLE)

    async def get_available_slots_for_period(self, start_time: datetime, end_time: datetime) -> List[ParkingSlot]:
        start_time, end_time = validate_time_range(start_time, end_time)

        overlapping = await self.booking_repo.find_overlapping(start_time, end_time)
        booked_slot_ids = {booking.slot_id for booking in overlapping}

        slots = await self.parking_slot_repo.get_by_status(SlotStatus.AVAILABLE)
        return [slot for slot in slots if slot.id not in booked_slot_ids]

    async def create_slot(
        self,
        slot_number: str,
        slot_type: SlotType,
        hourly_rate: float,
        daily_rate: float,
        status: Optional[SlotStatus] = None,
    ) -> ParkingSlot:
        if await self.parking_slot_repo.get_by_slot_number(slot_number):
            raise DuplicateSlotError("Slot already exists")

        slot = ParkingSlot(
            slot_number=slot_number,
            slot_type=slot_type,
            status=status or SlotStatus.AVAILABLE,
            hourly_rate=hourly_rate,
            daily_rate=daily_rate,
        )
        slot = await self.parking_slot_repo.add(slot)
        logger.info(f"Slot {slot.slot_number} created ({slot.slot_type}, {slot.status})")
        return slot

    async def update_slot(
        self,
        slot_id: int,
        slot_number: str,
        slot_type: SlotType,
        hourly_rate: float,
        daily_rate: float,
        status: Optional[SlotStatus] = None,
    ) -> ParkingSlot:
        slot = await self.parking_slot_repo.get_by_id(slot_id)
        if not slot:
            raise NotFoundError("Slot not found")

        if slot.slot_number != slot_number and await self.parking_slot_repo.get_by_slot_number(slot_number):
            raise DuplicateSlotError("Slot number already in use")

        slot.slot_number = slot_number
        slot.slot_type = slot_type
        slot.status = status or slot.status
        slot.hourly_rate = hourly_rate
        slot.daily_rate = daily_rate

        slot = await self.parking_slot_repo.update(slot)
        logger.info(f"Slot {slot_id} updated: {slot.slot_number} ({slot.slot_type}, {slot.status})")
        return slot

    async def delete_slot(self, slot_id: int) -> None:
        slot = await self.parking_slot_repo.get_by_id(slot_id)
        if not slot:
            raise NotFoundError("Slot not found")

        active_bookings = await self.booking_repo.count_by_status(BookingStatus.ACTIVE, slot_id=slot_id)
        if active_bookings > 0:
            raise SlotInUseError("Cannot delete slot with active bookings")

        await self.parking_slot_repo.delete(slot_id)
        logger.info(f"Slot {slot.slot_number} removed")
