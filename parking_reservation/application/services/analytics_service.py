from typing import Dict

from parking_reservation.application.repositories import AbstractParkingSlotRepository, AbstractBookingRepository
from parking_reservation.domain.common import SlotStatus, BookingStatus


class AnalyticsService:
    def __init__(
        self,
        parking_slot_repo: AbstractParkingSlotRepository,
        booking_repo: AbstractBookingRepository
    ):
        self.parking_slot_repo = parking_slot_repo
        self.booking_repo = booking_repo

    async def get_occupancy(self) -> Dict:
        counts = await self.parking_slot_repo.count_by_status()
        total_slots = sum(counts.values())
        available_slots = counts.get(SlotStatus.AVAILABLE, 0)

        active_bookings = await self.booking_repo.count_by_status(BookingStatus.ACTIVE)

        occupancy_rate = ((total_slots - available_slots) / total_slots * 100) if total_slots > 0 else 0

        return {
            "total_slots": total_slots,
            "available_slots": available_slots,
            "booked_slots": counts.get(SlotStatus.BOOKED, 0),
            "maintenance_slots": counts.get(SlotStatus.MAINTENANCE, 0),
            "active_bookings": active_bookings,
            "occupancy_rate": round(occupancy_rate, 2)
        }
