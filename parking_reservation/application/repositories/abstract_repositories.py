from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from parking_reservation.domain.common import SlotStatus, BookingStatus
from parking_reservation.domain.entities import User, ParkingSlot, Booking


class AbstractUserRepository(ABC):
    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[User]:
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    async def add(self, user: User) -> User:
        pass

    @abstractmethod
    async def get_all(self) -> List[User]:
        pass


class AbstractParkingSlotRepository(ABC):
    @abstractmethod
    async def get_by_id(self, slot_id: int) -> Optional[ParkingSlot]:
        pass

    @abstractmethod
    async def get_by_slot_number(self, slot_number: str) -> Optional[ParkingSlot]:
        pass

    @abstractmethod
    async def get_all(self) -> List[ParkingSlot]:
        pass

    @abstractmethod
    async def get_by_status(self, status: SlotStatus) -> List[ParkingSlot]:
        pass

    @abstractmethod
    async def add(self, slot: ParkingSlot) -> ParkingSlot:
        pass

    @abstractmethod
    async def update(self, slot: ParkingSlot) -> ParkingSlot:
        pass

    @abstractmethod
    async def delete(self, slot_id: int) -> None:
        pass

    @abstractmethod
    async def count_by_status(self) -> dict:
        pass


class AbstractBookingRepository(ABC):
    @abstractmethod
    async def get_by_id(self, booking_id: int) -> Optional[Booking]:
        pass

    @abstractmethod
    async def add(self, booking: Booking) -> Booking:
        pass

    @abstractmethod
    async def update(self, booking: Booking) -> Booking:
        pass

    @abstractmethod
    async def find_overlapping(
        self, start_time: datetime, end_time: datetime, slot_id: Optional[int] = None
    ) -> List[Booking]:
        pass

    @abstractmethod
    async def get_by_user(self, user_id: int) -> List[Booking]:
        pass

    @abstractmethod
    async def get_all(self) -> List[Booking]:
        pass

    @abstractmethod
    async def count_by_status(self, status: BookingStatus, slot_id: Optional[int] = None) -> int:
        pass
