from .abstract_repositories import (
    AbstractUserRepository,
    AbstractParkingSlotRepository,
    AbstractBookingRepository,
)

__all__ = [
    "AbstractUserRepository",
    "AbstractParkingSlotRepository",
    "AbstractBookingRepository",
]
