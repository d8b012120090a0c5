from .sqlalchemy_repositories import (
    SQLAlchemyUserRepository,
    SQLAlchemyParkingSlotRepository,
    SQLAlchemyBookingRepository,
)

__all__ = [
    "SQLAlchemyUserRepository",
    "SQLAlchemyParkingSlotRepository",
    "SQLAlchemyBookingRepository",
]
