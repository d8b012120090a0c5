"""Mark active bookings whose window has ended as completed."""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import Session
from loguru import logger

from parking_reservation.infrastructure.persistence.models.models import Booking


def complete_expired_bookings(bind=None, now: Optional[datetime] = None) -> int:
    if bind is None:
        from parking_reservation.infrastructure.persistence.database import engine as bind

    now = now or datetime.now(timezone.utc)
    with Session(bind) as session:
        result = session.execute(
            update(Booking)
            .where(Booking.status == "active", Booking.end_time <= now)
            .values(status="completed")
            .execution_options(synchronize_session=False)
        )
        session.commit()

    logger.info(f"Completed {result.rowcount} expired bookings")
    return result.rowcount


if __name__ == "__main__":
    complete_expired_bookings()
