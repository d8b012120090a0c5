from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Float, ForeignKey, Index
from sqlalchemy.orm import declarative_base, relationship
from parking_reservation.shared.custom_types import UTCDateTime

Base = declarative_base()


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    role = Column(String, default="user", nullable=False)  # admin, user
    created_at = Column(UTCDateTime, default=lambda: datetime.now(timezone.utc))

    bookings = relationship("Booking", back_populates="user")


class ParkingSlot(Base):
    __tablename__ = "parking_slots"

    id = Column(Integer, primary_key=True, index=True)
    slot_number = Column(String, unique=True, index=True, nullable=False)
    status = Column(String, default="available", nullable=False)  # available, booked, maintenance
    slot_type = Column(String, default="standard", nullable=False)  # standard, disabled, family, electric
    hourly_rate = Column(Float, default=5.0, nullable=False)
    daily_rate = Column(Float, default=30.0, nullable=False)

    bookings = relationship("Booking", back_populates="slot", passive_deletes=True)


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        Index("ix_bookings_slot_window", "slot_id", "status", "start_time", "end_time"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    slot_id = Column(Integer, ForeignKey("parking_slots.id", ondelete="SET NULL"), nullable=True)
    start_time = Column(UTCDateTime, nullable=False)
    end_time = Column(UTCDateTime, nullable=False)
    duration_hours = Column(Float, nullable=False)
    amount = Column(Float, nullable=False)
    payment_status = Column(String, default="pending", nullable=False)  # pending, paid, refunded, failed
    payment_id = Column(String, nullable=True)
    refund_id = Column(String, nullable=True)
    refund_amount = Column(Float, nullable=True)
    status = Column(String, default="active", nullable=False)  # active, cancelled, completed
    created_at = Column(UTCDateTime, default=lambda: datetime.now(timezone.utc), nullable=False)

    user = relationship("User", back_populates="bookings")
    slot = relationship("ParkingSlot", back_populates="bookings")
