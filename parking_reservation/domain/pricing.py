"""Booking window arithmetic: overlap, duration, price and refund."""
import math
from datetime import datetime

SECONDS_PER_HOUR = 3600
HOURS_PER_DAY = 24


def intervals_overlap(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    """Half-open ``[start, end)`` intervals overlap; touching ends do not."""
    return start_a < end_b and end_a > start_b


def duration_in_hours(start_time: datetime, end_time: datetime) -> float:
    return (end_time - start_time).total_seconds() / SECONDS_PER_HOUR


def calculate_amount(duration_hours: float, hourly_rate: float, daily_rate: float) -> float:
    """Whole days at the daily rate from 24 hours up, whole hours at the hourly rate below that."""
    if duration_hours >= HOURS_PER_DAY:
        days = math.ceil(duration_hours / HOURS_PER_DAY)
        return days * daily_rate
    return math.ceil(duration_hours) * hourly_rate


def to_cents(amount: float) -> int:
    return int(round(amount * 100))


def refund_cents(amount: float, percentage: int) -> int:
    # Integer arithmetic keeps the refund an exact share of the charged cents
    return to_cents(amount) * percentage // 100
