from typing import List

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from parking_reservation.application.services.booking_service import BookingService
from parking_reservation.domain.entities import User
from parking_reservation.infrastructure.api.dependencies import get_current_user, get_booking_service
from parking_reservation.infrastructure.api.schemas.parking import BookingResponse

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/bookings", response_model=List[BookingResponse])
async def get_user_bookings(
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service)
):
    try:
        return await service.get_user_bookings(current_user.id)
    except Exception:
        logger.exception(f"Failed to list bookings for user {current_user.id}")
        raise HTTPException(status_code=500, detail="Server error")
