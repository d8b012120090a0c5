from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from parking_reservation.application.services.booking_service import BookingService
from parking_reservation.domain.entities import User
from parking_reservation.domain.exceptions import NotFoundError, NotBookingOwnerError
from parking_reservation.infrastructure.api.dependencies import get_current_user, get_booking_service
from parking_reservation.infrastructure.api.schemas.parking import BookingCreate, BookingResponse

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.post("", response_model=BookingResponse)
async def create_booking(
    booking_data: BookingCreate,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service)
):
    try:
        return await service.create_booking(
            user_id=current_user.id,
            slot_id=booking_data.slot_id,
            start_time=booking_data.start_time,
            end_time=booking_data.end_time,
            payment_method_id=booking_data.payment_method_id
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception(f"Failed to create booking for user {current_user.id}")
        raise HTTPException(status_code=500, detail="Server error")


@router.put("/cancel/{booking_id}", response_model=BookingResponse)
async def cancel_booking(
    booking_id: int,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service)
):
    try:
        return await service.cancel_booking(user_id=current_user.id, booking_id=booking_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except NotBookingOwnerError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception(f"Failed to cancel booking {booking_id}")
        raise HTTPException(status_code=500, detail="Server error")
