from typing import List

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from parking_reservation.application.services.analytics_service import AnalyticsService
from parking_reservation.application.services.booking_service import BookingService
from parking_reservation.application.services.slot_service import SlotService
from parking_reservation.application.services.user_service import UserService
from parking_reservation.domain.exceptions import NotFoundError
from parking_reservation.infrastructure.api.dependencies import (
    require_admin,
    get_analytics_service,
    get_booking_service,
    get_slot_service,
    get_user_service,
)
from parking_reservation.infrastructure.api.schemas.parking import (
    UserResponse, BookingResponse, OccupancyStats,
    ParkingSlotCreate, ParkingSlotUpdate, ParkingSlotResponse, MessageResponse
)

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/users", response_model=List[UserResponse])
async def get_all_users(service: UserService = Depends(get_user_service)):
    try:
        return await service.get_all_users()
    except Exception:
        logger.exception("Failed to list users")
        raise HTTPException(status_code=500, detail="Server error")


@router.get("/bookings", response_model=List[BookingResponse])
async def get_all_bookings(service: BookingService = Depends(get_booking_service)):
    try:
        return await service.get_all_bookings()
    except Exception:
        logger.exception("Failed to list bookings")
        raise HTTPException(status_code=500, detail="Server error")


@router.get("/occupancy", response_model=OccupancyStats)
async def get_occupancy(analytics: AnalyticsService = Depends(get_analytics_service)):
    try:
        return await analytics.get_occupancy()
    except Exception:
        logger.exception("Failed to compute occupancy")
        raise HTTPException(status_code=500, detail="Server error")


@router.post("/slots", response_model=ParkingSlotResponse)
async def create_slot(
    slot_data: ParkingSlotCreate,
    service: SlotService = Depends(get_slot_service)
):
    try:
        return await service.create_slot(**slot_data.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception(f"Failed to create slot {slot_data.slot_number}")
        raise HTTPException(status_code=500, detail="Server error")


@router.put("/slots/{slot_id}", response_model=ParkingSlotResponse)
async def update_slot(
    slot_id: int,
    slot_data: ParkingSlotUpdate,
    service: SlotService = Depends(get_slot_service)
):
    try:
        return await service.update_slot(slot_id, **slot_data.model_dump())
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception(f"Failed to update slot {slot_id}")
        raise HTTPException(status_code=500, detail="Server error")


@router.delete("/slots/{slot_id}", response_model=MessageResponse)
async def delete_slot(
    slot_id: int,
    service: SlotService = Depends(get_slot_service)
):
    try:
        await service.delete_slot(slot_id)
        return {"msg": "Slot removed"}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception(f"Failed to delete slot {slot_id}")
        raise HTTPException(status_code=500, detail="Server error")
