from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger

from parking_reservation.application.services.slot_service import SlotService
from parking_reservation.domain.entities import User
from parking_reservation.infrastructure.api.dependencies import get_current_user, get_slot_service
from parking_reservation.infrastructure.api.schemas.parking import ParkingSlotResponse

router = APIRouter(prefix="/api/slots", tags=["slots"])


@router.get("", response_model=List[ParkingSlotResponse])
async def get_available_slots(
    current_user: User = Depends(get_current_user),
    service: SlotService = Depends(get_slot_service)
):
    try:
        return await service.get_available_slots()
    except Exception:
        logger.exception("Failed to list available slots")
        raise HTTPException(status_code=500, detail="Server error")


@router.get("/available", response_model=List[ParkingSlotResponse])
async def get_slots_available_for_period(
    start_time: datetime = Query(...),
    end_time: datetime = Query(...),
    current_user: User = Depends(get_current_user),
    service: SlotService = Depends(get_slot_service)
):
    try:
        return await service.get_available_slots_for_period(start_time, end_time)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("Failed to check slot availability")
        raise HTTPException(status_code=500, detail="Server error")
