from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from room_reservations.database import get_db
from room_reservations.schemas.common import CalendarDate
from room_reservations.services.availability_service import availability_service

router = APIRouter(prefix="/availability")


@router.get("", summary="Room and time-slot grid for a date")
def get_availability(
    day:      CalendarDate  = Query(..., alias="date", description="YYYY-MM-DD"),
    building: Optional[str] = Query(None),
    db:       Session       = Depends(get_db),
):
    return availability_service.get_availability(db, day, building)
