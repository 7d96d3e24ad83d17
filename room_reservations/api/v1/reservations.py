from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from room_reservations.database import get_db
from room_reservations.schemas.common import CalendarDate, ErrorResponse, MAX_ID
from room_reservations.schemas.reservation import ReservationCreateRequest
from room_reservations.services.reservation_service import reservation_service

router = APIRouter(prefix="/reservations")


@router.get("", summary="List reservations for a date")
def list_reservations(
    day: Optional[CalendarDate] = Query(None, alias="date", description="YYYY-MM-DD; all dates when omitted"),
    db:  Session                = Depends(get_db),
):
    return reservation_service.list_reservations(db, day)


@router.get("/{reservation_id}", summary="Get reservation by ID",
            responses={404: {"model": ErrorResponse}})
def get_reservation(reservation_id: int = Path(..., ge=1, le=MAX_ID), db: Session = Depends(get_db)):
    return reservation_service.get_reservation(db, reservation_id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Reserve a room for a time slot on a date",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        404: {"model": ErrorResponse, "description": "Room or time slot not found"},
        409: {"model": ErrorResponse, "description": "Slot already reserved"},
    },
)
def create_reservation(body: ReservationCreateRequest, db: Session = Depends(get_db)):
    return reservation_service.create_reservation(db, body)
