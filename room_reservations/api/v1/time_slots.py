from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from room_reservations.database import get_db
from room_reservations.dependencies import get_admin
from room_reservations.schemas.common import success_response, CATALOG_ERRORS, MAX_ID
from room_reservations.schemas.time_slot import TimeSlotCreateRequest, TimeSlotUpdateRequest
from room_reservations.services.time_slot_service import time_slot_service

router = APIRouter(prefix="/time-slots")


@router.get("", summary="List time slots")
def list_time_slots(db: Session = Depends(get_db)):
    return time_slot_service.list_time_slots(db)


@router.get("/{time_slot_id}", summary="Get time slot by ID", responses=CATALOG_ERRORS)
def get_time_slot(time_slot_id: int = Path(..., ge=1, le=MAX_ID), db: Session = Depends(get_db)):
    return time_slot_service.get_time_slot(db, time_slot_id)


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create time slot (Admin)",
             responses=CATALOG_ERRORS)
def create_time_slot(
    body: TimeSlotCreateRequest,
    db:   Session = Depends(get_db),
    _:    None    = Depends(get_admin),
):
    return time_slot_service.create_time_slot(db, body)


@router.put("/{time_slot_id}", summary="Update time slot (Admin)", responses=CATALOG_ERRORS)
def update_time_slot(
    body:         TimeSlotUpdateRequest,
    time_slot_id: int     = Path(..., ge=1, le=MAX_ID),
    db:           Session = Depends(get_db),
    _:            None    = Depends(get_admin),
):
    return time_slot_service.update_time_slot(db, time_slot_id, body)


@router.delete("/{time_slot_id}", summary="Delete time slot (Admin)", responses=CATALOG_ERRORS)
def delete_time_slot(
    time_slot_id: int     = Path(..., ge=1, le=MAX_ID),
    db:           Session = Depends(get_db),
    _:            None    = Depends(get_admin),
):
    time_slot_service.delete_time_slot(db, time_slot_id)
    return success_response("Time slot deleted successfully")
