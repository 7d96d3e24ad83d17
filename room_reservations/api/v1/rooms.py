from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from room_reservations.database import get_db
from room_reservations.dependencies import get_admin
from room_reservations.schemas.common import success_response, CATALOG_ERRORS, MAX_ID
from room_reservations.schemas.room import RoomCreateRequest, RoomUpdateRequest
from room_reservations.services.room_service import room_service

router = APIRouter(prefix="/rooms")


@router.get("", summary="List rooms")
def list_rooms(
    building: Optional[str] = Query(None, description="Only rooms in this building"),
    db:       Session       = Depends(get_db),
):
    return room_service.list_rooms(db, building)


@router.get("/buildings", summary="List buildings that have rooms")
def list_buildings(db: Session = Depends(get_db)):
    return room_service.list_buildings(db)


@router.get("/{room_id}", summary="Get room by ID", responses=CATALOG_ERRORS)
def get_room(room_id: int = Path(..., ge=1, le=MAX_ID), db: Session = Depends(get_db)):
    return room_service.get_room(db, room_id)


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create room (Admin)",
             responses=CATALOG_ERRORS)
def create_room(
    body: RoomCreateRequest,
    db:   Session = Depends(get_db),
    _:    None    = Depends(get_admin),
):
    return room_service.create_room(db, body)


@router.put("/{room_id}", summary="Update room (Admin)", responses=CATALOG_ERRORS)
def update_room(
    body:    RoomUpdateRequest,
    room_id: int     = Path(..., ge=1, le=MAX_ID),
    db:      Session = Depends(get_db),
    _:       None    = Depends(get_admin),
):
    return room_service.update_room(db, room_id, body)


@router.delete("/{room_id}", summary="Delete room (Admin)", responses=CATALOG_ERRORS)
def delete_room(
    room_id: int     = Path(..., ge=1, le=MAX_ID),
    db:      Session = Depends(get_db),
    _:       None    = Depends(get_admin),
):
    room_service.delete_room(db, room_id)
    return success_response("Room deleted successfully")
