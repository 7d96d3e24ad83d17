import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from room_reservations.database import write_transaction
from room_reservations.models.room import Room
from room_reservations.schemas.room import RoomCreateRequest, RoomUpdateRequest
from room_reservations.services.conflict_service import CatalogKind, can_delete, count_reservations
from room_reservations.utils.exceptions import NotFoundException, ResourceInUseException

logger = logging.getLogger(__name__)


def _serialize(r: Room) -> dict:
    return {
        "id":       r.id,
        "name":     r.name,
        "capacity": r.capacity,
        "building": r.building,
    }


class RoomService:

    def list_rooms(self, db: Session, building: str | None = None) -> list[dict]:
        q = db.query(Room)
        if building:
            q = q.filter(Room.building == building.strip())
        items = q.order_by(Room.building, Room.name, Room.id).all()
        return [_serialize(r) for r in items]

    def list_buildings(self, db: Session) -> list[str]:
        rows = db.query(Room.building).distinct().order_by(Room.building).all()
        return [row.building for row in rows]

    def get_room(self, db: Session, room_id: int) -> dict:
        r = db.query(Room).filter(Room.id == room_id).first()
        if not r:
            raise NotFoundException("Room")
        return _serialize(r)

    def create_room(self, db: Session, data: RoomCreateRequest) -> dict:
        with write_transaction(db):
            room = Room(name=data.name, capacity=data.capacity, building=data.building)
            db.add(room)
            db.flush()
        logger.info(f"Created room #{room.id} '{room.name}' in {room.building}")
        return _serialize(room)

    def update_room(self, db: Session, room_id: int, data: RoomUpdateRequest) -> dict:
        with write_transaction(db):
            r = db.query(Room).filter(Room.id == room_id).first()
            if not r:
                raise NotFoundException("Room")

            r.name     = data.name
            r.capacity = data.capacity
            r.building = data.building
            db.flush()
        logger.info(f"Updated room #{r.id} '{r.name}'")
        return _serialize(r)

    def delete_room(self, db: Session, room_id: int) -> None:
        with write_transaction(db):
            r = db.query(Room).filter(Room.id == room_id).first()
            if not r:
                raise NotFoundException("Room")
            if not can_delete(db, CatalogKind.ROOM, room_id):
                logger.warning(f"Refused to delete room #{room_id}: "
                               f"{count_reservations(db, CatalogKind.ROOM, room_id)} reservation(s)")
                raise ResourceInUseException("Room")

            db.delete(r)
            try:
                db.flush()
            except IntegrityError as exc:
                raise ResourceInUseException("Room") from exc
        logger.info(f"Deleted room #{room_id} '{r.name}'")


room_service = RoomService()
