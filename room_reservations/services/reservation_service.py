import datetime as dt
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from room_reservations.database import write_transaction
from room_reservations.models.reservation import Reservation
from room_reservations.models.room import Room
from room_reservations.models.time_slot import TimeSlot
from room_reservations.schemas.reservation import ReservationCreateRequest
from room_reservations.services.conflict_service import is_slot_free
from room_reservations.utils.exceptions import NotFoundException, ReservationConflictException

logger = logging.getLogger(__name__)


def _serialize(r: Reservation) -> dict:
    return {
        "id":           r.id,
        "room_id":      r.room_id,
        "time_slot_id": r.time_slot_id,
        "date":         r.date.isoformat(),
        "user_id":      r.user_id,
        "purpose":      r.purpose,
        "groups":       r.groups,
    }


class ReservationService:

    def list_reservations(self, db: Session, day: dt.date | None) -> list[dict]:
        q = db.query(Reservation)
        if day:
            q = q.filter(Reservation.date == day)
        items = q.order_by(Reservation.date, Reservation.id).all()
        return [_serialize(r) for r in items]

    def get_reservation(self, db: Session, reservation_id: int) -> dict:
        r = db.query(Reservation).filter(Reservation.id == reservation_id).first()
        if not r:
            raise NotFoundException("Reservation")
        return _serialize(r)

    def create_reservation(self, db: Session, data: ReservationCreateRequest) -> dict:
        """
        Book one room for one time slot on one date.

        Existence and conflict checks run under the same write lock as the
        insert. If a concurrent insert still wins, the unique constraint
        rejects ours and the caller sees the same conflict error.
        """
        with write_transaction(db):
            if not db.query(Room.id).filter(Room.id == data.room_id).first():
                raise NotFoundException("Room")
            if not db.query(TimeSlot.id).filter(TimeSlot.id == data.time_slot_id).first():
                raise NotFoundException("Time slot")

            if not is_slot_free(db, data.room_id, data.time_slot_id, data.date):
                logger.info(f"Slot taken: room {data.room_id}, time slot "
                            f"{data.time_slot_id} on {data.date.isoformat()}")
                raise ReservationConflictException()

            r = Reservation(
                room_id=data.room_id,
                time_slot_id=data.time_slot_id,
                date=data.date,
                user_id=data.user_id,
                purpose=data.purpose,
                groups=data.groups,
            )
            db.add(r)
            try:
                db.flush()
            except IntegrityError as exc:
                logger.warning(f"Insert rejected by store for room {data.room_id}, time slot "
                               f"{data.time_slot_id} on {data.date.isoformat()}: {exc.orig}")
                raise ReservationConflictException() from exc

        logger.info(f"Reservation #{r.id} created by {r.user_id}: room {r.room_id}, "
                    f"time slot {r.time_slot_id} on {r.date.isoformat()}")
        return _serialize(r)


reservation_service = ReservationService()
