"""
Reservation conflict rules.

A (room, time slot, date) triple backs at most one reservation, and a room or
time slot that any reservation points at cannot be removed. These checks run
inside the caller's write transaction; the UNIQUE and RESTRICT constraints on
the reservations table catch anything that slips past them.

The slot's weekday list is not consulted here: a reservation is keyed only on
(room, slot, date).
"""
import datetime as dt
import enum

from sqlalchemy import func
from sqlalchemy.orm import Session

from room_reservations.models.reservation import Reservation


class CatalogKind(str, enum.Enum):
    ROOM      = "ROOM"
    TIME_SLOT = "TIME_SLOT"


_REFERENCE_COLUMNS = {
    CatalogKind.ROOM:      Reservation.room_id,
    CatalogKind.TIME_SLOT: Reservation.time_slot_id,
}


def is_slot_free(db: Session, room_id: int, time_slot_id: int, day: dt.date) -> bool:
    """True iff no reservation holds this exact room, time slot and date."""
    existing = db.query(Reservation.id).filter(
        Reservation.room_id      == room_id,
        Reservation.time_slot_id == time_slot_id,
        Reservation.date         == day,
    ).first()
    return existing is None


def count_reservations(db: Session, kind: CatalogKind, entity_id: int) -> int:
    column = _REFERENCE_COLUMNS[kind]
    return db.query(func.count(Reservation.id)).filter(column == entity_id).scalar() or 0


def can_delete(db: Session, kind: CatalogKind, entity_id: int) -> bool:
    """True iff no reservation references the room or time slot."""
    return count_reservations(db, kind, entity_id) == 0
