import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from room_reservations.database import write_transaction
from room_reservations.models.room import Room
from room_reservations.models.time_slot import TimeSlot, WEEKDAY_ORDER

logger = logging.getLogger(__name__)


SAMPLE_ROOMS = [
    {"name": "Sala 101",      "capacity": 30, "building": "Edificio 1"},
    {"name": "Sala 102",      "capacity": 25, "building": "Edificio 1"},
    {"name": "Sala 103",      "capacity": 40, "building": "Edificio 2"},
    {"name": "Laboratorio A", "capacity": 20, "building": "Edificio 2"},
    {"name": "Laboratorio B", "capacity": 20, "building": "Edificio 3"},
]

SAMPLE_TIME_SLOTS = [
    {"start": "08:00", "end": "09:30", "days": list(WEEKDAY_ORDER)},
    {"start": "09:45", "end": "11:15", "days": list(WEEKDAY_ORDER)},
    {"start": "11:30", "end": "13:00", "days": list(WEEKDAY_ORDER)},
    {"start": "14:00", "end": "15:30", "days": ["L", "M", "X", "J"]},
    {"start": "15:45", "end": "17:15", "days": ["L", "M", "X"]},
]


def seed_sample_catalog(db: Session) -> None:
    """
    Insert the sample rooms and time slots into empty tables.

    Each table is filled in its own transaction; a populated table is left alone.
    """
    with write_transaction(db):
        room_count = db.query(func.count(Room.id)).scalar()
        if room_count:
            logger.info(f"Rooms table already populated: {room_count} room(s)")
        else:
            db.add_all([Room(**data) for data in SAMPLE_ROOMS])
            logger.info(f"Inserted {len(SAMPLE_ROOMS)} sample rooms")

    with write_transaction(db):
        slot_count = db.query(func.count(TimeSlot.id)).scalar()
        if slot_count:
            logger.info(f"Time slots table already populated: {slot_count} slot(s)")
        else:
            db.add_all([TimeSlot(**data) for data in SAMPLE_TIME_SLOTS])
            logger.info(f"Inserted {len(SAMPLE_TIME_SLOTS)} sample time slots")
