"""
Import all models here so that:
1. Alembic can auto-detect them when generating migrations
2. Base.metadata knows every table before create_all()

Order matters — import parent tables before child tables.
"""

from room_reservations.models.room import Room
from room_reservations.models.time_slot import TimeSlot, WeekdayCode
from room_reservations.models.reservation import Reservation

__all__ = [
    "Room",
    "TimeSlot",
    "WeekdayCode",
    "Reservation",
]
