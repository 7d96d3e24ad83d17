import datetime as dt

from sqlalchemy.orm import Session

from room_reservations.models.reservation import Reservation
from room_reservations.models.room import Room
from room_reservations.models.time_slot import TimeSlot, weekday_code


class AvailabilityService:

    def get_availability(self, db: Session, day: dt.date, building: str | None = None) -> dict:
        """
        Room x time-slot grid for one date.

        Only time slots whose weekday list contains the date's weekday are
        offered, so weekends yield no slots. Each cell reports whether it is
        already reserved.
        """
        code = weekday_code(day)

        rooms_q = db.query(Room)
        if building:
            rooms_q = rooms_q.filter(Room.building == building.strip())
        rooms = rooms_q.order_by(Room.building, Room.name, Room.id).all()

        slots = []
        if code:
            all_slots = db.query(TimeSlot).order_by(TimeSlot.start, TimeSlot.id).all()
            slots = [s for s in all_slots if code.value in (s.days or [])]

        taken = {
            (r.room_id, r.time_slot_id): r.id
            for r in db.query(Reservation).filter(Reservation.date == day).all()
        }

        return {
            "date":    day.isoformat(),
            "weekday": code.value if code else None,
            "rooms": [
                {
                    "id":       room.id,
                    "name":     room.name,
                    "capacity": room.capacity,
                    "building": room.building,
                    "slots": [
                        {
                            "time_slot_id":   slot.id,
                            "start":          slot.start,
                            "end":            slot.end,
                            "reserved":       (room.id, slot.id) in taken,
                            "reservation_id": taken.get((room.id, slot.id)),
                        }
                        for slot in slots
                    ],
                }
                for room in rooms
            ],
        }


availability_service = AvailabilityService()
