import datetime as dt
import enum
from sqlalchemy import Column, Integer, String, JSON
from room_reservations.database import Base


class WeekdayCode(str, enum.Enum):
    LUNES     = "L"
    MARTES    = "M"
    MIERCOLES = "X"
    JUEVES    = "J"
    VIERNES   = "V"


# Canonical storage order, Monday first
WEEKDAY_ORDER = [code.value for code in WeekdayCode]


def weekday_code(day: dt.date) -> WeekdayCode | None:
    """Weekday code for a calendar date, None on weekends."""
    index = day.weekday()
    if index >= len(WEEKDAY_ORDER):
        return None
    return WeekdayCode(WEEKDAY_ORDER[index])


class TimeSlot(Base):
    __tablename__ = "time_slots"

    id    = Column(Integer, primary_key=True, index=True)
    start = Column(String(5), nullable=False)
    end   = Column(String(5), nullable=False)
    days  = Column(JSON, nullable=False, default=lambda: list(WEEKDAY_ORDER))

    def __repr__(self):
        return f"<TimeSlot id={self.id} {self.start}-{self.end} days={self.days}>"
