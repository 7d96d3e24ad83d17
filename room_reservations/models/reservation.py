from sqlalchemy import Column, Integer, String, Text, Date, ForeignKey, UniqueConstraint
from room_reservations.database import Base


class Reservation(Base):
    __tablename__ = "reservations"
    __table_args__ = (
        # Store-level guard against double booking, independent of the service check
        UniqueConstraint("room_id", "time_slot_id", "date", name="uq_reservations_room_slot_date"),
    )

    id           = Column(Integer, primary_key=True, index=True)
    room_id      = Column(Integer, ForeignKey("rooms.id", ondelete="RESTRICT"),
                          nullable=False, index=True)
    time_slot_id = Column(Integer, ForeignKey("time_slots.id", ondelete="RESTRICT"),
                          nullable=False, index=True)
    date         = Column(Date, nullable=False, index=True)
    user_id      = Column(String(255), nullable=False)
    purpose      = Column(Text, nullable=False)
    groups       = Column(Text, nullable=True)

    def __repr__(self):
        return (f"<Reservation id={self.id} room_id={self.room_id} "
                f"time_slot_id={self.time_slot_id} date={self.date}>")
