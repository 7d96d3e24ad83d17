from sqlalchemy import Column, Integer, String
from room_reservations.database import Base


class Room(Base):
    __tablename__ = "rooms"

    id       = Column(Integer, primary_key=True, index=True)
    name     = Column(String(255), nullable=False)
    capacity = Column(Integer, nullable=False)
    building = Column(String(255), nullable=False, index=True)

    # No relationship to Reservation: deleting a Room must hit the RESTRICT
    # foreign key instead of having the ORM touch dependent rows.

    def __repr__(self):
        return f"<Room id={self.id} name={self.name} building={self.building}>"
