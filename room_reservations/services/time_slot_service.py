import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from room_reservations.database import write_transaction
from room_reservations.models.time_slot import TimeSlot
from room_reservations.schemas.time_slot import TimeSlotCreateRequest, TimeSlotUpdateRequest
from room_reservations.services.conflict_service import CatalogKind, can_delete, count_reservations
from room_reservations.utils.exceptions import NotFoundException, ResourceInUseException

logger = logging.getLogger(__name__)


def _serialize(s: TimeSlot) -> dict:
    return {
        "id":    s.id,
        "start": s.start,
        "end":   s.end,
        "days":  list(s.days),
    }


def _day_values(data: TimeSlotCreateRequest) -> list[str]:
    return [code.value for code in data.days]


class TimeSlotService:

    def list_time_slots(self, db: Session) -> list[dict]:
        items = db.query(TimeSlot).order_by(TimeSlot.start, TimeSlot.end, TimeSlot.id).all()
        return [_serialize(s) for s in items]

    def get_time_slot(self, db: Session, time_slot_id: int) -> dict:
        s = db.query(TimeSlot).filter(TimeSlot.id == time_slot_id).first()
        if not s:
            raise NotFoundException("Time slot")
        return _serialize(s)

    def create_time_slot(self, db: Session, data: TimeSlotCreateRequest) -> dict:
        with write_transaction(db):
            s = TimeSlot(start=data.start, end=data.end, days=_day_values(data))
            db.add(s)
            db.flush()
        logger.info(f"Created time slot #{s.id} {s.start}-{s.end} ({','.join(s.days)})")
        return _serialize(s)

    def update_time_slot(self, db: Session, time_slot_id: int, data: TimeSlotUpdateRequest) -> dict:
        with write_transaction(db):
            s = db.query(TimeSlot).filter(TimeSlot.id == time_slot_id).first()
            if not s:
                raise NotFoundException("Time slot")

            s.start = data.start
            s.end   = data.end
            s.days  = _day_values(data)
            db.flush()
        logger.info(f"Updated time slot #{s.id} to {s.start}-{s.end} ({','.join(s.days)})")
        return _serialize(s)

    def delete_time_slot(self, db: Session, time_slot_id: int) -> None:
        with write_transaction(db):
            s = db.query(TimeSlot).filter(TimeSlot.id == time_slot_id).first()
            if not s:
                raise NotFoundException("Time slot")
            if not can_delete(db, CatalogKind.TIME_SLOT, time_slot_id):
                logger.warning(f"Refused to delete time slot #{time_slot_id}: "
                               f"{count_reservations(db, CatalogKind.TIME_SLOT, time_slot_id)} reservation(s)")
                raise ResourceInUseException("Time slot")

            db.delete(s)
            try:
                db.flush()
            except IntegrityError as exc:
                raise ResourceInUseException("Time slot") from exc
        logger.info(f"Deleted time slot #{time_slot_id} {s.start}-{s.end}")


time_slot_service = TimeSlotService()
