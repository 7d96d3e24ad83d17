from typing import Optional
from pydantic import BaseModel, field_validator

from room_reservations.schemas.common import CalendarDate, EntityId


class ReservationCreateRequest(BaseModel):
    room_id:      EntityId
    time_slot_id: EntityId
    date:         CalendarDate
    user_id:      str
    purpose:      str
    groups:       Optional[str] = None

    @field_validator("user_id", "purpose")
    @classmethod
    def check_not_empty(cls, v):
        if not v.strip(): raise ValueError("Field cannot be empty")
        return v.strip()

    @field_validator("groups")
    @classmethod
    def blank_groups_to_none(cls, v):
        if v is None: return None
        return v.strip() or None
