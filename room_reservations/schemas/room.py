from pydantic import BaseModel, field_validator

from room_reservations.schemas.common import MAX_ID, reject_bool


class RoomCreateRequest(BaseModel):
    name:     str
    capacity: int
    building: str

    @field_validator("capacity", mode="before")
    @classmethod
    def check_capacity_type(cls, v):
        return reject_bool(v)

    @field_validator("capacity")
    @classmethod
    def check_capacity(cls, v):
        if v <= 0: raise ValueError("Capacity must be greater than 0")
        if v > MAX_ID: raise ValueError("Capacity is too large")
        return v

    @field_validator("name", "building")
    @classmethod
    def check_not_empty(cls, v):
        if not v.strip(): raise ValueError("Field cannot be empty")
        return v.strip()


class RoomUpdateRequest(RoomCreateRequest):
    """PUT replaces every attribute, so the same rules apply."""
