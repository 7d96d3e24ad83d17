import json
from datetime import datetime
from pydantic import BaseModel, field_validator, model_validator

from room_reservations.models.time_slot import WeekdayCode, WEEKDAY_ORDER


class TimeSlotCreateRequest(BaseModel):
    start: str
    end:   str
    days:  list[WeekdayCode]

    @field_validator("start", "end")
    @classmethod
    def check_clock_time(cls, v):
        try:
            parsed = datetime.strptime(v.strip(), "%H:%M")
        except ValueError:
            raise ValueError("Time must use the HH:MM format")
        return parsed.strftime("%H:%M")

    @field_validator("days", mode="before")
    @classmethod
    def decode_days(cls, v):
        # Older clients send the stored JSON text back as-is
        if isinstance(v, str):
            try:
                return json.loads(v)
            except ValueError:
                raise ValueError("Days must be a list of weekday codes")
        return v

    @field_validator("days")
    @classmethod
    def normalize_days(cls, v):
        if not v: raise ValueError("Select at least one weekday")
        unique = {code.value for code in v}
        return [WeekdayCode(code) for code in WEEKDAY_ORDER if code in unique]

    @model_validator(mode="after")
    def check_range(self):
        if self.start >= self.end:
            raise ValueError("End time must be after start time")
        return self


class TimeSlotUpdateRequest(TimeSlotCreateRequest):
    """PUT replaces every attribute, so the same rules apply."""
