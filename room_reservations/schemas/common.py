import datetime as dt
import re
from pydantic import BaseModel, BeforeValidator, Field
from typing import Annotated, Any


# ─── Shared Input Types ───────────────────────────────────────────────────────
# Largest value a SQLite INTEGER column can bind
MAX_ID = 2**63 - 1

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def require_iso_date(v):
    """Accept only "YYYY-MM-DD" text (or a date); no timestamps or datetimes."""
    if isinstance(v, dt.date) and not isinstance(v, dt.datetime):
        return v
    if not isinstance(v, str) or not _ISO_DATE.fullmatch(v.strip()):
        raise ValueError("Date must use the YYYY-MM-DD format")
    return v.strip()


CalendarDate = Annotated[dt.date, BeforeValidator(require_iso_date)]


def reject_bool(v):
    """JSON true/false would otherwise pass as 1/0."""
    if isinstance(v, bool):
        raise ValueError("Input should be a valid integer")
    return v


EntityId = Annotated[int, BeforeValidator(reject_bool), Field(ge=1, le=MAX_ID)]


# ─── Error Detail (per field) ──────────────────────────────────────────────────
class ErrorDetail(BaseModel):
    field: str
    message: str


# ─── Error Body ───────────────────────────────────────────────────────────────
class ErrorBody(BaseModel):
    code: str
    details: list[ErrorDetail] | None = None
    field: str | None = None


# ─── Error Response ───────────────────────────────────────────────────────────
class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: ErrorBody


# OpenAPI documentation for the failures shared by catalog routes
CATALOG_ERRORS: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid input or entity in use"},
    404: {"model": ErrorResponse, "description": "Entity not found"},
}


# ─── Helper Functions ─────────────────────────────────────────────────────────
def success_response(message: str, data: Any = None) -> dict:
    """Return a standardized success dict (used by routes with no entity to echo)."""
    return {"success": True, "message": message, "data": data}
