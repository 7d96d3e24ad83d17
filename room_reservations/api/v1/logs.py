from fastapi import APIRouter, Depends, Query
from typing import Optional

from room_reservations.dependencies import get_admin
from room_reservations.utils.log_buffer import log_buffer

router = APIRouter(prefix="/logs")


@router.get("", summary="Recent server log records (Admin)")
def list_logs(
    limit: Optional[int] = Query(None, ge=1),
    _:     None          = Depends(get_admin),
):
    return log_buffer.snapshot(limit)
