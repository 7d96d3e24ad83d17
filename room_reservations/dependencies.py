import secrets

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from room_reservations.config import settings
from room_reservations.utils.exceptions import UnauthorizedException, ForbiddenException

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


# ─── Admin Guard ──────────────────────────────────────────────────────────────
def get_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> None:
    """
    Require the configured admin token for catalog management.
    Raises 401 if the token is missing, 403 if it does not match.
    With ADMIN_TOKEN unset every caller is admitted.

    Usage:
        @router.post("/rooms")
        def create_room(_: None = Depends(get_admin)):
            ...
    """
    if not settings.ADMIN_TOKEN:
        return

    if not credentials:
        raise UnauthorizedException("No admin token provided")

    if not secrets.compare_digest(credentials.credentials.encode(), settings.ADMIN_TOKEN.encode()):
        raise ForbiddenException("Invalid admin token")
