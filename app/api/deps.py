"""API Dependencies"""

from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.exceptions import Forbidden, Unauthenticated
from app.core.security import decode_token
from app.database import get_db
from app.schemas.vendor import VendorContext

__all__ = ["get_db", "get_current_vendor", "security"]

# auto_error=False so a missing header (401) can be told apart from a bad one (403)
security = HTTPBearer(auto_error=False)


async def get_current_vendor(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> VendorContext:
    """
    Resolve the calling vendor from the bearer token.

    The token is trusted on its own; handlers that need the stored vendor
    row look it up themselves.

    Raises:
        Unauthenticated: no Authorization header
        Forbidden: header present but not a valid, unexpired access token
    """
    if credentials is None:
        if request.headers.get("Authorization") is None:
            raise Unauthenticated()
        raise Forbidden()

    payload = decode_token(credentials.credentials)
    if not payload or payload.get("type") != "access":
        raise Forbidden()

    email = payload.get("email")
    try:
        vendor_id = UUID(str(payload.get("sub")))
    except ValueError:
        raise Forbidden() from None
    if not email:
        raise Forbidden()

    context = VendorContext(id=vendor_id, email=email, name=payload.get("name"))
    request.state.vendor_id = str(context.id)
    return context
