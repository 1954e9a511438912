from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.config import settings
from app.core import security
from app.core.exceptions import Unauthorized
from app.schemas.auth import LoginRequest, Token
from app.schemas.responses import SuccessResponse
from app.schemas.vendor import VendorRegister
from app.services import login_audit
from app.services.vendor_service import VendorService

router = APIRouter()


@router.post("/register", response_model=SuccessResponse, status_code=status.HTTP_201_CREATED)
async def register_vendor(
    vendor_in: VendorRegister,
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Register a vendor account. No token is issued; the vendor logs in next.
    """
    vendor = await VendorService.register_vendor(db, vendor_in)
    return SuccessResponse(
        data={"vendor_id": str(vendor.id)},
        message="Vendor registered successfully"
    )


@router.post("/login", response_model=SuccessResponse[Token])
async def login(
    login_data: LoginRequest,
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Exchange email and password for a bearer token valid for
    ACCESS_TOKEN_EXPIRE_DAYS days.
    """
    vendor = await VendorService.authenticate_vendor(db, email=login_data.email, password=login_data.password)
    if not vendor:
        raise Unauthorized()

    access_token = security.create_access_token(
        data={"sub": str(vendor.id), "email": vendor.email, "name": vendor.name}
    )
    await login_audit.record_login(vendor.email)

    return SuccessResponse(
        data=Token(
            token=access_token,
            token_type="bearer",
            expires_in=settings.ACCESS_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        ),
        message="Login successful"
    )
