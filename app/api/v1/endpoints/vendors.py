from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.core.exceptions import NotFound
from app.schemas.responses import SuccessResponse
from app.schemas.vendor import VendorContext, VendorResponse, VendorUpdate
from app.services.vendor_service import VendorService

router = APIRouter()


@router.get("", response_model=SuccessResponse[VendorResponse])
async def get_profile(
    current_vendor: VendorContext = Depends(deps.get_current_vendor),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """Current vendor's profile."""
    vendor = await VendorService.get_vendor_by_id(db, current_vendor.id)
    if not vendor:
        raise NotFound("Vendor not found")
    return SuccessResponse(data=VendorResponse.model_validate(vendor), message="Vendor profile")


@router.put("", response_model=SuccessResponse[VendorResponse])
async def update_profile(
    vendor_in: VendorUpdate,
    current_vendor: VendorContext = Depends(deps.get_current_vendor),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Update name, email, restaurant or password. Omitted fields are untouched.
    """
    vendor = await VendorService.get_vendor_by_id(db, current_vendor.id)
    if not vendor:
        raise NotFound("Vendor not found")

    vendor = await VendorService.update_profile(db, vendor, vendor_in)
    return SuccessResponse(
        data=VendorResponse.model_validate(vendor),
        message="Profile updated successfully"
    )
