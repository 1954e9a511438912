from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field

from app.schemas.base import CamelModel


class VendorRegister(BaseModel):
    """Vendor signup. Older clients send the display name as ``vendorname``."""
    name: str = Field(..., min_length=1, validation_alias=AliasChoices("name", "vendorname"))
    email: EmailStr
    password: str = Field(..., min_length=1)
    restaurant: Optional[str] = None


class VendorUpdate(BaseModel):
    """Profile update; only supplied fields are changed."""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, min_length=1, validation_alias=AliasChoices("name", "vendorname"))
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=1)
    restaurant: Optional[str] = None


class VendorResponse(CamelModel):
    """Vendor as returned by the API. Never carries the password hash."""
    id: UUID
    name: str
    restaurant: Optional[str] = None
    email: str
    created_at: datetime
    updated_at: datetime


class VendorContext(BaseModel):
    """Identity claims taken from a verified bearer token."""
    id: UUID
    email: str
    name: Optional[str] = None
