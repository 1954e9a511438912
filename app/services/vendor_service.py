"""Vendor Service - registration, credential checks and profile updates"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.core.exceptions import Conflict, InternalError
from app.core.logging import get_logger
from app.core.security import get_password_hash, verify_password
from app.models.vendor import Vendor
from app.schemas.vendor import VendorRegister, VendorUpdate

logger = get_logger(__name__)

DUPLICATE_EMAIL_MESSAGE = "Vendor already exists"


class VendorService:
    """Service layer for vendor accounts"""

    @staticmethod
    async def get_vendor_by_id(db: AsyncSession, vendor_id: UUID) -> Optional[Vendor]:
        result = await db.execute(select(Vendor).where(Vendor.id == vendor_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_vendor_by_email(db: AsyncSession, email: str) -> Optional[Vendor]:
        """Exact (case-sensitive) email lookup."""
        result = await db.execute(select(Vendor).where(Vendor.email == email))
        return result.scalar_one_or_none()

    @staticmethod
    async def register_vendor(db: AsyncSession, vendor_in: VendorRegister) -> Vendor:
        """
        Create a vendor account with a bcrypt-hashed password.

        Raises:
            Conflict: the email is already registered
            InternalError: the store rejected the write
        """
        if await VendorService.get_vendor_by_email(db, vendor_in.email):
            raise Conflict(DUPLICATE_EMAIL_MESSAGE)

        hashed_password = await run_in_threadpool(get_password_hash, vendor_in.password)
        vendor = Vendor(
            name=vendor_in.name,
            restaurant=vendor_in.restaurant,
            email=vendor_in.email,
            hashed_password=hashed_password,
        )
        db.add(vendor)
        try:
            await db.commit()
        except IntegrityError as exc:
            # Lost a race with a concurrent signup for the same email
            await db.rollback()
            raise Conflict(DUPLICATE_EMAIL_MESSAGE) from exc
        except SQLAlchemyError as exc:
            await db.rollback()
            raise InternalError("Registration failed") from exc
        await db.refresh(vendor)

        logger.info("Vendor registered", extra={"vendor_id": str(vendor.id)})
        return vendor

    @staticmethod
    async def authenticate_vendor(db: AsyncSession, email: str, password: str) -> Optional[Vendor]:
        """
        Return the vendor when email and password match, otherwise None.
        Unknown email and wrong password are indistinguishable to the caller.
        """
        vendor = await VendorService.get_vendor_by_email(db, email)
        if not vendor:
            logger.warning("Login failed: unknown email")
            return None
        if not await run_in_threadpool(verify_password, password, vendor.hashed_password):
            logger.warning("Login failed: wrong password", extra={"vendor_id": str(vendor.id)})
            return None
        return vendor

    @staticmethod
    async def update_profile(db: AsyncSession, vendor: Vendor, changes: VendorUpdate) -> Vendor:
        """
        Apply supplied profile fields. A new password is re-hashed.

        Raises:
            Conflict: the new email belongs to another vendor
        """
        data = changes.model_dump(exclude_none=True)

        new_email = data.get("email")
        if new_email and new_email != vendor.email:
            if await VendorService.get_vendor_by_email(db, new_email):
                raise Conflict("Email already in use")
            vendor.email = new_email
        if "name" in data:
            vendor.name = data["name"]
        if "restaurant" in data:
            vendor.restaurant = data["restaurant"]
        if "password" in data:
            vendor.hashed_password = await run_in_threadpool(get_password_hash, data["password"])

        try:
            await db.commit()
        except IntegrityError as exc:
            await db.rollback()
            raise Conflict("Email already in use") from exc
        except SQLAlchemyError as exc:
            await db.rollback()
            raise InternalError("Error updating profile") from exc
        await db.refresh(vendor)

        logger.info(
            "Vendor profile updated",
            extra={"vendor_id": str(vendor.id), "fields": sorted(data)},
        )
        return vendor
