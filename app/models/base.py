"""Base Models and Mixins"""

import uuid
from sqlalchemy import Column, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import declared_attr

from app.database import Base
from app.utils.time import get_utc_now


class BaseModel(Base):
    """
    Base model class with common fields for all models.

    Provides:
    - UUID primary key
    - created_at timestamp
    - updated_at timestamp
    """
    __abstract__ = True

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    created_at = Column(DateTime, default=get_utc_now, nullable=False)
    updated_at = Column(DateTime, default=get_utc_now, onupdate=get_utc_now, nullable=False)


class VendorScopedMixin:
    """
    Mixin for records owned by a single vendor (the tenant boundary).

    Provides:
    - vendor_id foreign key
    """

    @declared_attr
    def vendor_id(cls):
        return Column(
            Uuid(as_uuid=True),
            ForeignKey("vendors.id", ondelete="CASCADE"),
            nullable=False,
            index=True
        )
