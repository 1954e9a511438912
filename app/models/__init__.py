"""Models Package - Export all models for easy imports"""

from app.models.base import BaseModel, VendorScopedMixin
from app.models.vendor import Vendor
from app.models.student import Student


__all__ = [
    "BaseModel",
    "VendorScopedMixin",
    "Vendor",
    "Student",
]
