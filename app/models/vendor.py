"""Vendor (mess / restaurant operator) account"""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from app.models.base import BaseModel


class Vendor(BaseModel):
    """
    A vendor account. Every student record hangs off exactly one vendor.
    """
    __tablename__ = "vendors"

    name = Column(String(255), nullable=False)
    restaurant = Column(String(255), nullable=True)

    # Authentication
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)

    students = relationship(
        "Student",
        back_populates="vendor",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Vendor id={self.id} email={self.email}>"
