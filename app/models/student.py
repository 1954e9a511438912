"""Student payment record owned by a vendor"""

from sqlalchemy import Column, Date, Float, String
from sqlalchemy.orm import relationship

from app.models.base import BaseModel, VendorScopedMixin


class Student(BaseModel, VendorScopedMixin):
    """
    A customer on a meal plan, with payment state.

    pending_amount and next_payment_date are derived by StudentService;
    pending_amount may be negative when a student has overpaid.
    """
    __tablename__ = "students"

    name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    meals = Column(String(255), nullable=False)

    total_amount = Column(Float, nullable=False)
    paid_amount = Column(Float, nullable=False)
    pending_amount = Column(Float, nullable=False)

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    next_payment_date = Column(Date, nullable=True)

    vendor = relationship("Vendor", back_populates="students")

    def __repr__(self) -> str:
        return f"<Student id={self.id} vendor_id={self.vendor_id} name={self.name}>"
