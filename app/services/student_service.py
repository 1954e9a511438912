"""Student Service - per-vendor ledger of student payment records"""

from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InternalError
from app.core.logging import get_logger
from app.models.student import Student
from app.schemas.student import StudentCreate, StudentUpdate
from app.utils.time import add_one_month

logger = get_logger(__name__)

# Fields a partial update may touch
UPDATABLE_FIELDS = (
    "name",
    "phone",
    "meals",
    "start_date",
    "end_date",
    "total_amount",
    "paid_amount",
    "pending_amount",
)


def compute_pending_amount(total_amount: float, paid_amount: float) -> float:
    """Amount still owed. Negative means the student has overpaid."""
    return total_amount - paid_amount


def parse_student_id(student_id: Union[str, UUID]) -> Optional[UUID]:
    if isinstance(student_id, UUID):
        return student_id
    try:
        return UUID(str(student_id))
    except ValueError:
        return None


def apply_student_update(student: Student, changes: Dict[str, Any]) -> Student:
    """
    Copy allow-listed fields onto ``student`` and refresh derived values.

    pendingAmount is recomputed whenever both amounts are known afterwards, so
    a supplied pendingAmount only sticks when one of them is missing.
    nextPaymentDate follows endDate only when endDate is part of the update.
    """
    for field in UPDATABLE_FIELDS:
        if field in changes and changes[field] is not None:
            setattr(student, field, changes[field])

    if student.total_amount is not None and student.paid_amount is not None:
        student.pending_amount = compute_pending_amount(student.total_amount, student.paid_amount)

    if changes.get("end_date") is not None:
        student.next_payment_date = add_one_month(student.end_date)

    return student


class StudentService:
    """Service layer for student records. Every query is scoped by vendor_id."""

    @staticmethod
    async def create_student(db: AsyncSession, vendor_id: UUID, student_in: StudentCreate) -> Student:
        student = Student(
            vendor_id=vendor_id,
            name=student_in.name,
            phone=student_in.phone,
            meals=student_in.meals,
            start_date=student_in.start_date,
            end_date=student_in.end_date,
            total_amount=student_in.total_amount,
            paid_amount=student_in.paid_amount,
            pending_amount=compute_pending_amount(student_in.total_amount, student_in.paid_amount),
            next_payment_date=add_one_month(student_in.end_date),
        )
        db.add(student)
        try:
            await db.commit()
        except SQLAlchemyError as exc:
            await db.rollback()
            raise InternalError("Error adding student") from exc
        await db.refresh(student)

        logger.info(
            "Student added",
            extra={"vendor_id": str(vendor_id), "student_id": str(student.id)},
        )
        return student

    @staticmethod
    async def list_students(db: AsyncSession, vendor_id: UUID) -> List[Student]:
        try:
            result = await db.execute(
                select(Student)
                .where(Student.vendor_id == vendor_id)
                .order_by(Student.created_at, Student.id)
            )
        except SQLAlchemyError as exc:
            raise InternalError("Error fetching students") from exc
        return list(result.scalars().all())

    @staticmethod
    async def get_student_for_vendor(
        db: AsyncSession, vendor_id: UUID, student_id: Union[str, UUID]
    ) -> Optional[Student]:
        """
        Fetch a student only if it belongs to ``vendor_id``.
        Malformed IDs and other vendors' students both come back as None.
        """
        parsed = parse_student_id(student_id)
        if parsed is None:
            return None
        result = await db.execute(
            select(Student).where(Student.id == parsed, Student.vendor_id == vendor_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def update_student(
        db: AsyncSession, vendor_id: UUID, student_id: Union[str, UUID], changes: StudentUpdate
    ) -> Optional[Student]:
        """Apply a partial update. Returns None if the student is not the vendor's."""
        student = await StudentService.get_student_for_vendor(db, vendor_id, student_id)
        if not student:
            return None

        data = changes.model_dump(exclude_none=True)
        apply_student_update(student, data)
        try:
            await db.commit()
        except SQLAlchemyError as exc:
            await db.rollback()
            raise InternalError("Error updating student") from exc
        await db.refresh(student)

        logger.info(
            "Student updated",
            extra={"vendor_id": str(vendor_id), "student_id": str(student.id), "fields": sorted(data)},
        )
        return student

    @staticmethod
    async def delete_student(db: AsyncSession, vendor_id: UUID, student_id: Union[str, UUID]) -> bool:
        """Hard delete. Returns False if the student is not the vendor's."""
        student = await StudentService.get_student_for_vendor(db, vendor_id, student_id)
        if not student:
            return False

        await db.delete(student)
        try:
            await db.commit()
        except SQLAlchemyError as exc:
            await db.rollback()
            raise InternalError("Error deleting student") from exc

        logger.info(
            "Student deleted",
            extra={"vendor_id": str(vendor_id), "student_id": str(student.id)},
        )
        return True
