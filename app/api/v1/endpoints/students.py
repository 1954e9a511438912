from typing import Any, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.core.exceptions import NotFound
from app.schemas.responses import SuccessResponse
from app.schemas.student import StudentCreate, StudentResponse, StudentUpdate
from app.schemas.vendor import VendorContext
from app.services.student_service import StudentService

router = APIRouter()

STUDENT_NOT_FOUND = "Student not found"


@router.get("/students", response_model=SuccessResponse[List[StudentResponse]])
async def list_students(
    current_vendor: VendorContext = Depends(deps.get_current_vendor),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    All students of the calling vendor.
    """
    students = await StudentService.list_students(db, current_vendor.id)
    return SuccessResponse(
        data=[StudentResponse.model_validate(s) for s in students],
        message=f"{len(students)} students"
    )


@router.post("/students", response_model=SuccessResponse[StudentResponse], status_code=status.HTTP_201_CREATED)
@router.post(
    "/studentsadd",
    response_model=SuccessResponse[StudentResponse],
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def add_student(
    student_in: StudentCreate,
    current_vendor: VendorContext = Depends(deps.get_current_vendor),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Add a student. pendingAmount and nextPaymentDate are derived.
    """
    student = await StudentService.create_student(db, current_vendor.id, student_in)
    return SuccessResponse(
        data=StudentResponse.model_validate(student),
        message="Student added successfully"
    )


@router.put("/students/{student_id}", response_model=SuccessResponse[StudentResponse])
async def update_student(
    student_id: str,
    student_in: StudentUpdate,
    current_vendor: VendorContext = Depends(deps.get_current_vendor),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Partially update a student. Students of other vendors are reported as not found.
    """
    student = await StudentService.update_student(db, current_vendor.id, student_id, student_in)
    if not student:
        raise NotFound(STUDENT_NOT_FOUND)

    return SuccessResponse(
        data=StudentResponse.model_validate(student),
        message="Student updated successfully"
    )


@router.delete("/students/{student_id}", response_model=SuccessResponse)
async def delete_student(
    student_id: str,
    current_vendor: VendorContext = Depends(deps.get_current_vendor),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Permanently delete a student.
    """
    deleted = await StudentService.delete_student(db, current_vendor.id, student_id)
    if not deleted:
        raise NotFound(STUDENT_NOT_FOUND)

    return SuccessResponse(data=None, message="Student deleted successfully")
