"""Standardized API Response Schemas"""

from typing import Generic, Optional, TypeVar
from pydantic import BaseModel


T = TypeVar('T')


class SuccessResponse(BaseModel, Generic[T]):
    """
    Standard success response envelope.

    Example:
        {
            "success": true,
            "data": {...},
            "message": "Student added successfully"
        }
    """
    success: bool = True
    data: Optional[T] = None
    message: str = "Operation successful"


class ErrorDetail(BaseModel):
    """Error details structure"""
    code: str
    message: str


class ErrorResponse(BaseModel):
    """
    Standard error response envelope.

    Example:
        {
            "success": false,
            "error": {
                "code": "NOT_FOUND",
                "message": "Student not found"
            }
        }
    """
    success: bool = False
    error: ErrorDetail
