"""API Router"""

from fastapi import APIRouter

from app.api.v1.endpoints import auth, students, vendors

api_router = APIRouter()

api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(vendors.router, prefix="/vendor", tags=["Vendor Profile"])
api_router.include_router(students.router, tags=["Student Ledger"])

# First path segments owned by the API; the SPA fallback never answers these
API_ROUTE_ROOTS = frozenset({"register", "login", "vendor", "students", "studentsadd", "health"})
