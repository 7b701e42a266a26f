"""API V1 Router"""

from fastapi import APIRouter

# Import endpoint routers
from app.api.v1.endpoints import dashboard, students, teachers, subjects

# Create API v1 router
api_router = APIRouter()

# Include endpoint routers with prefixes and tags
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
api_router.include_router(students.router, prefix="/students", tags=["Student Management"])
api_router.include_router(teachers.router, prefix="/teachers", tags=["Teacher Management"])
api_router.include_router(subjects.router, prefix="/subjects", tags=["Subject Management"])
