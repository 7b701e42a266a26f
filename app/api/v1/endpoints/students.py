from typing import Any
from fastapi import APIRouter, Depends

from app.api import deps
from app.schemas.school import Student, StudentCreate, StudentUpdate
from app.schemas.responses import SuccessResponse, PaginatedResponse
from app.services.school_service import SchoolService
from app.services.school_tables import student_table
from app.stores.base import SchoolStores

router = APIRouter()


@router.get("", response_model=PaginatedResponse[Student])
async def list_students(
    params: deps.ListParams = Depends(),
    stores: SchoolStores = Depends(deps.get_stores),
) -> Any:
    """
    List students.
    Searchable by first name, last name, email and student number.
    """
    students = await SchoolService.list_students(stores)
    return deps.single_page(params.apply(student_table(students)))


@router.post("", response_model=SuccessResponse[Student])
async def create_student(
    student_in: StudentCreate,
    stores: SchoolStores = Depends(deps.get_stores),
) -> Any:
    """
    Create single student. student_number is generated ({year}-{seq}) when omitted.
    """
    student = await SchoolService.create_student(stores, student_in)
    return SuccessResponse(data=student, message=f"{student.full_name} has been added successfully.")


@router.get("/{student_id}", response_model=SuccessResponse[Student])
async def get_student(
    student_id: str,
    stores: SchoolStores = Depends(deps.get_stores),
) -> Any:
    student = await stores.students.get(student_id)
    return SuccessResponse(data=student)


@router.patch("/{student_id}", response_model=SuccessResponse[Student])
async def update_student(
    student_id: str,
    student_in: StudentUpdate,
    stores: SchoolStores = Depends(deps.get_stores),
) -> Any:
    """
    Partial update; fields left out keep their value.
    """
    student = await SchoolService.update_student(stores, student_id, student_in)
    return SuccessResponse(data=student, message=f"{student.full_name} has been updated successfully.")


@router.delete("/{student_id}", response_model=SuccessResponse)
async def delete_student(
    student_id: str,
    stores: SchoolStores = Depends(deps.get_stores),
) -> Any:
    await SchoolService.delete_student(stores, student_id)
    return SuccessResponse(data=None, message="The student has been removed from the system.")
