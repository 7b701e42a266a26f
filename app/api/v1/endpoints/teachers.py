from typing import Any
from fastapi import APIRouter, Depends

from app.api import deps
from app.schemas.school import Teacher, TeacherCreate, TeacherResponse, TeacherUpdate
from app.schemas.responses import SuccessResponse, PaginatedResponse
from app.services.school_service import SchoolService
from app.services.school_tables import teacher_table
from app.stores.base import SchoolStores

router = APIRouter()


@router.get("", response_model=PaginatedResponse[TeacherResponse])
async def list_teachers(
    params: deps.ListParams = Depends(),
    stores: SchoolStores = Depends(deps.get_stores),
) -> Any:
    """
    List teachers with their subject counts.
    """
    teachers = await SchoolService.list_teachers(stores)
    return deps.single_page(params.apply(teacher_table(teachers)))


@router.post("", response_model=SuccessResponse[Teacher])
async def create_teacher(
    teacher_in: TeacherCreate,
    stores: SchoolStores = Depends(deps.get_stores),
) -> Any:
    teacher = await SchoolService.create_teacher(stores, teacher_in)
    return SuccessResponse(data=teacher, message=f"{teacher.full_name} has been added successfully.")


@router.get("/{teacher_id}", response_model=SuccessResponse[Teacher])
async def get_teacher(
    teacher_id: str,
    stores: SchoolStores = Depends(deps.get_stores),
) -> Any:
    teacher = await stores.teachers.get(teacher_id)
    return SuccessResponse(data=teacher)


@router.patch("/{teacher_id}", response_model=SuccessResponse[Teacher])
async def update_teacher(
    teacher_id: str,
    teacher_in: TeacherUpdate,
    stores: SchoolStores = Depends(deps.get_stores),
) -> Any:
    teacher = await SchoolService.update_teacher(stores, teacher_id, teacher_in)
    return SuccessResponse(data=teacher, message=f"{teacher.full_name} has been updated successfully.")


@router.delete("/{teacher_id}", response_model=SuccessResponse)
async def delete_teacher(
    teacher_id: str,
    stores: SchoolStores = Depends(deps.get_stores),
) -> Any:
    """
    Delete a teacher. Their subjects stay and show as "Unassigned".
    """
    await SchoolService.delete_teacher(stores, teacher_id)
    return SuccessResponse(data=None, message="The teacher has been removed from the system.")
