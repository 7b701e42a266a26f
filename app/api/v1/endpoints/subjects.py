from typing import Any
from fastapi import APIRouter, Depends

from app.api import deps
from app.schemas.school import SubjectCreate, SubjectResponse, SubjectUpdate
from app.schemas.responses import SuccessResponse, PaginatedResponse
from app.services.school_service import SchoolService
from app.services.school_tables import subject_table
from app.stores.base import SchoolStores

router = APIRouter()


@router.get("", response_model=PaginatedResponse[SubjectResponse])
async def list_subjects(
    params: deps.ListParams = Depends(),
    stores: SchoolStores = Depends(deps.get_stores),
) -> Any:
    """
    List subjects with their assigned teacher's name. Searchable by name and code.
    """
    subjects = await SchoolService.list_subjects(stores)
    return deps.single_page(params.apply(subject_table(subjects)))


@router.post("", response_model=SuccessResponse[SubjectResponse])
async def create_subject(
    subject_in: SubjectCreate,
    stores: SchoolStores = Depends(deps.get_stores),
) -> Any:
    """
    Create a subject. The code must be unique and the teacher must exist.
    """
    subject = await SchoolService.create_subject(stores, subject_in)
    return SuccessResponse(data=subject, message=f"{subject.name} has been added successfully.")


@router.get("/{subject_id}", response_model=SuccessResponse[SubjectResponse])
async def get_subject(
    subject_id: str,
    stores: SchoolStores = Depends(deps.get_stores),
) -> Any:
    subject = await SchoolService.get_subject(stores, subject_id)
    return SuccessResponse(data=subject)


@router.patch("/{subject_id}", response_model=SuccessResponse[SubjectResponse])
async def update_subject(
    subject_id: str,
    subject_in: SubjectUpdate,
    stores: SchoolStores = Depends(deps.get_stores),
) -> Any:
    subject = await SchoolService.update_subject(stores, subject_id, subject_in)
    return SuccessResponse(data=subject, message=f"{subject.name} has been updated successfully.")


@router.delete("/{subject_id}", response_model=SuccessResponse)
async def delete_subject(
    subject_id: str,
    stores: SchoolStores = Depends(deps.get_stores),
) -> Any:
    await SchoolService.delete_subject(stores, subject_id)
    return SuccessResponse(data=None, message="The subject has been removed from the system.")
