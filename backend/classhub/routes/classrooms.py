"""
ClassHub Backend — Classroom Route Handlers
=============================================

What:  POST/GET /classrooms, GET/DELETE /classrooms/{id} and
       GET /classrooms/{id}/students.
How:   Path id validation and authorization run as dependencies; the handler
       delegates to ClassroomService and returns its response model.
Who:   Called by the teacher and student front-ends.

Access:
    POST   /classrooms                  open (teacher and students named in the body)
    GET    /classrooms                  open
    GET    /classrooms/{id}             open
    DELETE /classrooms/{id}             owning teacher
    GET    /classrooms/{id}/students    owning teacher or enrolled student
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from classhub.database import get_db_session
from classhub.routes.dependencies import classroom_id_path, member_access, teacher_access
from classhub.schemas.classroom import ClassroomCreate, ClassroomResponse
from classhub.schemas.common import ErrorResponse
from classhub.schemas.people import StudentResponse
from classhub.services.classroom_service import classroom_service

router = APIRouter(prefix="/classrooms", tags=["Classrooms"])

AUTH_ERRORS = {
    401: {"description": "Not the owning teacher / not enrolled", "model": ErrorResponse},
    403: {"description": "Missing or invalid token", "model": ErrorResponse},
}


@router.post(
    "",
    response_model=ClassroomResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid body or unknown teacher/student", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a classroom",
    description=(
        "Creates a classroom and links it to its teacher and students in the same "
        "transaction. Unknown teacher or student ids reject the whole request."
    ),
)
async def create_classroom(
    payload: ClassroomCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ClassroomResponse:
    return await classroom_service.create_classroom(db, payload)


@router.get(
    "",
    response_model=List[ClassroomResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List classrooms",
)
async def list_classrooms(
    db: AsyncSession = Depends(get_db_session),
) -> List[ClassroomResponse]:
    return await classroom_service.list_classrooms(db)


@router.get(
    "/{classroom_id}",
    response_model=ClassroomResponse,
    responses={
        400: {"description": "Malformed classroom id", "model": ErrorResponse},
        500: {"description": "Classroom not found or server error", "model": ErrorResponse},
    },
    summary="Get a classroom",
)
async def get_classroom(
    classroom_id: uuid.UUID = Depends(classroom_id_path),
    db: AsyncSession = Depends(get_db_session),
) -> ClassroomResponse:
    return await classroom_service.get_classroom(db, classroom_id)


@router.delete(
    "/{classroom_id}",
    response_model=ClassroomResponse,
    dependencies=[Depends(teacher_access)],
    responses={
        400: {"description": "Malformed classroom id", "model": ErrorResponse},
        **AUTH_ERRORS,
        500: {"description": "Classroom not found or server error", "model": ErrorResponse},
    },
    summary="Delete a classroom",
    description=(
        "Deletes the classroom with its quiz and attendance history and its "
        "enrolments. Only the owning teacher may delete it. Returns the removed classroom."
    ),
)
async def delete_classroom(
    classroom_id: uuid.UUID = Depends(classroom_id_path),
    db: AsyncSession = Depends(get_db_session),
) -> ClassroomResponse:
    return await classroom_service.delete_classroom(db, classroom_id)


@router.get(
    "/{classroom_id}/students",
    response_model=List[StudentResponse],
    dependencies=[Depends(member_access)],
    responses={
        400: {"description": "Malformed classroom id", "model": ErrorResponse},
        **AUTH_ERRORS,
        500: {"description": "Classroom not found or server error", "model": ErrorResponse},
    },
    summary="List the students enrolled in a classroom",
)
async def list_classroom_students(
    classroom_id: uuid.UUID = Depends(classroom_id_path),
    db: AsyncSession = Depends(get_db_session),
) -> List[StudentResponse]:
    return await classroom_service.list_students(db, classroom_id)
