"""
ClassHub Backend — Teacher & Student Route Handlers
=====================================================

What:  POST/GET /teachers, GET /teachers/{id} and the same three routes
       for /students.
How:   `build_people_router` creates one router per kind over a PeopleService.
       The `classrooms` field of each record is maintained by classroom
       creation and deletion, never set directly.
"""

import uuid
from typing import List, Type

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from classhub.database import get_db_session
from classhub.routes.dependencies import person_id_path
from classhub.schemas.common import ErrorResponse
from classhub.schemas.people import (
    PersonCreate,
    PersonResponse,
    StudentCreate,
    StudentResponse,
    TeacherCreate,
    TeacherResponse,
)
from classhub.services.people_service import PeopleService, student_service, teacher_service


def build_people_router(
    prefix: str,
    tag: str,
    service: PeopleService,
    create_model: Type[PersonCreate],
    response_model: Type[PersonResponse],
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag])
    kind = service.resource

    @router.post(
        "",
        response_model=response_model,
        status_code=status.HTTP_201_CREATED,
        responses={
            400: {"description": "Invalid body or email already registered", "model": ErrorResponse},
            500: {"description": "Server error", "model": ErrorResponse},
        },
        summary=f"Register a {kind}",
    )
    async def create_person(
        payload: create_model,  # type: ignore[valid-type]
        db: AsyncSession = Depends(get_db_session),
    ):
        return await service.create(db, payload)

    @router.get(
        "",
        response_model=List[response_model],  # type: ignore[valid-type]
        responses={500: {"description": "Server error", "model": ErrorResponse}},
        summary=f"List {kind}s",
    )
    async def list_people(db: AsyncSession = Depends(get_db_session)):
        return await service.list_all(db)

    @router.get(
        "/{person_id}",
        response_model=response_model,
        responses={
            400: {"description": f"Malformed {kind} id", "model": ErrorResponse},
            500: {"description": f"{kind.capitalize()} not found or server error", "model": ErrorResponse},
        },
        summary=f"Get a {kind}",
    )
    async def get_person(
        person_id: uuid.UUID = Depends(person_id_path),
        db: AsyncSession = Depends(get_db_session),
    ):
        return await service.get(db, person_id)

    return router


teachers_router = build_people_router(
    "/teachers", "Teachers", teacher_service, TeacherCreate, TeacherResponse
)
students_router = build_people_router(
    "/students", "Students", student_service, StudentCreate, StudentResponse
)
