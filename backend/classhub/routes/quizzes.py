"""
ClassHub Backend — Quiz Route Handlers
========================================

What:  Quiz history of a classroom: create, list (all / active), get,
       start and stop.
Who:   Teachers manage quizzes; enrolled students read them.

Access:
    POST /classrooms/{id}/quizzes                     owning teacher
    GET  /classrooms/{id}/quizzes                     teacher or enrolled student
    GET  /classrooms/{id}/quizzes/active              teacher or enrolled student
    GET  /classrooms/{id}/quizzes/{quiz_id}           teacher or enrolled student
    POST /classrooms/{id}/quizzes/{quiz_id}/start     owning teacher
    POST /classrooms/{id}/quizzes/{quiz_id}/stop      owning teacher
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from classhub.database import get_db_session
from classhub.routes.dependencies import (
    classroom_id_path,
    member_access,
    quiz_id_path,
    teacher_access,
)
from classhub.schemas.common import ErrorResponse
from classhub.schemas.quiz import QuizCreate, QuizResponse
from classhub.services.quiz_service import quiz_service

router = APIRouter(prefix="/classrooms/{classroom_id}/quizzes", tags=["Quizzes"])

ERRORS = {
    400: {"description": "Malformed id or invalid body", "model": ErrorResponse},
    401: {"description": "Not the owning teacher / not enrolled", "model": ErrorResponse},
    403: {"description": "Missing or invalid token", "model": ErrorResponse},
    500: {"description": "Classroom or quiz not found, or server error", "model": ErrorResponse},
}


@router.post(
    "",
    response_model=QuizResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(teacher_access)],
    responses=ERRORS,
    summary="Add a quiz to the classroom history",
)
async def create_quiz(
    payload: QuizCreate,
    classroom_id: uuid.UUID = Depends(classroom_id_path),
    db: AsyncSession = Depends(get_db_session),
) -> QuizResponse:
    return await quiz_service.create_quiz(db, classroom_id, payload)


@router.get(
    "",
    response_model=List[QuizResponse],
    dependencies=[Depends(member_access)],
    responses=ERRORS,
    summary="Quiz history of the classroom",
)
async def list_quizzes(
    classroom_id: uuid.UUID = Depends(classroom_id_path),
    db: AsyncSession = Depends(get_db_session),
) -> List[QuizResponse]:
    return await quiz_service.list_quizzes(db, classroom_id)


@router.get(
    "/active",
    response_model=List[QuizResponse],
    dependencies=[Depends(member_access)],
    responses=ERRORS,
    summary="Started quizzes of the classroom",
)
async def list_active_quizzes(
    classroom_id: uuid.UUID = Depends(classroom_id_path),
    db: AsyncSession = Depends(get_db_session),
) -> List[QuizResponse]:
    return await quiz_service.list_quizzes(db, classroom_id, active_only=True)


@router.get(
    "/{quiz_id}",
    response_model=QuizResponse,
    dependencies=[Depends(quiz_id_path), Depends(member_access)],
    responses=ERRORS,
    summary="Get one quiz of the classroom",
)
async def get_quiz(
    classroom_id: uuid.UUID = Depends(classroom_id_path),
    quiz_id: uuid.UUID = Depends(quiz_id_path),
    db: AsyncSession = Depends(get_db_session),
) -> QuizResponse:
    return await quiz_service.get_quiz(db, classroom_id, quiz_id)


@router.post(
    "/{quiz_id}/start",
    response_model=QuizResponse,
    dependencies=[Depends(quiz_id_path), Depends(teacher_access)],
    responses=ERRORS,
    summary="Start a quiz",
)
async def start_quiz(
    classroom_id: uuid.UUID = Depends(classroom_id_path),
    quiz_id: uuid.UUID = Depends(quiz_id_path),
    db: AsyncSession = Depends(get_db_session),
) -> QuizResponse:
    return await quiz_service.set_activation(db, classroom_id, quiz_id, activated=True)


@router.post(
    "/{quiz_id}/stop",
    response_model=QuizResponse,
    dependencies=[Depends(quiz_id_path), Depends(teacher_access)],
    responses=ERRORS,
    summary="Stop a quiz",
)
async def stop_quiz(
    classroom_id: uuid.UUID = Depends(classroom_id_path),
    quiz_id: uuid.UUID = Depends(quiz_id_path),
    db: AsyncSession = Depends(get_db_session),
) -> QuizResponse:
    return await quiz_service.set_activation(db, classroom_id, quiz_id, activated=False)
