"""
ClassHub Backend — Attendance Route Handlers
==============================================

What:  Attendance history of a classroom: create, list (all / active), get,
       open/close for check-in, and student check-in.

Access:
    POST /classrooms/{id}/attendances                              owning teacher
    GET  /classrooms/{id}/attendances[/active|/{attendance_id}]    teacher or enrolled student
    POST /classrooms/{id}/attendances/{attendance_id}/start|stop   owning teacher
    POST /classrooms/{id}/attendances/{attendance_id}/check-in     enrolled student
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from classhub.database import get_db_session
from classhub.routes.dependencies import (
    attendance_id_path,
    classroom_id_path,
    member_access,
    student_member_access,
    teacher_access,
)
from classhub.schemas.attendance import AttendanceCreate, AttendanceResponse
from classhub.schemas.common import ErrorResponse
from classhub.services.attendance_service import attendance_service

router = APIRouter(prefix="/classrooms/{classroom_id}/attendances", tags=["Attendances"])

ERRORS = {
    400: {"description": "Malformed id, invalid body or closed attendance", "model": ErrorResponse},
    401: {"description": "Not the owning teacher / not enrolled", "model": ErrorResponse},
    403: {"description": "Missing or invalid token", "model": ErrorResponse},
    500: {"description": "Classroom or attendance not found, or server error", "model": ErrorResponse},
}


@router.post(
    "",
    response_model=AttendanceResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(teacher_access)],
    responses=ERRORS,
    summary="Take attendance",
    description=(
        "Creates an attendance sheet holding one presence per enrolled student. "
        "Presences in the body set `present` for those students; everyone else "
        "starts absent."
    ),
)
async def create_attendance(
    payload: AttendanceCreate,
    classroom_id: uuid.UUID = Depends(classroom_id_path),
    db: AsyncSession = Depends(get_db_session),
) -> AttendanceResponse:
    return await attendance_service.create_attendance(db, classroom_id, payload)


@router.get(
    "",
    response_model=List[AttendanceResponse],
    dependencies=[Depends(member_access)],
    responses=ERRORS,
    summary="Attendance history of the classroom",
)
async def list_attendances(
    classroom_id: uuid.UUID = Depends(classroom_id_path),
    db: AsyncSession = Depends(get_db_session),
) -> List[AttendanceResponse]:
    return await attendance_service.list_attendances(db, classroom_id)


@router.get(
    "/active",
    response_model=List[AttendanceResponse],
    dependencies=[Depends(member_access)],
    responses=ERRORS,
    summary="Attendances open for check-in",
)
async def list_active_attendances(
    classroom_id: uuid.UUID = Depends(classroom_id_path),
    db: AsyncSession = Depends(get_db_session),
) -> List[AttendanceResponse]:
    return await attendance_service.list_attendances(db, classroom_id, active_only=True)


@router.get(
    "/{attendance_id}",
    response_model=AttendanceResponse,
    dependencies=[Depends(attendance_id_path), Depends(member_access)],
    responses=ERRORS,
    summary="Get one attendance of the classroom",
)
async def get_attendance(
    classroom_id: uuid.UUID = Depends(classroom_id_path),
    attendance_id: uuid.UUID = Depends(attendance_id_path),
    db: AsyncSession = Depends(get_db_session),
) -> AttendanceResponse:
    return await attendance_service.get_attendance(db, classroom_id, attendance_id)


@router.post(
    "/{attendance_id}/start",
    response_model=AttendanceResponse,
    dependencies=[Depends(attendance_id_path), Depends(teacher_access)],
    responses=ERRORS,
    summary="Open an attendance for check-in",
)
async def start_attendance(
    classroom_id: uuid.UUID = Depends(classroom_id_path),
    attendance_id: uuid.UUID = Depends(attendance_id_path),
    db: AsyncSession = Depends(get_db_session),
) -> AttendanceResponse:
    return await attendance_service.set_activation(db, classroom_id, attendance_id, activated=True)


@router.post(
    "/{attendance_id}/stop",
    response_model=AttendanceResponse,
    dependencies=[Depends(attendance_id_path), Depends(teacher_access)],
    responses=ERRORS,
    summary="Close an attendance",
)
async def stop_attendance(
    classroom_id: uuid.UUID = Depends(classroom_id_path),
    attendance_id: uuid.UUID = Depends(attendance_id_path),
    db: AsyncSession = Depends(get_db_session),
) -> AttendanceResponse:
    return await attendance_service.set_activation(db, classroom_id, attendance_id, activated=False)


@router.post(
    "/{attendance_id}/check-in",
    response_model=AttendanceResponse,
    dependencies=[Depends(attendance_id_path)],
    responses=ERRORS,
    summary="Check in to an open attendance",
)
async def check_in(
    student_id: uuid.UUID = Depends(student_member_access),
    classroom_id: uuid.UUID = Depends(classroom_id_path),
    attendance_id: uuid.UUID = Depends(attendance_id_path),
    db: AsyncSession = Depends(get_db_session),
) -> AttendanceResponse:
    return await attendance_service.check_in(db, classroom_id, attendance_id, student_id)
