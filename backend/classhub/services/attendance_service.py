"""
ClassHub Backend — Attendance Service
=======================================

What:  Attendance sheets for a classroom: creation from the roster, history
       listing, opening/closing for check-in, and student check-in.
Who:   Called by the /classrooms/{id}/attendances route handlers.

Roster initialisation:
    Every student enrolled in the classroom gets exactly one presence entry.
    `present` comes from the presences sent by the teacher, defaulting to
    False. Presences naming a student outside the roster are rejected.
"""

import logging
import uuid
from datetime import date
from typing import Dict, Iterable, List, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from classhub.exceptions import NotFoundError, ValidationError
from classhub.models import Attendance, Classroom, Presence
from classhub.schemas.attendance import (
    AttendanceCreate,
    AttendanceResponse,
    PresenceEntry,
)
from classhub.services.store import store

logger = logging.getLogger(__name__)


def build_roster(
    roster: Iterable[uuid.UUID],
    supplied: Iterable[PresenceEntry],
) -> List[Tuple[uuid.UUID, bool]]:
    """
    Merge supplied presences into the classroom roster.

    Returns one (student_id, present) pair per roster student, in roster order.

    Raises:
        ValidationError: a supplied presence names a student outside the roster
    """
    roster_ids = list(roster)
    enrolled = set(roster_ids)
    present: Dict[uuid.UUID, bool] = {}
    unknown: List[str] = []
    for entry in supplied:
        if entry.student not in enrolled:
            unknown.append(str(entry.student))
            continue
        present[entry.student] = entry.present
    if unknown:
        raise ValidationError(
            message="Presences reference students who are not in the classroom",
            field="presences",
            context={"unknown_students": unknown},
        )
    return [(student_id, present.get(student_id, False)) for student_id in roster_ids]


def attendance_to_response(attendance: Attendance) -> AttendanceResponse:
    """Requires `presences` to be loaded."""
    return AttendanceResponse(
        id=attendance.id,
        classroom=attendance.classroom_id,
        taken_on=attendance.taken_on,
        activated=attendance.activated,
        presences=[
            PresenceEntry(student=presence.student_id, present=presence.present)
            for presence in attendance.presences
        ],
        created_at=attendance.created_at,
    )


class AttendanceService:

    async def create_attendance(
        self, db: AsyncSession, classroom_id: uuid.UUID, payload: AttendanceCreate
    ) -> AttendanceResponse:
        classroom = await store.get_or_raise(
            db,
            Classroom,
            classroom_id,
            "classroom",
            options=(selectinload(Classroom.students),),
        )

        logger.info("Initializing students list for classroom [%s]", classroom.id)
        roster = build_roster((student.id for student in classroom.students), payload.presences)

        attendance = Attendance(
            classroom_id=classroom.id,
            taken_on=payload.taken_on or date.today(),
            activated=payload.activated,
            presences=[
                Presence(student_id=student_id, present=is_present, position=position)
                for position, (student_id, is_present) in enumerate(roster)
            ],
        )
        await store.save(db, attendance)
        logger.info("Added attendance [%s] to classroom [%s]", attendance.id, classroom.id)
        return attendance_to_response(attendance)

    async def list_attendances(
        self,
        db: AsyncSession,
        classroom_id: uuid.UUID,
        active_only: bool = False,
    ) -> List[AttendanceResponse]:
        await store.get_or_raise(db, Classroom, classroom_id, "classroom")

        statement = (
            select(Attendance)
            .where(Attendance.classroom_id == classroom_id)
            .options(selectinload(Attendance.presences))
        )
        if active_only:
            logger.info("Filtering out non activated attendances")
            statement = statement.where(Attendance.activated.is_(True))
        attendances = await store.find(db, statement.order_by(Attendance.created_at))
        return [attendance_to_response(attendance) for attendance in attendances]

    async def _get_owned_attendance(
        self, db: AsyncSession, classroom_id: uuid.UUID, attendance_id: uuid.UUID
    ) -> Attendance:
        attendance = await store.get(
            db,
            Attendance,
            attendance_id,
            options=(selectinload(Attendance.presences),),
        )
        if attendance is None or attendance.classroom_id != classroom_id:
            logger.error("Attendance [%s] not found in classroom [%s]", attendance_id, classroom_id)
            raise NotFoundError(
                resource="attendance",
                resource_id=str(attendance_id),
                context={"classroom_id": str(classroom_id)},
            )
        return attendance

    async def get_attendance(
        self, db: AsyncSession, classroom_id: uuid.UUID, attendance_id: uuid.UUID
    ) -> AttendanceResponse:
        attendance = await self._get_owned_attendance(db, classroom_id, attendance_id)
        return attendance_to_response(attendance)

    async def set_activation(
        self,
        db: AsyncSession,
        classroom_id: uuid.UUID,
        attendance_id: uuid.UUID,
        activated: bool,
    ) -> AttendanceResponse:
        """Open (activated=True) or close (activated=False) check-in."""
        attendance = await self._get_owned_attendance(db, classroom_id, attendance_id)
        attendance.activated = activated
        await store.save(db, attendance)
        logger.info("Attendance [%s] %s", attendance_id, "opened" if activated else "closed")
        return attendance_to_response(attendance)

    async def check_in(
        self,
        db: AsyncSession,
        classroom_id: uuid.UUID,
        attendance_id: uuid.UUID,
        student_id: uuid.UUID,
    ) -> AttendanceResponse:
        """
        Mark a student present on an open attendance sheet.

        Raises:
            ValidationError: the sheet is closed, or the student joined the
                classroom after the sheet was created
        """
        attendance = await self._get_owned_attendance(db, classroom_id, attendance_id)
        if not attendance.activated:
            raise ValidationError(
                message="Attendance is not open for check-in",
                field="attendance_id",
            )

        presence = attendance.presence_for(student_id)
        if presence is None:
            raise ValidationError(
                message="Student is not on this attendance sheet",
                field="student",
                context={"student": str(student_id)},
            )

        presence.present = True
        await store.save(db, attendance)
        logger.info("Student [%s] checked in to attendance [%s]", student_id, attendance_id)
        return attendance_to_response(attendance)


attendance_service = AttendanceService()
