"""
ClassHub Backend — Classroom Service
======================================

What:  Creation, listing, lookup and deletion of classrooms.
Who:   Called by the /classrooms route handlers.

Creation Flow (POST /classrooms):
    ┌──────────┐    ┌──────────────┐    ┌───────────────┐    ┌──────────┐
    │ Validate │───▶│ Resolve      │───▶│ Save classroom│───▶│ Response │
    │ (schema) │    │ teacher and  │    │ + link teacher│    │  (201)   │
    └──────────┘    │ students     │    │ and students  │    └──────────┘
                    └──────────────┘    └───────────────┘

    The links are rows written in the same flush as the classroom. An unknown
    teacher or student stops the request before anything is saved, and any
    later failure rolls the whole request back.
"""

import logging
import uuid
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from classhub.exceptions import ValidationError
from classhub.models import Attendance, Classroom, Student, Teacher, classroom_students
from classhub.schemas.classroom import ClassroomCreate, ClassroomResponse
from classhub.schemas.people import StudentResponse
from classhub.services.people_service import person_to_response
from classhub.services.store import store

logger = logging.getLogger(__name__)

CLASSROOM_LOAD_OPTIONS = (
    selectinload(Classroom.students),
    selectinload(Classroom.quizzes),
    selectinload(Classroom.attendances),
)


def classroom_to_response(classroom: Classroom) -> ClassroomResponse:
    """Requires `students`, `quizzes` and `attendances` to be loaded."""
    return ClassroomResponse(
        id=classroom.id,
        name=classroom.name,
        description=classroom.description,
        teacher=classroom.teacher_id,
        students=[student.id for student in classroom.students],
        quiz_history=[quiz.id for quiz in classroom.quizzes],
        attendance_history=[attendance.id for attendance in classroom.attendances],
        created_at=classroom.created_at,
    )


class ClassroomService:
    """
    Business logic for classrooms.

    Error Handling Strategy:
        Unknown references → ValidationError (400)
        Missing classroom  → NotFoundError (500, from the store)
        Store failures     → DatabaseError (500, from the store)
    """

    async def create_classroom(
        self, db: AsyncSession, payload: ClassroomCreate
    ) -> ClassroomResponse:
        """
        Create a classroom and link it to its teacher and students.

        Raises:
            ValidationError: teacher or one of the students does not exist
            DatabaseError: saving failed
        """
        logger.info("Creating classroom '%s'", payload.name)

        teacher = await store.get(db, Teacher, payload.teacher)
        if teacher is None:
            logger.error("Teacher [%s] does not exist", payload.teacher)
            raise ValidationError(
                message=f"Teacher '{payload.teacher}' does not exist",
                field="teacher",
            )

        students = await self._resolve_students(db, payload.students)

        classroom = Classroom(
            name=payload.name,
            description=payload.description,
            teacher=teacher,
            students=students,
            quizzes=[],
            attendances=[],
        )
        await store.save(db, classroom)

        logger.info("Linked classroom [%s] to teacher [%s]", classroom.id, teacher.id)
        for student in students:
            logger.info("Linked classroom [%s] to student [%s]", classroom.id, student.id)
        logger.info("Successfully created classroom [%s]", classroom.id)

        return classroom_to_response(classroom)

    async def _resolve_students(
        self, db: AsyncSession, student_ids: List[uuid.UUID]
    ) -> List[Student]:
        unique_ids = list(dict.fromkeys(student_ids))
        if not unique_ids:
            return []

        found = await store.find(db, select(Student).where(Student.id.in_(unique_ids)))
        by_id = {student.id: student for student in found}
        missing = [str(student_id) for student_id in unique_ids if student_id not in by_id]
        if missing:
            logger.error("Unknown students: %s", ", ".join(missing))
            raise ValidationError(
                message="Some students do not exist",
                field="students",
                context={"missing": missing},
            )
        return sorted(by_id.values(), key=lambda student: student.name)

    async def list_classrooms(self, db: AsyncSession) -> List[ClassroomResponse]:
        classrooms = await store.find(
            db,
            select(Classroom).options(*CLASSROOM_LOAD_OPTIONS).order_by(Classroom.created_at),
        )
        logger.info("Successfully found all classrooms (%d)", len(classrooms))
        return [classroom_to_response(classroom) for classroom in classrooms]

    async def get_classroom(
        self, db: AsyncSession, classroom_id: uuid.UUID
    ) -> ClassroomResponse:
        classroom = await store.get_or_raise(
            db, Classroom, classroom_id, "classroom", options=CLASSROOM_LOAD_OPTIONS
        )
        return classroom_to_response(classroom)

    async def delete_classroom(
        self, db: AsyncSession, classroom_id: uuid.UUID
    ) -> ClassroomResponse:
        """
        Delete a classroom together with its history and enrolments.

        Returns the classroom as it was before deletion.
        """
        classroom = await store.get_or_raise(
            db,
            Classroom,
            classroom_id,
            "classroom",
            options=(
                selectinload(Classroom.students),
                selectinload(Classroom.quizzes),
                selectinload(Classroom.attendances).selectinload(Attendance.presences),
            ),
        )
        removed = classroom_to_response(classroom)
        await store.delete(db, classroom)
        logger.info("Successfully deleted classroom [%s]", classroom_id)
        return removed

    async def list_students(
        self, db: AsyncSession, classroom_id: uuid.UUID
    ) -> List[StudentResponse]:
        await store.get_or_raise(db, Classroom, classroom_id, "classroom")
        students = await store.find(
            db,
            select(Student)
            .join(classroom_students, classroom_students.c.student_id == Student.id)
            .where(classroom_students.c.classroom_id == classroom_id)
            .options(selectinload(Student.classrooms))
            .order_by(Student.name, Student.id)
            .execution_options(populate_existing=True),
        )
        return [person_to_response(student, StudentResponse) for student in students]


classroom_service = ClassroomService()
