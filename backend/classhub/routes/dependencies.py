"""
ClassHub Backend — Route Dependencies
=======================================

What:  The reusable steps every classroom route chains before its handler:
       path id validation, identity extraction and classroom authorization.
How:   Plain FastAPI dependencies. FastAPI resolves them in declaration order
       and stops at the first one that raises, so a request is rejected by the
       earliest failing step.
Who:   Declared in the classroom, quiz, attendance, teacher and student routers.

Chain per route kind:
    teacher routes:  classroom id → identity → verify_teacher  → handler
    member routes:   classroom id → identity → verify_teacher_or_student → handler
    check-in:        member chain + identity must be a student

Path ids are declared as plain strings and parsed here so that a malformed id
produces the same 400 body as every other ValidationError.
"""

import logging
import uuid
from typing import Optional

from fastapi import Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from classhub.database import get_db_session
from classhub.exceptions import ForbiddenError, ValidationError
from classhub.security import Identity, get_identity
from classhub.services.access_service import (
    Role,
    verify_teacher,
    verify_teacher_or_student,
)

logger = logging.getLogger(__name__)


def parse_id(value: str, field: str) -> uuid.UUID:
    """Parse a path id, raising ValidationError (400) when it is malformed."""
    try:
        return uuid.UUID(value)
    except ValueError:
        logger.warning("Malformed %s in path: %r", field, value)
        raise ValidationError(message=f"Invalid {field} parameter in the request path.", field=field)


# ── Path Parameters ───────────────────────────────────────────────────────

def classroom_id_path(
    classroom_id: str = Path(description="Classroom id"),
) -> uuid.UUID:
    return parse_id(classroom_id, "classroom_id")


def quiz_id_path(quiz_id: str = Path(description="Quiz id")) -> uuid.UUID:
    return parse_id(quiz_id, "quiz_id")


def attendance_id_path(
    attendance_id: str = Path(description="Attendance id"),
) -> uuid.UUID:
    return parse_id(attendance_id, "attendance_id")


def person_id_path(person_id: str = Path(description="Teacher or student id")) -> uuid.UUID:
    return parse_id(person_id, "id")


# ── Authorization ─────────────────────────────────────────────────────────

async def teacher_access(
    classroom_id: uuid.UUID = Depends(classroom_id_path),
    identity: Optional[Identity] = Depends(get_identity),
    db: AsyncSession = Depends(get_db_session),
) -> Identity:
    """Only the teacher owning the classroom may continue."""
    return await verify_teacher(db, identity, classroom_id)


async def member_access(
    classroom_id: uuid.UUID = Depends(classroom_id_path),
    identity: Optional[Identity] = Depends(get_identity),
    db: AsyncSession = Depends(get_db_session),
) -> Identity:
    """The owning teacher or any enrolled student may continue."""
    return await verify_teacher_or_student(db, identity, classroom_id)


async def student_member_access(
    identity: Identity = Depends(member_access),
) -> uuid.UUID:
    """Member access restricted to students; returns the student id."""
    if identity.type != Role.STUDENT.value:
        logger.error("Check-in attempted with a %s identity", identity.type)
        raise ForbiddenError(message="Only students can check in to an attendance")
    return uuid.UUID(identity.id)
