"""
ClassHub Backend — Classroom Authorization
============================================

What:  Decides whether a decoded identity may use a classroom's routes.
How:   Identity-only checks run first (no database access); the classroom is
       loaded only when the identity itself is acceptable.
Who:   Called by the `teacher_access` / `member_access` route dependencies.

Decision table:
    no identity                        → 403 ForbiddenError
    role not allowed for the route     → 401 (teacher routes) / 403 (member routes)
    identity id is not a record id     → 401 UnauthorizedError
    classroom missing                  → NotFoundError (500)
    teacher who does not own it        → 401 UnauthorizedError
    student not enrolled in it         → 401 UnauthorizedError
"""

import logging
import uuid
from enum import Enum
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from classhub.exceptions import ForbiddenError, UnauthorizedError
from classhub.models import Classroom
from classhub.security import Identity
from classhub.services.store import store

logger = logging.getLogger(__name__)


class Role(str, Enum):
    TEACHER = "teacher"
    STUDENT = "student"


def _require_identity(identity: Optional[Identity]) -> Identity:
    if identity is None:
        logger.error("Missing decoded token")
        raise ForbiddenError()
    return identity


def _identity_uuid(identity: Identity) -> uuid.UUID:
    try:
        return uuid.UUID(identity.id)
    except ValueError:
        logger.error("Token id is not a valid record id")
        raise UnauthorizedError("Invalid Token for authentication")


def check_teacher_identity(identity: Optional[Identity]) -> uuid.UUID:
    """Identity-only half of `verify_teacher`; returns the teacher id."""
    identity = _require_identity(identity)
    if identity.type != Role.TEACHER.value:
        logger.error("Invalid user type in token: %s", identity.type)
        raise UnauthorizedError("Unauthorized! Only teachers can access this data!")
    return _identity_uuid(identity)


def check_member_identity(identity: Optional[Identity]) -> uuid.UUID:
    """Identity-only half of `verify_teacher_or_student`; returns the member id."""
    identity = _require_identity(identity)
    if identity.type not in (Role.TEACHER.value, Role.STUDENT.value):
        logger.error("Invalid user type in token: %s", identity.type)
        raise ForbiddenError()
    return _identity_uuid(identity)


def check_owner(teacher_id: uuid.UUID, classroom: Classroom) -> None:
    if classroom.teacher_id != teacher_id:
        logger.error("Teacher [%s] does not own classroom [%s]", teacher_id, classroom.id)
        raise UnauthorizedError()


def check_member(identity: Identity, member_id: uuid.UUID, classroom: Classroom) -> None:
    if identity.type == Role.TEACHER.value:
        check_owner(member_id, classroom)
        return
    if member_id not in {student.id for student in classroom.students}:
        logger.error("Student [%s] is not enrolled in classroom [%s]", member_id, classroom.id)
        raise UnauthorizedError()


async def verify_teacher(
    db: AsyncSession,
    identity: Optional[Identity],
    classroom_id: uuid.UUID,
) -> Identity:
    """The identity must be the teacher owning the classroom."""
    teacher_id = check_teacher_identity(identity)
    classroom = await store.get_or_raise(db, Classroom, classroom_id, "classroom")
    check_owner(teacher_id, classroom)
    logger.info("Authorized teacher [%s] for classroom [%s]", teacher_id, classroom_id)
    return identity


async def verify_teacher_or_student(
    db: AsyncSession,
    identity: Optional[Identity],
    classroom_id: uuid.UUID,
) -> Identity:
    """The identity must be the owning teacher or an enrolled student."""
    member_id = check_member_identity(identity)
    classroom = await store.get_or_raise(
        db,
        Classroom,
        classroom_id,
        "classroom",
        options=[selectinload(Classroom.students)],
    )
    check_member(identity, member_id, classroom)
    logger.info("Authorized %s [%s] for classroom [%s]", identity.type, member_id, classroom_id)
    return identity
