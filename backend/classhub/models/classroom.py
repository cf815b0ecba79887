"""
ClassHub Backend — Classroom SQLAlchemy Model
===============================================

What:  ORM model for the `classrooms` table and the `classroom_students`
       association table.
Who:   Used by ClassroomService for creation/deletion, by QuizService and
       AttendanceService for history, and by the authorization checks.

Reference layout:
    classrooms.teacher_id ──────────────▶ teachers.id
    classroom_students (classroom_id, student_id)
    quizzes.classroom_id ───────────────▶ classrooms.id   (quiz history)
    attendances.classroom_id ───────────▶ classrooms.id   (attendance history)

    Each reference is stored once, so the teacher/student side and the
    classroom side cannot disagree. Deleting a classroom deletes its history
    and enrolment rows (ORM cascade plus ON DELETE CASCADE).
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from classhub.database import Base

if TYPE_CHECKING:
    from classhub.models.attendance import Attendance
    from classhub.models.quiz import Quiz
    from classhub.models.student import Student
    from classhub.models.teacher import Teacher


classroom_students = Table(
    "classroom_students",
    Base.metadata,
    Column(
        "classroom_id",
        Uuid,
        ForeignKey("classrooms.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "student_id",
        Uuid,
        ForeignKey("students.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Classroom(Base):
    """
    A teacher-owned group of students with a quiz and attendance history.

    Query Patterns:
        - Authorization: SELECT teacher_id + enrolled student ids by classroom id
        - History: quizzes / attendances WHERE classroom_id = :id ORDER BY created_at
    """

    __tablename__ = "classrooms"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(120), nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)

    teacher_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("teachers.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    teacher: Mapped["Teacher"] = relationship(back_populates="classrooms")

    students: Mapped[List["Student"]] = relationship(
        secondary=classroom_students,
        back_populates="classrooms",
        order_by="Student.name",
    )

    quizzes: Mapped[List["Quiz"]] = relationship(
        back_populates="classroom",
        cascade="all, delete-orphan",
        order_by="Quiz.created_at",
    )

    attendances: Mapped[List["Attendance"]] = relationship(
        back_populates="classroom",
        cascade="all, delete-orphan",
        order_by="Attendance.created_at",
    )

    def __repr__(self) -> str:
        return f"<Classroom(id={self.id}, name='{self.name}', teacher_id={self.teacher_id})>"
