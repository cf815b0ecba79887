"""
ClassHub Backend — Student SQLAlchemy Model
=============================================

What:  ORM model for the `students` table.

Enrolment lives in the `classroom_students` association table, shared with
`Classroom.students`; both sides read the same rows.
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, List

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from classhub.database import Base
from classhub.models.classroom import classroom_students

if TYPE_CHECKING:
    from classhub.models.classroom import Classroom


class Student(Base):
    __tablename__ = "students"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(120), nullable=False)

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    classrooms: Mapped[List["Classroom"]] = relationship(
        secondary=classroom_students,
        back_populates="students",
        order_by="Classroom.created_at",
    )

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, email='{self.email}')>"
