"""
ClassHub Backend — Teacher SQLAlchemy Model
=============================================

What:  ORM model for the `teachers` table.
Who:   Referenced by every classroom as its owner; the authorization checks
       compare a teacher identity against `Classroom.teacher_id`.

A teacher's classroom list is the reverse side of `classrooms.teacher_id`,
so it always agrees with what the classrooms say.
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, List

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from classhub.database import Base

if TYPE_CHECKING:
    from classhub.models.classroom import Classroom


class Teacher(Base):
    __tablename__ = "teachers"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(120), nullable=False)

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    classrooms: Mapped[List["Classroom"]] = relationship(
        back_populates="teacher",
        order_by="Classroom.created_at",
    )

    def __repr__(self) -> str:
        return f"<Teacher(id={self.id}, email='{self.email}')>"
