"""
ClassHub Backend — Attendance SQLAlchemy Models
=================================================

What:  ORM models for `attendances` and their per-student `attendance_presences`.

An attendance is created with one presence row per student enrolled at that
moment; students joining the classroom later are not added retroactively.
"""

import uuid
from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, List

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, Uuid, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from classhub.database import Base

if TYPE_CHECKING:
    from classhub.models.classroom import Classroom


class Attendance(Base):
    __tablename__ = "attendances"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    classroom_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("classrooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    taken_on: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)

    # Open for student check-in while activated
    activated: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    classroom: Mapped["Classroom"] = relationship(back_populates="attendances")

    presences: Mapped[List["Presence"]] = relationship(
        back_populates="attendance",
        cascade="all, delete-orphan",
        order_by="Presence.position",
    )

    def presence_for(self, student_id: uuid.UUID) -> "Presence | None":
        for presence in self.presences:
            if presence.student_id == student_id:
                return presence
        return None

    def __repr__(self) -> str:
        return f"<Attendance(id={self.id}, classroom_id={self.classroom_id}, taken_on={self.taken_on})>"


class Presence(Base):
    __tablename__ = "attendance_presences"

    attendance_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("attendances.id", ondelete="CASCADE"),
        primary_key=True,
    )

    student_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("students.id", ondelete="CASCADE"),
        primary_key=True,
    )

    present: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    # Index in the roster the sheet was built from (students by name)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    attendance: Mapped["Attendance"] = relationship(back_populates="presences")

    def __repr__(self) -> str:
        return f"<Presence(attendance_id={self.attendance_id}, student_id={self.student_id}, present={self.present})>"
