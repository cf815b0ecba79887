"""
ClassHub Backend — Quiz SQLAlchemy Model
==========================================

What:  ORM model for the `quizzes` table.

Lifecycle:
    1. Created inactive (unless the teacher asks otherwise) inside a classroom
    2. Started / stopped by the owning teacher (`activated`)
    3. Removed together with its classroom
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String, Text, Uuid, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from classhub.database import Base

if TYPE_CHECKING:
    from classhub.models.classroom import Classroom


class Quiz(Base):
    __tablename__ = "quizzes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    classroom_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("classrooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(200), nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)

    # List of {"prompt": str, "choices": [str], "answer_index": int | None}
    questions: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

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

    classroom: Mapped["Classroom"] = relationship(back_populates="quizzes")

    def __repr__(self) -> str:
        return f"<Quiz(id={self.id}, classroom_id={self.classroom_id}, activated={self.activated})>"
