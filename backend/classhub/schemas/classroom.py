"""
ClassHub Backend — Classroom Schemas
======================================

What:  Request/response contracts for /classrooms.
How:   FastAPI validates POST bodies against `ClassroomCreate`; any failure is
       turned into a 400 with per-field errors by the handler in main.py.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class ClassroomCreate(BaseModel):
    """
    Body of POST /classrooms.

    `teacher` and `students` must reference existing records; that check
    happens in ClassroomService because it needs the database.
    """
    name: str = Field(min_length=1, max_length=120, description="Classroom name")
    description: Optional[str] = Field(default=None, max_length=2000)
    teacher: uuid.UUID = Field(description="Id of the owning teacher")
    students: List[uuid.UUID] = Field(
        default_factory=list,
        description="Ids of the enrolled students (duplicates are ignored)",
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("name must not be blank")
        return stripped


class ClassroomResponse(BaseModel):
    """
    What:  Full representation of a classroom and its references.
    Who:   Returned by POST/GET/DELETE /classrooms endpoints.
    """
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    teacher: uuid.UUID = Field(description="Owning teacher id")
    students: List[uuid.UUID] = Field(description="Enrolled student ids")
    quiz_history: List[uuid.UUID] = Field(description="Quiz ids, oldest first")
    attendance_history: List[uuid.UUID] = Field(description="Attendance ids, oldest first")
    created_at: datetime
