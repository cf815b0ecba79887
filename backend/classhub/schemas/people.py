"""
ClassHub Backend — Teacher & Student Schemas
==============================================

What:  Request/response contracts for /teachers and /students.

Both kinds of person share the same shape; the response lists the ids of the
classrooms the person owns (teacher) or is enrolled in (student).
"""

import uuid
from datetime import datetime
from typing import List

from pydantic import BaseModel, Field, field_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class PersonCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120, description="Display name")
    email: str = Field(
        min_length=3,
        max_length=255,
        pattern=EMAIL_PATTERN,
        description="Unique contact email",
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("name must not be blank")
        return stripped

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class TeacherCreate(PersonCreate):
    """Body of POST /teachers."""


class StudentCreate(PersonCreate):
    """Body of POST /students."""


class PersonResponse(BaseModel):
    id: uuid.UUID = Field(description="Unique identifier")
    name: str
    email: str
    classrooms: List[uuid.UUID] = Field(
        default_factory=list,
        description="Ids of the classrooms linked to this person",
    )
    created_at: datetime


class TeacherResponse(PersonResponse):
    """Returned by the /teachers endpoints."""


class StudentResponse(PersonResponse):
    """Returned by the /students endpoints and GET /classrooms/{id}/students."""
