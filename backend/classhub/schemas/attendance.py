"""
ClassHub Backend — Attendance Schemas
=======================================

What:  Request/response contracts for /classrooms/{id}/attendances.

The client may send presences for some students; the service completes the
list from the classroom roster, marking everyone else absent.
"""

import uuid
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class PresenceEntry(BaseModel):
    student: uuid.UUID = Field(description="Enrolled student id")
    present: bool = Field(default=False)


class AttendanceCreate(BaseModel):
    """Body of POST /classrooms/{id}/attendances."""
    taken_on: Optional[date] = Field(default=None, description="Defaults to today")
    activated: bool = Field(default=False, description="Open for check-in immediately")
    presences: List[PresenceEntry] = Field(default_factory=list)


class AttendanceResponse(BaseModel):
    id: uuid.UUID
    classroom: uuid.UUID
    taken_on: date
    activated: bool
    presences: List[PresenceEntry]
    created_at: datetime
