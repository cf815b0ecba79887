"""
ClassHub Backend — Attendance Roster Unit Tests
=================================================

What:  Tests for build_roster, which turns the classroom roster plus the
       teacher's supplied presences into one presence per student.
"""

import uuid

import pytest

from classhub.exceptions import ValidationError
from classhub.schemas.attendance import PresenceEntry
from classhub.services.attendance_service import build_roster


class TestBuildRoster:

    def setup_method(self):
        self.alice, self.bob, self.carol = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
        self.roster = [self.alice, self.bob, self.carol]

    def test_everyone_absent_by_default(self):
        assert build_roster(self.roster, []) == [
            (self.alice, False),
            (self.bob, False),
            (self.carol, False),
        ]

    def test_supplied_presences_are_applied(self):
        result = build_roster(self.roster, [PresenceEntry(student=self.bob, present=True)])
        assert dict(result) == {self.alice: False, self.bob: True, self.carol: False}

    def test_one_entry_per_student_even_when_supplied_twice(self):
        supplied = [
            PresenceEntry(student=self.alice, present=True),
            PresenceEntry(student=self.alice, present=False),
        ]
        result = build_roster(self.roster, supplied)
        assert len(result) == 3
        assert dict(result)[self.alice] is False

    def test_student_outside_roster_is_rejected(self):
        outsider = uuid.uuid4()
        with pytest.raises(ValidationError) as exc_info:
            build_roster(self.roster, [PresenceEntry(student=outsider, present=True)])
        assert exc_info.value.field == "presences"
        assert exc_info.value.context["unknown_students"] == [str(outsider)]

    def test_empty_roster(self):
        assert build_roster([], []) == []
