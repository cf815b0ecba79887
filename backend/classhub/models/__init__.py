"""
ClassHub Backend — ORM Models
===============================

Importing this package registers every table on `Base.metadata` and lets the
string-based relationship targets ("Classroom", "Quiz", ...) resolve.
"""

from classhub.models.classroom import Classroom, classroom_students
from classhub.models.teacher import Teacher
from classhub.models.student import Student
from classhub.models.quiz import Quiz
from classhub.models.attendance import Attendance, Presence

__all__ = [
    "Attendance",
    "Classroom",
    "Presence",
    "Quiz",
    "Student",
    "Teacher",
    "classroom_students",
]
