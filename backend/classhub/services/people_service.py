"""
ClassHub Backend — Teacher & Student Service
==============================================

What:  Registration and lookup of teachers and students.
How:   One generic service parameterised by model class; the `teacher_service`
       and `student_service` singletons are the two instances used by the routes.
"""

import logging
import uuid
from typing import Generic, List, Type, TypeVar, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from classhub.exceptions import ValidationError
from classhub.models import Student, Teacher
from classhub.schemas.people import (
    PersonCreate,
    PersonResponse,
    StudentResponse,
    TeacherResponse,
)
from classhub.services.store import store

logger = logging.getLogger(__name__)

PersonT = TypeVar("PersonT", Teacher, Student)
ResponseT = TypeVar("ResponseT", bound=PersonResponse)


def person_to_response(
    person: Union[Teacher, Student],
    response_model: Type[ResponseT],
) -> ResponseT:
    """Requires `classrooms` to be loaded (or freshly initialised)."""
    return response_model(
        id=person.id,
        name=person.name,
        email=person.email,
        classrooms=[classroom.id for classroom in person.classrooms],
        created_at=person.created_at,
    )


class PeopleService(Generic[PersonT, ResponseT]):

    def __init__(
        self,
        model: Type[PersonT],
        response_model: Type[ResponseT],
        resource: str,
    ):
        self.model = model
        self.response_model = response_model
        self.resource = resource

    async def create(self, db: AsyncSession, payload: PersonCreate) -> ResponseT:
        """
        Register a person.

        Raises:
            ValidationError: the email is already registered for this kind of person
        """
        existing = await store.find(db, select(self.model).where(self.model.email == payload.email))
        if existing:
            logger.warning("%s email already registered: %s", self.resource.capitalize(), payload.email)
            raise ValidationError(
                message=f"A {self.resource} with this email already exists",
                field="email",
            )

        person = self.model(name=payload.name, email=payload.email, classrooms=[])
        await store.save(db, person)
        logger.info("Successfully created %s [%s]", self.resource, person.id)
        return person_to_response(person, self.response_model)

    async def list_all(self, db: AsyncSession) -> List[ResponseT]:
        people = await store.find(
            db,
            select(self.model)
            .options(selectinload(self.model.classrooms))
            .order_by(self.model.created_at),
        )
        logger.info("Successfully found all %ss (%d)", self.resource, len(people))
        return [person_to_response(person, self.response_model) for person in people]

    async def get(self, db: AsyncSession, person_id: uuid.UUID) -> ResponseT:
        person = await store.get_or_raise(
            db,
            self.model,
            person_id,
            self.resource,
            options=(selectinload(self.model.classrooms),),
        )
        return person_to_response(person, self.response_model)


teacher_service: PeopleService[Teacher, TeacherResponse] = PeopleService(
    Teacher, TeacherResponse, "teacher"
)
student_service: PeopleService[Student, StudentResponse] = PeopleService(
    Student, StudentResponse, "student"
)
