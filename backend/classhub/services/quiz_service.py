"""
ClassHub Backend — Quiz Service
=================================

What:  Quiz creation inside a classroom, history listing, start/stop.
Who:   Called by the /classrooms/{id}/quizzes route handlers.

A quiz belongs to exactly one classroom (`quizzes.classroom_id`); the
classroom's quiz history is that set ordered by creation time.
"""

import logging
import uuid
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from classhub.exceptions import NotFoundError
from classhub.models import Classroom, Quiz
from classhub.schemas.quiz import QuizCreate, QuizResponse
from classhub.services.store import store

logger = logging.getLogger(__name__)


def quiz_to_response(quiz: Quiz) -> QuizResponse:
    return QuizResponse(
        id=quiz.id,
        classroom=quiz.classroom_id,
        title=quiz.title,
        description=quiz.description,
        questions=quiz.questions or [],
        activated=quiz.activated,
        created_at=quiz.created_at,
    )


class QuizService:

    async def create_quiz(
        self, db: AsyncSession, classroom_id: uuid.UUID, payload: QuizCreate
    ) -> QuizResponse:
        classroom = await store.get_or_raise(db, Classroom, classroom_id, "classroom")

        logger.info("Creating quiz for classroom [%s]", classroom.id)
        quiz = Quiz(
            classroom_id=classroom.id,
            title=payload.title,
            description=payload.description,
            questions=[question.model_dump() for question in payload.questions],
            activated=payload.activated,
        )
        await store.save(db, quiz)
        logger.info("Added quiz [%s] to classroom [%s]", quiz.id, classroom.id)
        return quiz_to_response(quiz)

    async def list_quizzes(
        self,
        db: AsyncSession,
        classroom_id: uuid.UUID,
        active_only: bool = False,
    ) -> List[QuizResponse]:
        """Classroom quiz history, oldest first; optionally only activated quizzes."""
        await store.get_or_raise(db, Classroom, classroom_id, "classroom")

        statement = select(Quiz).where(Quiz.classroom_id == classroom_id)
        if active_only:
            logger.info("Filtering out non activated quizzes")
            statement = statement.where(Quiz.activated.is_(True))
        quizzes = await store.find(db, statement.order_by(Quiz.created_at))
        return [quiz_to_response(quiz) for quiz in quizzes]

    async def _get_owned_quiz(
        self, db: AsyncSession, classroom_id: uuid.UUID, quiz_id: uuid.UUID
    ) -> Quiz:
        quiz = await store.get(db, Quiz, quiz_id)
        if quiz is None or quiz.classroom_id != classroom_id:
            logger.error("Quiz [%s] not found in classroom [%s]", quiz_id, classroom_id)
            raise NotFoundError(
                resource="quiz",
                resource_id=str(quiz_id),
                context={"classroom_id": str(classroom_id)},
            )
        return quiz

    async def get_quiz(
        self, db: AsyncSession, classroom_id: uuid.UUID, quiz_id: uuid.UUID
    ) -> QuizResponse:
        quiz = await self._get_owned_quiz(db, classroom_id, quiz_id)
        return quiz_to_response(quiz)

    async def set_activation(
        self,
        db: AsyncSession,
        classroom_id: uuid.UUID,
        quiz_id: uuid.UUID,
        activated: bool,
    ) -> QuizResponse:
        """Start (activated=True) or stop (activated=False) a quiz."""
        quiz = await self._get_owned_quiz(db, classroom_id, quiz_id)
        quiz.activated = activated
        await store.save(db, quiz)
        logger.info("Quiz [%s] %s", quiz_id, "started" if activated else "stopped")
        return quiz_to_response(quiz)


quiz_service = QuizService()
