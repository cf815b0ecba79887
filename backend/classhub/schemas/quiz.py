"""
ClassHub Backend — Quiz Schemas
=================================

What:  Request/response contracts for /classrooms/{id}/quizzes.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class QuizQuestion(BaseModel):
    prompt: str = Field(min_length=1, max_length=2000)
    choices: List[str] = Field(default_factory=list, max_length=20)
    answer_index: Optional[int] = Field(
        default=None,
        ge=0,
        description="Index into `choices` of the correct answer",
    )

    @model_validator(mode="after")
    def check_answer_index(self) -> "QuizQuestion":
        if self.answer_index is not None and self.answer_index >= len(self.choices):
            raise ValueError("answer_index must point at one of the choices")
        return self


class QuizCreate(BaseModel):
    """Body of POST /classrooms/{id}/quizzes."""
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    questions: List[QuizQuestion] = Field(default_factory=list)
    activated: bool = Field(default=False, description="Start the quiz immediately")


class QuizResponse(BaseModel):
    id: uuid.UUID
    classroom: uuid.UUID = Field(description="Owning classroom id")
    title: str
    description: Optional[str] = None
    questions: List[QuizQuestion]
    activated: bool
    created_at: datetime
