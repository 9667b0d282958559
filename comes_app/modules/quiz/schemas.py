import re
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .config import QuizDefaultConfig

_URL_PATTERN = re.compile(r'^https?://[^\s/$.?#].[^\s]*$', re.IGNORECASE)


class AnswerIn(BaseModel):
    text: str = Field(min_length=1, max_length=500)
    is_correct: bool = False

    class Config:
        extra = "ignore"
        str_strip_whitespace = True


class QuestionIn(BaseModel):
    question_text: str = Field(min_length=1, max_length=1000)
    image_url: Optional[str] = None
    answers: List[AnswerIn] = Field(
        min_length=QuizDefaultConfig.ANSWERS_PER_QUESTION,
        max_length=QuizDefaultConfig.ANSWERS_PER_QUESTION,
    )
    time_limit_seconds: int = Field(
        ge=QuizDefaultConfig.MIN_TIME_LIMIT_SECONDS,
        le=QuizDefaultConfig.MAX_TIME_LIMIT_SECONDS,
    )
    marks: int = Field(ge=1)

    class Config:
        extra = "ignore"
        str_strip_whitespace = True

    @field_validator('image_url')
    @classmethod
    def check_image_url(cls, value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        if not _URL_PATTERN.match(value):
            raise ValueError('Invalid image URL')
        return value

    @field_validator('answers')
    @classmethod
    def check_has_correct_answer(cls, value: List[AnswerIn]) -> List[AnswerIn]:
        if not any(answer.is_correct for answer in value):
            raise ValueError('Each question must have at least one correct answer')
        return value


class QuizCreate(BaseModel):
    title: str = Field(min_length=3, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    questions: List[QuestionIn] = Field(min_length=1)
    is_visible: bool = True

    class Config:
        extra = "ignore"
        str_strip_whitespace = True


class QuizUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=3, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    questions: Optional[List[QuestionIn]] = Field(default=None, min_length=1)
    is_visible: Optional[bool] = None

    class Config:
        extra = "ignore"
        str_strip_whitespace = True

    @field_validator('title', 'questions', 'is_visible')
    @classmethod
    def reject_explicit_null(cls, value):
        if value is None:
            raise ValueError('Field cannot be null')
        return value


class VisibilityUpdate(BaseModel):
    is_visible: Optional[bool] = None

    class Config:
        extra = "ignore"


class AttemptResponseIn(BaseModel):
    question_id: int
    selected_answer_index: int = Field(ge=0, le=QuizDefaultConfig.ANSWERS_PER_QUESTION - 1)
    response_time_seconds: float = Field(ge=0, allow_inf_nan=False)

    class Config:
        extra = "ignore"


class AttemptSubmit(BaseModel):
    participant_name: str = Field(min_length=2, max_length=100)
    responses: List[AttemptResponseIn] = Field(min_length=1)

    class Config:
        extra = "ignore"
        str_strip_whitespace = True

    @model_validator(mode='after')
    def check_unique_questions(self):
        seen = set()
        for response in self.responses:
            if response.question_id in seen:
                raise ValueError(f'Question {response.question_id} is answered more than once')
            seen.add(response.question_id)
        return self
