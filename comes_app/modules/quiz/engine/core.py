"""
Quiz Scoring Engine - time-decayed partial credit.

Pure logic: no database access and no side effects. The caller hands in the
full quiz (with correctness flags) and the submitted responses, and gets
back the scored responses plus the aggregate numbers. Persisting the attempt
is the caller's job.

Per correct response:
    time_fraction = max(0, (time_limit - response_time) / time_limit)
    marks_awarded = round2(max(marks * MIN_CREDIT_FRACTION, marks * time_fraction))
Incorrect responses score 0.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import Any, Iterable, Mapping

from ....core.error_handlers import InvalidReferenceError
from ..config import QuizDefaultConfig


def round2(value: float) -> float:
    """Round to 2 decimals, halves away from zero (inputs here are never negative)."""
    return math.floor(value * 100 + 0.5) / 100


def _answer_is_correct(answer: Any) -> bool:
    if isinstance(answer, Mapping):
        return bool(answer.get('is_correct'))
    return bool(getattr(answer, 'is_correct', False))


@dataclass
class ScoredResponse:
    """A submitted response with its derived correctness and marks."""
    question_id: int
    selected_answer_index: int
    response_time_seconds: float
    is_correct: bool
    marks_awarded: float


@dataclass
class AttemptScore:
    """Result of scoring one attempt."""
    responses: list[ScoredResponse] = field(default_factory=list)
    total_marks: float = 0.0
    max_marks: int = 0
    percentage: float = 0.0

    def response_records(self) -> list[dict]:
        return [asdict(response) for response in self.responses]


class QuizScoringEngine:
    """
    Scores quiz attempts.

    ``quiz`` needs a ``questions`` sequence whose items expose
    ``question_id``, ``answers`` (mappings or objects with ``is_correct``),
    ``time_limit_seconds`` and ``marks``. Each response exposes
    ``question_id``, ``selected_answer_index`` and ``response_time_seconds``.
    """

    def __init__(self, min_credit_fraction: float = QuizDefaultConfig.MIN_CREDIT_FRACTION):
        self.min_credit_fraction = min_credit_fraction

    def score_attempt(self, quiz, responses: Iterable[Any]) -> AttemptScore:
        questions = {question.question_id: question for question in quiz.questions}
        responses = list(responses)

        # Every reference is checked before anything is scored
        for response in responses:
            if response.question_id not in questions:
                raise InvalidReferenceError(response.question_id)

        scored = [self.score_response(questions[r.question_id], r) for r in responses]

        total_marks = round2(sum(r.marks_awarded for r in scored))
        max_marks = sum(question.marks for question in quiz.questions)
        percentage = round2(total_marks / max_marks * 100) if max_marks > 0 else 0

        return AttemptScore(
            responses=scored,
            total_marks=total_marks,
            max_marks=max_marks,
            percentage=percentage,
        )

    def score_response(self, question, response) -> ScoredResponse:
        index = response.selected_answer_index
        answers = question.answers or []
        is_correct = 0 <= index < len(answers) and _answer_is_correct(answers[index])

        marks_awarded = 0.0
        if is_correct:
            marks_awarded = self.time_decayed_marks(
                question.marks,
                question.time_limit_seconds,
                response.response_time_seconds,
            )

        return ScoredResponse(
            question_id=response.question_id,
            selected_answer_index=index,
            response_time_seconds=response.response_time_seconds,
            is_correct=is_correct,
            marks_awarded=marks_awarded,
        )

    def time_decayed_marks(self, marks: int, time_limit_seconds: float, response_time_seconds: float) -> float:
        if time_limit_seconds and time_limit_seconds > 0:
            time_fraction = max(0.0, (time_limit_seconds - response_time_seconds) / time_limit_seconds)
        else:
            time_fraction = 0.0
        return round2(max(marks * self.min_credit_fraction, marks * time_fraction))
