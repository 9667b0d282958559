# modules/quiz/interface.py
from typing import Optional

from ...models import Quiz
from .engine import AttemptScore, QuizScoringEngine
from .services.quiz_service import QuizRepository


def get_quiz_by_id(quiz_id: int) -> Optional[Quiz]:
    """Public API to load a quiz (with correctness flags) or None."""
    return QuizRepository.get_quiz_by_id(quiz_id)


def score_attempt(quiz, responses) -> AttemptScore:
    """Score responses against a quiz without persisting anything."""
    return QuizScoringEngine().score_attempt(quiz, responses)
