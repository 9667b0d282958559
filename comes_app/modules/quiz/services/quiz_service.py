# File: comes_app/modules/quiz/services/quiz_service.py
"""Persistence orchestration for quizzes and attempts."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from sqlalchemy import or_

from ....core.error_handlers import AuthorizationError, NotFoundError, ValidationError
from ....core.extensions import db
from ....core.signals import attempt_scored
from ....models import Quiz, QuizAttempt, QuizQuestion
from ....utils.pagination import get_pagination_data
from ....utils.slug import slugify, unique_slug
from ....utils.time_utils import utcnow
from ..config import QuizDefaultConfig
from ..engine import QuizScoringEngine
from ..schemas import AttemptResponseIn, QuestionIn, QuizCreate, QuizUpdate

logger = logging.getLogger(__name__)


class QuizRepository:
    """Read access to quizzes, as consumed by the scoring flow."""

    @staticmethod
    def get_quiz_by_id(quiz_id: int) -> Optional[Quiz]:
        return db.session.get(Quiz, quiz_id)


class QuizAttemptRepository:
    """Write access to attempts. Attempts are only ever created."""

    @staticmethod
    def create(**fields) -> QuizAttempt:
        attempt = QuizAttempt(**fields)
        db.session.add(attempt)
        db.session.commit()
        return attempt


def _build_questions(questions: Iterable[QuestionIn]) -> list[QuizQuestion]:
    return [
        QuizQuestion(
            position=position,
            question_text=question.question_text,
            image_url=question.image_url,
            answers=[answer.model_dump() for answer in question.answers],
            time_limit_seconds=question.time_limit_seconds,
            marks=question.marks,
        )
        for position, question in enumerate(questions)
    ]


def _slug_for(title: str, quiz_id: Optional[int] = None) -> str:
    def exists(candidate: str) -> bool:
        query = Quiz.query.filter(Quiz.slug == candidate)
        if quiz_id is not None:
            query = query.filter(Quiz.quiz_id != quiz_id)
        return db.session.query(query.exists()).scalar()

    return unique_slug(slugify(title, fallback='quiz'), exists)


def _parse_sort(sort: Optional[str]):
    sort = (sort or QuizDefaultConfig.LIST_DEFAULT_SORT).strip()
    descending = sort.startswith('-')
    field_name = sort.lstrip('-')
    if field_name not in QuizDefaultConfig.LIST_SORT_FIELDS:
        raise ValidationError(
            'Validation failed',
            {'sort': f"Sort must be one of: {', '.join(QuizDefaultConfig.LIST_SORT_FIELDS)}"},
        )
    column = getattr(Quiz, field_name)
    return column.desc() if descending else column.asc()


class QuizService:
    """Quiz authoring, listing and attempt submission."""

    @staticmethod
    def get_quiz(quiz_id: int) -> Quiz:
        quiz = QuizRepository.get_quiz_by_id(quiz_id)
        if quiz is None:
            raise NotFoundError('Quiz')
        return quiz

    @staticmethod
    def list_quizzes(page: int, limit: int, include_hidden: bool = False,
                     search: Optional[str] = None, sort: Optional[str] = None):
        query = Quiz.query
        if not include_hidden:
            query = query.filter(Quiz.is_visible.is_(True))
        if search:
            like_pattern = f"%{search.strip()}%"
            query = query.filter(
                or_(
                    Quiz.title.ilike(like_pattern),
                    Quiz.description.ilike(like_pattern),
                )
            )
        query = query.order_by(_parse_sort(sort), Quiz.quiz_id.desc())
        return get_pagination_data(query, page, limit)

    @staticmethod
    def create_quiz(payload: QuizCreate) -> Quiz:
        quiz = Quiz(
            title=payload.title,
            slug=_slug_for(payload.title),
            description=payload.description,
            is_visible=payload.is_visible,
            questions=_build_questions(payload.questions),
        )
        db.session.add(quiz)
        db.session.commit()
        logger.info("Quiz created: %s (id=%s, %d questions)", quiz.title, quiz.quiz_id, len(quiz.questions))
        return quiz

    @staticmethod
    def update_quiz(quiz_id: int, payload: QuizUpdate) -> Quiz:
        quiz = QuizService.get_quiz(quiz_id)
        provided = payload.model_fields_set

        if 'title' in provided and payload.title != quiz.title:
            quiz.title = payload.title
            quiz.slug = _slug_for(payload.title, quiz_id=quiz.quiz_id)
        if 'description' in provided:
            quiz.description = payload.description
        if 'is_visible' in provided:
            quiz.is_visible = payload.is_visible
        if 'questions' in provided:
            quiz.questions = _build_questions(payload.questions)

        quiz.updated_at = utcnow()
        db.session.commit()
        logger.info("Quiz updated: id=%s fields=%s", quiz.quiz_id, sorted(provided))
        return quiz

    @staticmethod
    def delete_quiz(quiz_id: int) -> None:
        quiz = QuizService.get_quiz(quiz_id)
        attempt_count = QuizAttempt.query.filter_by(quiz_id=quiz.quiz_id).delete(synchronize_session=False)
        db.session.delete(quiz)
        db.session.commit()
        logger.info("Quiz deleted: id=%s (with %d attempts)", quiz_id, attempt_count)

    @staticmethod
    def set_visibility(quiz_id: int, is_visible: Optional[bool] = None) -> Quiz:
        """Set visibility explicitly, or toggle it when ``is_visible`` is None."""
        quiz = QuizService.get_quiz(quiz_id)
        quiz.is_visible = (not quiz.is_visible) if is_visible is None else is_visible
        quiz.updated_at = utcnow()
        db.session.commit()
        return quiz

    @staticmethod
    def submit_attempt(
        quiz_id: int,
        participant_name: str,
        responses: list[AttemptResponseIn],
        quiz_repository=QuizRepository,
        attempt_repository=QuizAttemptRepository,
        engine: Optional[QuizScoringEngine] = None,
    ) -> QuizAttempt:
        """
        Score a submission and persist it as a new attempt.

        Nothing is written unless every response references a question of
        the quiz; the engine raises InvalidReferenceError first.
        """
        quiz = quiz_repository.get_quiz_by_id(quiz_id)
        if quiz is None:
            raise NotFoundError('Quiz')
        if not quiz.is_visible:
            raise AuthorizationError('This quiz is not available')

        score = (engine or QuizScoringEngine()).score_attempt(quiz, responses)

        attempt = attempt_repository.create(
            quiz_id=quiz.quiz_id,
            participant_name=participant_name,
            responses=score.response_records(),
            total_marks=score.total_marks,
            max_marks=score.max_marks,
            percentage=score.percentage,
            completed_at=utcnow(),
        )

        logger.info(
            "Attempt scored for quiz %s by %s: %s/%s (%s%%)",
            quiz.quiz_id, participant_name, score.total_marks, score.max_marks, score.percentage,
        )
        attempt_scored.send(
            None,
            attempt_id=attempt.attempt_id,
            quiz_id=quiz.quiz_id,
            participant_name=participant_name,
            total_marks=score.total_marks,
            max_marks=score.max_marks,
            percentage=score.percentage,
        )
        return attempt

    @staticmethod
    def list_attempts(quiz_id: int, page: int, limit: int, sort: Optional[str] = None):
        QuizService.get_quiz(quiz_id)
        query = QuizAttempt.query.filter(QuizAttempt.quiz_id == quiz_id)
        if sort == QuizDefaultConfig.ATTEMPT_SORT_RECENT:
            query = query.order_by(QuizAttempt.completed_at.desc(), QuizAttempt.attempt_id.desc())
        else:
            query = query.order_by(QuizAttempt.total_marks.desc(), QuizAttempt.completed_at.asc())
        return get_pagination_data(query, page, limit)
