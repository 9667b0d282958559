"""Database models for quizzes and their scored attempts."""

from __future__ import annotations

from sqlalchemy.types import JSON

from ..core.extensions import db
from ..utils.time_utils import isoformat, utcnow


class Quiz(db.Model):
    """A quiz authored by an administrator."""

    __tablename__ = 'quizzes'

    quiz_id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(220), unique=True, nullable=False, index=True)
    description = db.Column(db.Text, nullable=True)
    is_visible = db.Column(db.Boolean, default=True, nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    questions = db.relationship(
        'QuizQuestion',
        backref='quiz',
        cascade='all, delete-orphan',
        order_by='QuizQuestion.position',
        lazy=True,
    )
    attempts = db.relationship(
        'QuizAttempt',
        backref='quiz',
        passive_deletes=True,
        lazy='dynamic',
    )

    @property
    def total_marks(self) -> int:
        return sum(question.marks for question in self.questions)

    def to_dict(self, include_correct: bool = False) -> dict:
        return {
            'quiz_id': self.quiz_id,
            'title': self.title,
            'slug': self.slug,
            'description': self.description,
            'is_visible': self.is_visible,
            'total_marks': self.total_marks,
            'question_count': len(self.questions),
            'questions': [q.to_dict(include_correct=include_correct) for q in self.questions],
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }


class QuizQuestion(db.Model):
    """A single question with exactly four answers."""

    __tablename__ = 'quiz_questions'

    question_id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(
        db.Integer,
        db.ForeignKey('quizzes.quiz_id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    position = db.Column(db.Integer, nullable=False, default=0)
    question_text = db.Column(db.String(1000), nullable=False)
    image_url = db.Column(db.String(500), nullable=True)
    # [{"text": "...", "is_correct": true}, ...]
    answers = db.Column(JSON, nullable=False, default=list)
    time_limit_seconds = db.Column(db.Integer, nullable=False)
    marks = db.Column(db.Integer, nullable=False, default=1)

    def to_dict(self, include_correct: bool = False) -> dict:
        answers = []
        for answer in self.answers or []:
            entry = {'text': answer.get('text')}
            if include_correct:
                entry['is_correct'] = bool(answer.get('is_correct'))
            answers.append(entry)
        return {
            'question_id': self.question_id,
            'position': self.position,
            'question_text': self.question_text,
            'image_url': self.image_url,
            'answers': answers,
            'time_limit_seconds': self.time_limit_seconds,
            'marks': self.marks,
        }


class QuizAttempt(db.Model):
    """One participant's scored submission. Written once, never updated."""

    __tablename__ = 'quiz_attempts'

    attempt_id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(
        db.Integer,
        db.ForeignKey('quizzes.quiz_id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    participant_name = db.Column(db.String(100), nullable=False)
    # [{"question_id", "selected_answer_index", "response_time_seconds", "is_correct", "marks_awarded"}]
    responses = db.Column(JSON, nullable=False, default=list)
    total_marks = db.Column(db.Float, nullable=False, default=0, index=True)
    max_marks = db.Column(db.Integer, nullable=False, default=0)
    percentage = db.Column(db.Float, nullable=False, default=0)
    completed_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            'attempt_id': self.attempt_id,
            'quiz_id': self.quiz_id,
            'participant_name': self.participant_name,
            'responses': list(self.responses or []),
            'total_marks': self.total_marks,
            'max_marks': self.max_marks,
            'percentage': self.percentage,
            'completed_at': isoformat(self.completed_at),
        }
