"""Database models package for ComES."""

from ..core.extensions import db

from .quiz import Quiz, QuizAttempt, QuizQuestion
from .student import Student
from .competition_team import CompetitionTeam, CompetitionTeamMember

__all__ = [
    'db',
    'Quiz',
    'QuizQuestion',
    'QuizAttempt',
    'Student',
    'CompetitionTeam',
    'CompetitionTeamMember',
]
