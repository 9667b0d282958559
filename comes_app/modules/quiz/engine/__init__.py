from .core import AttemptScore, QuizScoringEngine, ScoredResponse, round2

__all__ = ["AttemptScore", "QuizScoringEngine", "ScoredResponse", "round2"]
