# modules/quiz/events.py
from flask import current_app

from ...core.signals import attempt_scored


def init_events(app):
    """Connect the quiz module's signal subscribers."""
    attempt_scored.connect(on_attempt_scored)


def on_attempt_scored(sender, **kwargs):
    """Record scored attempts in the application log (leaderboard feed)."""
    current_app.logger.info(
        "[Quiz] Attempt %s on quiz %s: %s scored %s/%s",
        kwargs.get('attempt_id'),
        kwargs.get('quiz_id'),
        kwargs.get('participant_name'),
        kwargs.get('total_marks'),
        kwargs.get('max_marks'),
    )
