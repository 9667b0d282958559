"""
Central Signal Registry for Event-Driven Architecture.

Uses blinker namespaces so modules can publish domain events without
knowing who listens.

Usage:
    # Publisher (sender)
    from comes_app.core.signals import attempt_scored
    attempt_scored.send(None, attempt_id=1, quiz_id=2, ...)

    # Subscriber (receiver) - in module's events.py
    @attempt_scored.connect
    def on_attempt_scored(sender, **kwargs):
        ...
"""
from blinker import Namespace

# ============================================
# Quiz Signals
# ============================================
quiz_signals = Namespace()

# Signal: Fired after a scored attempt has been persisted
# Payload: attempt_id, quiz_id, participant_name, total_marks, max_marks, percentage
attempt_scored = quiz_signals.signal('attempt_scored')

# ============================================
# Competition Team Signals
# ============================================
team_signals = Namespace()

# Signal: Fired after a team has been created
# Payload: team_id, name, leader_id, member_count, status
team_created = team_signals.signal('team_created')

# Signal: Fired when a team moves to another status (pending -> active, * -> disbanded)
# Payload: team_id, previous_status, status
team_status_changed = team_signals.signal('team_status_changed')

# Signal: Fired when a member entry leaves or is removed from a team
# Payload: team_id, student_id, removed_by
member_removed = team_signals.signal('member_removed')
