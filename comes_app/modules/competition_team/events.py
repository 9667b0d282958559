from flask import current_app

from ...core.signals import member_removed, team_created, team_status_changed


def on_team_created(sender, **kwargs):
    current_app.logger.info(
        "Team %s (%s) created by student %s: %s invitee(s), %s",
        kwargs.get('team_id'), kwargs.get('name'), kwargs.get('leader_id'),
        kwargs.get('member_count'), kwargs.get('status'),
    )


def on_team_status_changed(sender, **kwargs):
    current_app.logger.info(
        "Team %s is now %s (was %s)",
        kwargs.get('team_id'), kwargs.get('status'), kwargs.get('previous_status'),
    )


def on_member_removed(sender, **kwargs):
    if kwargs.get('student_id') == kwargs.get('removed_by'):
        return
    current_app.logger.info(
        "Student %s was removed from team %s",
        kwargs.get('student_id'), kwargs.get('team_id'),
    )


def init_events(app):
    team_created.connect(on_team_created)
    team_status_changed.connect(on_team_status_changed)
    member_removed.connect(on_member_removed)
