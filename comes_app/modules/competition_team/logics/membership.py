"""
Competition team membership state machine.

Team:   pending -> active (every invited member approved)
        pending | active -> disbanded (leader only, terminal)
Member: pending -> approved | rejected (both terminal for that entry)

The machine loads a team through the team repository, mutates it in memory
and hands it back through ``save``. It has no knowledge of HTTP, sessions or
the current request: the acting student's id is always an explicit argument.

Repositories are duck-typed:

    team_repository.get_by_id(team_id) -> team | None
    team_repository.find_by_name(name) -> team | None
    team_repository.save(team) -> None
    student_directory.find_student_by_id(student_id) -> student | None
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from ....core.error_handlers import (
    DuplicateNameError,
    InvalidStateError,
    LeaderCannotLeaveError,
    NotFoundError,
    NotInvitedError,
    NotTeamLeaderError,
    ValidationError,
)
from ....models import CompetitionTeam, CompetitionTeamMember
from ....utils.time_utils import utcnow
from ..config import TeamDefaultConfig

logger = logging.getLogger(__name__)


def resolve_team_status(current_status: str, members: Iterable) -> str:
    """
    The single promotion rule for a team's status.

    A non-disbanded team becomes ``active`` once every member entry is
    approved (vacuously true for a team with no members); otherwise the
    status is left as it is. It never demotes a team.
    """
    if current_status == CompetitionTeam.STATUS_DISBANDED:
        return current_status
    if all(member.status == CompetitionTeamMember.STATUS_APPROVED for member in members):
        return CompetitionTeam.STATUS_ACTIVE
    return current_status


class TeamMembershipStateMachine:
    """Invitation, approval, leave, removal and disband transitions."""

    def __init__(self, team_repository, student_directory, clock: Callable = utcnow):
        self.teams = team_repository
        self.students = student_directory
        self.clock = clock

    # ------------------------------------------------------------------ helpers
    def _load(self, team_id: int) -> CompetitionTeam:
        team = self.teams.get_by_id(team_id)
        if team is None:
            raise NotFoundError('Team')
        return team

    @staticmethod
    def _ensure_not_disbanded(team: CompetitionTeam) -> None:
        if team.status == CompetitionTeam.STATUS_DISBANDED:
            raise InvalidStateError('This team has been disbanded')

    @staticmethod
    def _ensure_leader(team: CompetitionTeam, requester_id: int, action: str) -> None:
        if team.leader_id != requester_id:
            raise NotTeamLeaderError(f'Only the team leader can {action}')

    def _touch(self, team: CompetitionTeam) -> None:
        # Every mutation writes the team row, so the version check covers it
        team.updated_at = self.clock()

    # --------------------------------------------------------------- operations
    def create_team(self, name: str, leader, invitee_ids: Optional[Iterable[int]] = None) -> CompetitionTeam:
        """
        Create a team led by ``leader`` (a student directory entry).

        Invitee ids that the directory cannot resolve are dropped without
        error, as are the leader's own id and repeated ids.
        """
        if self.teams.find_by_name(name) is not None:
            raise DuplicateNameError(name)

        members = []
        seen = {leader.student_id}
        for invitee_id in invitee_ids or []:
            if invitee_id in seen:
                continue
            seen.add(invitee_id)
            student = self.students.find_student_by_id(invitee_id)
            if student is None:
                logger.debug("Dropping unknown invitee %s for team %r", invitee_id, name)
                continue
            members.append(
                CompetitionTeamMember(
                    student_id=student.student_id,
                    name=student.name,
                    email=student.email,
                    registration_no=student.registration_no,
                    status=CompetitionTeamMember.STATUS_PENDING,
                )
            )

        now = self.clock()
        team = CompetitionTeam(
            name=name,
            leader_id=leader.student_id,
            leader_name=leader.name,
            leader_email=leader.email,
            members=members,
            status=resolve_team_status(CompetitionTeam.STATUS_PENDING, members),
            created_at=now,
            updated_at=now,
        )
        self.teams.save(team)
        return team

    def respond_to_invitation(self, team_id: int, student_id: int, decision: str) -> CompetitionTeam:
        if decision not in TeamDefaultConfig.RESPONSES:
            raise ValidationError(
                'Invalid status. Must be approved or rejected',
                {'status': 'Status must be approved or rejected'},
            )

        team = self._load(team_id)
        self._ensure_not_disbanded(team)

        member = team.find_member(student_id)
        if member is None:
            raise NotInvitedError()
        if member.status != CompetitionTeamMember.STATUS_PENDING:
            raise NotInvitedError(f'You have already {member.status} this invitation')

        member.status = decision
        if decision == CompetitionTeamMember.STATUS_APPROVED:
            member.joined_at = self.clock()

        team.status = resolve_team_status(team.status, team.members)
        self._touch(team)
        self.teams.save(team)
        return team

    def leave_team(self, team_id: int, student_id: int) -> CompetitionTeam:
        """Remove the caller's own entry. Team status is not re-evaluated."""
        team = self._load(team_id)
        if team.leader_id == student_id:
            raise LeaderCannotLeaveError()
        self._ensure_not_disbanded(team)

        member = team.find_member(student_id)
        if member is None:
            raise NotFoundError('Team member', 'You are not a member of this team')

        team.members.remove(member)
        self._touch(team)
        self.teams.save(team)
        return team

    def disband_team(self, team_id: int, requester_id: int) -> CompetitionTeam:
        """Leader only. Disbanding an already disbanded team changes nothing."""
        team = self._load(team_id)
        self._ensure_leader(team, requester_id, 'disband the team')
        if team.status == CompetitionTeam.STATUS_DISBANDED:
            return team

        team.status = CompetitionTeam.STATUS_DISBANDED
        self._touch(team)
        self.teams.save(team)
        return team

    def remove_member(self, team_id: int, requester_id: int, member_id: int) -> CompetitionTeam:
        """Leader removes an entry. Team status is not re-evaluated."""
        team = self._load(team_id)
        self._ensure_leader(team, requester_id, 'remove members')
        if member_id == team.leader_id:
            raise LeaderCannotLeaveError('The team leader cannot be removed. Disband the team instead.')
        self._ensure_not_disbanded(team)

        member = team.find_member(member_id)
        if member is None:
            raise NotFoundError('Team member')

        team.members.remove(member)
        self._touch(team)
        self.teams.save(team)
        return team
