# modules/competition_team/services/team_service.py
import logging
from typing import Optional

from sqlalchemy import and_, or_

from ....core.error_handlers import NotFoundError
from ....core.extensions import db
from ....core.signals import member_removed, team_created, team_status_changed
from ....models import CompetitionTeam, CompetitionTeamMember
from ...student.interface import find_student_by_id
from ..logics.membership import TeamMembershipStateMachine

logger = logging.getLogger(__name__)


class TeamRepository:
    """SQLAlchemy-backed storage for teams, one commit per transition."""

    @staticmethod
    def get_by_id(team_id: int) -> Optional[CompetitionTeam]:
        return db.session.get(CompetitionTeam, team_id)

    @staticmethod
    def find_by_name(name: str) -> Optional[CompetitionTeam]:
        return CompetitionTeam.query.filter(CompetitionTeam.name == name).first()

    @staticmethod
    def save(team: CompetitionTeam) -> None:
        db.session.add(team)
        db.session.commit()


class StudentDirectory:
    @staticmethod
    def find_student_by_id(student_id: int):
        return find_student_by_id(student_id)


def _machine() -> TeamMembershipStateMachine:
    return TeamMembershipStateMachine(TeamRepository, StudentDirectory)


class TeamService:
    """Team lookups plus the membership transitions, with logging and events."""

    @staticmethod
    def create_team(leader, name: str, member_ids: list[int]) -> CompetitionTeam:
        team = _machine().create_team(name, leader, member_ids)
        logger.info(
            "Team created: %s (id=%s) by student %s with %d invitees",
            team.name, team.team_id, leader.student_id, len(team.members),
        )
        team_created.send(
            None,
            team_id=team.team_id,
            name=team.name,
            leader_id=team.leader_id,
            member_count=len(team.members),
            status=team.status,
        )
        return team

    @staticmethod
    def get_team(team_id: int) -> CompetitionTeam:
        team = TeamRepository.get_by_id(team_id)
        if team is None:
            raise NotFoundError('Team')
        return team

    @staticmethod
    def list_my_teams(student_id: int) -> list[CompetitionTeam]:
        """Teams the student leads or has approved membership in."""
        approved_team_ids = db.session.query(CompetitionTeamMember.team_id).filter(
            and_(
                CompetitionTeamMember.student_id == student_id,
                CompetitionTeamMember.status == CompetitionTeamMember.STATUS_APPROVED,
            )
        )
        return (
            CompetitionTeam.query.filter(
                or_(
                    CompetitionTeam.leader_id == student_id,
                    CompetitionTeam.team_id.in_(approved_team_ids),
                )
            )
            .filter(CompetitionTeam.status != CompetitionTeam.STATUS_DISBANDED)
            .order_by(CompetitionTeam.created_at.desc(), CompetitionTeam.team_id.desc())
            .all()
        )

    @staticmethod
    def list_pending_invitations(student_id: int) -> list[CompetitionTeam]:
        return (
            CompetitionTeam.query.join(CompetitionTeamMember)
            .filter(
                CompetitionTeamMember.student_id == student_id,
                CompetitionTeamMember.status == CompetitionTeamMember.STATUS_PENDING,
                CompetitionTeam.status != CompetitionTeam.STATUS_DISBANDED,
            )
            .order_by(CompetitionTeam.created_at.desc(), CompetitionTeam.team_id.desc())
            .all()
        )

    @staticmethod
    def respond_to_invitation(team_id: int, student_id: int, decision: str) -> CompetitionTeam:
        previous_status = TeamService._current_status(team_id)
        team = _machine().respond_to_invitation(team_id, student_id, decision)
        logger.info("Student %s %s invitation to team %s", student_id, decision, team_id)
        TeamService._announce_status(team, previous_status)
        return team

    @staticmethod
    def leave_team(team_id: int, student_id: int) -> CompetitionTeam:
        team = _machine().leave_team(team_id, student_id)
        logger.info("Student %s left team %s", student_id, team_id)
        member_removed.send(None, team_id=team_id, student_id=student_id, removed_by=student_id)
        return team

    @staticmethod
    def disband_team(team_id: int, requester_id: int) -> CompetitionTeam:
        previous_status = TeamService._current_status(team_id)
        team = _machine().disband_team(team_id, requester_id)
        logger.info("Team %s disbanded by leader %s", team_id, requester_id)
        TeamService._announce_status(team, previous_status)
        return team

    @staticmethod
    def remove_member(team_id: int, requester_id: int, member_id: int) -> CompetitionTeam:
        team = _machine().remove_member(team_id, requester_id, member_id)
        logger.info("Student %s removed from team %s by leader %s", member_id, team_id, requester_id)
        member_removed.send(None, team_id=team_id, student_id=member_id, removed_by=requester_id)
        return team

    # ------------------------------------------------------------------ helpers
    @staticmethod
    def _current_status(team_id: int) -> Optional[str]:
        team = TeamRepository.get_by_id(team_id)
        return team.status if team is not None else None

    @staticmethod
    def _announce_status(team: CompetitionTeam, previous_status: Optional[str]) -> None:
        if previous_status is None or team.status == previous_status:
            return
        logger.info("Team %s status: %s -> %s", team.team_id, previous_status, team.status)
        team_status_changed.send(
            None,
            team_id=team.team_id,
            previous_status=previous_status,
            status=team.status,
        )
