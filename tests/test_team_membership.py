"""
Tests for the competition team membership state machine.

The machine runs against in-memory repositories; no database is involved.
"""

import logging
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from comes_app.core.error_handlers import (
    DuplicateNameError,
    InvalidStateError,
    LeaderCannotLeaveError,
    NotFoundError,
    NotInvitedError,
    NotTeamLeaderError,
    ValidationError,
)
from comes_app.models import CompetitionTeam, CompetitionTeamMember
from comes_app.modules.competition_team.logics.membership import (
    TeamMembershipStateMachine,
    resolve_team_status,
)

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class FakeTeamRepository:
    def __init__(self):
        self.teams = {}
        self.saves = 0

    def get_by_id(self, team_id):
        return self.teams.get(team_id)

    def find_by_name(self, name):
        return next((t for t in self.teams.values() if t.name == name), None)

    def save(self, team):
        if team.team_id is None:
            team.team_id = len(self.teams) + 1
        self.teams[team.team_id] = team
        self.saves += 1


class FakeStudentDirectory:
    def __init__(self, *students):
        self.students = {s.student_id: s for s in students}

    def find_student_by_id(self, student_id):
        return self.students.get(student_id)


def _student(student_id, name):
    return SimpleNamespace(
        student_id=student_id,
        name=name,
        email=f'{name.lower()}@example.com',
        registration_no=f'EG/2024/{student_id:04d}',
    )


LEADER = _student(1, 'Leader')
ALICE = _student(2, 'Alice')
BOB = _student(3, 'Bob')


@pytest.fixture
def repository():
    return FakeTeamRepository()


@pytest.fixture
def machine(repository):
    return TeamMembershipStateMachine(
        repository,
        FakeStudentDirectory(LEADER, ALICE, BOB),
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def team(machine):
    return machine.create_team('Robotics', LEADER, [ALICE.student_id, BOB.student_id])


class TestResolveTeamStatus:
    def _members(self, *statuses):
        return [SimpleNamespace(status=s) for s in statuses]

    def test_all_approved_activates(self):
        assert resolve_team_status('pending', self._members('approved', 'approved')) == 'active'

    def test_no_members_activates(self):
        assert resolve_team_status('pending', []) == 'active'

    def test_any_rejection_keeps_pending(self):
        assert resolve_team_status('pending', self._members('approved', 'rejected')) == 'pending'

    def test_pending_member_keeps_pending(self):
        assert resolve_team_status('pending', self._members('approved', 'pending')) == 'pending'

    def test_never_demotes_active(self):
        assert resolve_team_status('active', self._members('pending')) == 'active'

    def test_disbanded_is_terminal(self):
        assert resolve_team_status('disbanded', self._members('approved')) == 'disbanded'


class TestCreateTeam:
    def test_without_invitees_is_active(self, machine):
        created = machine.create_team('Solo', LEADER, [])
        assert created.status == CompetitionTeam.STATUS_ACTIVE
        assert created.members == []

    def test_with_invitees_is_pending(self, team):
        assert team.status == CompetitionTeam.STATUS_PENDING
        assert [m.student_id for m in team.members] == [ALICE.student_id, BOB.student_id]
        assert all(m.status == CompetitionTeamMember.STATUS_PENDING for m in team.members)
        assert team.leader_id == LEADER.student_id
        assert team.leader_email == 'leader@example.com'
        assert team.created_at == team.updated_at == FIXED_NOW

    def test_member_snapshot_copies_directory_identity(self, team):
        alice = team.find_member(ALICE.student_id)
        assert alice.name == 'Alice'
        assert alice.email == 'alice@example.com'
        assert alice.registration_no == 'EG/2024/0002'
        assert alice.joined_at is None

    def test_duplicate_name_rejected(self, machine, team):
        with pytest.raises(DuplicateNameError) as excinfo:
            machine.create_team('Robotics', BOB, [])
        assert excinfo.value.status_code == 409

    def test_unknown_invitees_are_dropped(self, machine, caplog):
        caplog.set_level(logging.DEBUG, logger='comes_app.modules.competition_team.logics.membership')

        created = machine.create_team('Ghosts', LEADER, [404, ALICE.student_id])

        assert [m.student_id for m in created.members] == [ALICE.student_id]
        assert 'Dropping unknown invitee 404' in caplog.text

    def test_only_unknown_invitees_yields_active_team(self, machine):
        created = machine.create_team('Nobody', LEADER, [404, 405])
        assert created.status == CompetitionTeam.STATUS_ACTIVE

    def test_leader_and_repeated_ids_are_collapsed(self, machine):
        created = machine.create_team(
            'Echo', LEADER, [LEADER.student_id, ALICE.student_id, ALICE.student_id]
        )
        assert [m.student_id for m in created.members] == [ALICE.student_id]


class TestRespondToInvitation:
    def test_all_approvals_activate_team(self, machine, team):
        machine.respond_to_invitation(team.team_id, ALICE.student_id, 'approved')
        assert team.status == CompetitionTeam.STATUS_PENDING

        machine.respond_to_invitation(team.team_id, BOB.student_id, 'approved')

        assert team.status == CompetitionTeam.STATUS_ACTIVE
        assert team.find_member(BOB.student_id).joined_at == FIXED_NOW

    def test_one_rejection_leaves_team_pending(self, machine, team):
        machine.respond_to_invitation(team.team_id, ALICE.student_id, 'approved')
        machine.respond_to_invitation(team.team_id, BOB.student_id, 'rejected')

        assert team.status == CompetitionTeam.STATUS_PENDING
        bob = team.find_member(BOB.student_id)
        assert bob.status == CompetitionTeamMember.STATUS_REJECTED
        assert bob.joined_at is None

    def test_missing_team(self, machine):
        with pytest.raises(NotFoundError):
            machine.respond_to_invitation(99, ALICE.student_id, 'approved')

    def test_not_invited(self, machine, team):
        with pytest.raises(NotInvitedError):
            machine.respond_to_invitation(team.team_id, 50, 'approved')

    def test_leader_is_not_invited(self, machine, team):
        with pytest.raises(NotInvitedError):
            machine.respond_to_invitation(team.team_id, LEADER.student_id, 'approved')

    def test_answer_is_final(self, machine, team):
        machine.respond_to_invitation(team.team_id, ALICE.student_id, 'rejected')

        with pytest.raises(NotInvitedError):
            machine.respond_to_invitation(team.team_id, ALICE.student_id, 'approved')

    def test_invalid_decision(self, machine, team):
        with pytest.raises(ValidationError):
            machine.respond_to_invitation(team.team_id, ALICE.student_id, 'maybe')

    def test_every_transition_is_saved(self, machine, repository, team):
        saves = repository.saves
        machine.respond_to_invitation(team.team_id, ALICE.student_id, 'approved')
        assert repository.saves == saves + 1


class TestLeaveAndRemove:
    def test_leader_cannot_leave(self, machine, team):
        with pytest.raises(LeaderCannotLeaveError) as excinfo:
            machine.leave_team(team.team_id, LEADER.student_id)
        assert isinstance(excinfo.value, InvalidStateError)
        assert excinfo.value.code == 'LEADER_CANNOT_LEAVE'

    def test_leave_removes_entry(self, machine, team):
        machine.leave_team(team.team_id, ALICE.student_id)
        assert team.find_member(ALICE.student_id) is None
        assert len(team.members) == 1

    def test_leave_does_not_reevaluate_status(self, machine, team):
        machine.respond_to_invitation(team.team_id, ALICE.student_id, 'approved')

        # Bob is the only pending entry; his leaving does not promote the team
        machine.leave_team(team.team_id, BOB.student_id)

        assert team.status == CompetitionTeam.STATUS_PENDING

    def test_active_team_stays_active_after_leave(self, machine, team):
        machine.respond_to_invitation(team.team_id, ALICE.student_id, 'approved')
        machine.respond_to_invitation(team.team_id, BOB.student_id, 'approved')

        machine.leave_team(team.team_id, ALICE.student_id)

        assert team.status == CompetitionTeam.STATUS_ACTIVE

    def test_leave_when_not_member(self, machine, team):
        with pytest.raises(NotFoundError):
            machine.leave_team(team.team_id, 50)

    def test_remove_member(self, machine, team):
        machine.remove_member(team.team_id, LEADER.student_id, BOB.student_id)
        assert [m.student_id for m in team.members] == [ALICE.student_id]
        assert team.status == CompetitionTeam.STATUS_PENDING

    def test_only_leader_removes(self, machine, team):
        with pytest.raises(NotTeamLeaderError) as excinfo:
            machine.remove_member(team.team_id, ALICE.student_id, BOB.student_id)
        assert excinfo.value.status_code == 403
        assert len(team.members) == 2

    def test_leader_cannot_be_removed(self, machine, team):
        with pytest.raises(LeaderCannotLeaveError):
            machine.remove_member(team.team_id, LEADER.student_id, LEADER.student_id)


class TestDisband:
    def test_leader_disbands(self, machine, team):
        machine.disband_team(team.team_id, LEADER.student_id)
        assert team.status == CompetitionTeam.STATUS_DISBANDED

    def test_disbanding_twice_changes_nothing(self, machine, repository, team):
        machine.disband_team(team.team_id, LEADER.student_id)
        saves = repository.saves

        again = machine.disband_team(team.team_id, LEADER.student_id)

        assert again is team
        assert team.status == CompetitionTeam.STATUS_DISBANDED
        assert repository.saves == saves

    def test_non_leader_cannot_disband_a_disbanded_team(self, machine, team):
        machine.disband_team(team.team_id, LEADER.student_id)

        with pytest.raises(NotTeamLeaderError):
            machine.disband_team(team.team_id, ALICE.student_id)

    def test_non_leader_cannot_disband(self, machine, team):
        with pytest.raises(NotTeamLeaderError):
            machine.disband_team(team.team_id, ALICE.student_id)
        assert team.status == CompetitionTeam.STATUS_PENDING

    @pytest.mark.parametrize('action', [
        lambda m, t: m.respond_to_invitation(t.team_id, ALICE.student_id, 'approved'),
        lambda m, t: m.leave_team(t.team_id, ALICE.student_id),
        lambda m, t: m.remove_member(t.team_id, LEADER.student_id, BOB.student_id),
    ])
    def test_disbanded_is_terminal(self, machine, team, action):
        machine.disband_team(team.team_id, LEADER.student_id)

        with pytest.raises(InvalidStateError):
            action(machine, team)

        assert team.status == CompetitionTeam.STATUS_DISBANDED
        assert len(team.members) == 2
