"""Database models for competition teams and their invited members."""

from __future__ import annotations

from ..core.extensions import db
from ..utils.time_utils import isoformat, utcnow


class CompetitionTeam(db.Model):
    """A competition team created by a leader student."""

    __tablename__ = 'competition_teams'

    STATUS_PENDING = 'pending'
    STATUS_ACTIVE = 'active'
    STATUS_DISBANDED = 'disbanded'
    STATUSES = (STATUS_PENDING, STATUS_ACTIVE, STATUS_DISBANDED)

    team_id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False)
    leader_id = db.Column(db.Integer, db.ForeignKey('students.student_id'), nullable=False, index=True)
    leader_name = db.Column(db.String(100), nullable=False)
    leader_email = db.Column(db.String(200), nullable=False)
    status = db.Column(db.String(20), default=STATUS_PENDING, nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    version = db.Column(db.Integer, nullable=False)

    members = db.relationship(
        'CompetitionTeamMember',
        backref='team',
        cascade='all, delete-orphan',
        order_by='CompetitionTeamMember.member_id',
        lazy=True,
    )

    # Optimistic concurrency: a stale read-modify-write raises StaleDataError
    __mapper_args__ = {'version_id_col': version}

    def find_member(self, student_id: int):
        return next((m for m in self.members if m.student_id == student_id), None)

    def to_dict(self) -> dict:
        return {
            'team_id': self.team_id,
            'name': self.name,
            'leader': {
                'student_id': self.leader_id,
                'name': self.leader_name,
                'email': self.leader_email,
            },
            'members': [member.to_dict() for member in self.members],
            'status': self.status,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }


class CompetitionTeamMember(db.Model):
    """An invited student inside a team. The leader never has an entry here."""

    __tablename__ = 'competition_team_members'

    STATUS_PENDING = 'pending'
    STATUS_APPROVED = 'approved'
    STATUS_REJECTED = 'rejected'
    STATUSES = (STATUS_PENDING, STATUS_APPROVED, STATUS_REJECTED)

    member_id = db.Column(db.Integer, primary_key=True)
    team_id = db.Column(
        db.Integer,
        db.ForeignKey('competition_teams.team_id', ondelete='CASCADE'),
        nullable=False,
    )
    student_id = db.Column(db.Integer, db.ForeignKey('students.student_id'), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(200), nullable=False)
    registration_no = db.Column(db.String(20), nullable=False)
    status = db.Column(db.String(20), default=STATUS_PENDING, nullable=False)
    joined_at = db.Column(db.DateTime(timezone=True), nullable=True)

    __table_args__ = (db.UniqueConstraint('team_id', 'student_id', name='uq_competition_team_member'),)

    def to_dict(self) -> dict:
        return {
            'student_id': self.student_id,
            'name': self.name,
            'email': self.email,
            'registration_no': self.registration_no,
            'status': self.status,
            'joined_at': isoformat(self.joined_at),
        }
