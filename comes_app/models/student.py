"""Student directory model."""

from __future__ import annotations

from flask_login import UserMixin

from ..core.extensions import db
from ..utils.time_utils import isoformat, utcnow


class Student(UserMixin, db.Model):
    """A registered student, also the identity used on team endpoints."""

    __tablename__ = 'students'

    student_id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(200), unique=True, nullable=False)
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    registration_no = db.Column(db.String(20), unique=True, nullable=False)
    batch = db.Column(db.String(4), nullable=True, index=True)
    semester = db.Column(db.Integer, nullable=True)
    contact_no = db.Column(db.String(20), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)

    def get_id(self) -> str:
        return str(self.student_id)

    def to_dict(self) -> dict:
        return {
            'student_id': self.student_id,
            'name': self.name,
            'email': self.email,
            'username': self.username,
            'registration_no': self.registration_no,
            'batch': self.batch,
            'semester': self.semester,
            'contact_no': self.contact_no,
            'created_at': isoformat(self.created_at),
        }

    def to_summary(self) -> dict:
        return {
            'student_id': self.student_id,
            'name': self.name,
            'email': self.email,
            'registration_no': self.registration_no,
        }
