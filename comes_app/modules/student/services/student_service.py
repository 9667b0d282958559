# modules/student/services/student_service.py
import logging
from typing import Optional

from sqlalchemy import or_

from ....core.error_handlers import ConflictError, NotFoundError, ValidationError
from ....core.extensions import db
from ....models import Student
from ..config import StudentDefaultConfig
from ..logics.identity import default_username, derive_batch
from ..schemas import StudentCreate

logger = logging.getLogger(__name__)


class StudentService:
    """Student directory lookups and registration of directory entries."""

    @staticmethod
    def find_student_by_id(student_id: int) -> Optional[Student]:
        return db.session.get(Student, student_id)

    @staticmethod
    def get_student(student_id: int) -> Student:
        student = StudentService.find_student_by_id(student_id)
        if student is None:
            raise NotFoundError('Student')
        return student

    @staticmethod
    def create_student(payload: StudentCreate) -> Student:
        username = payload.username or default_username(payload.registration_no)

        existing = Student.query.filter(
            or_(
                Student.email == payload.email,
                Student.registration_no == payload.registration_no,
                Student.username == username,
            )
        ).first()
        if existing:
            if existing.email == payload.email:
                raise ConflictError('An account with this email already exists')
            if existing.registration_no == payload.registration_no:
                raise ConflictError('An account with this registration number already exists')
            raise ConflictError('This username is already taken')

        student = Student(
            name=payload.name,
            email=payload.email,
            username=username,
            registration_no=payload.registration_no,
            batch=derive_batch(payload.registration_no),
            semester=payload.semester,
            contact_no=payload.contact_no,
        )
        db.session.add(student)
        db.session.commit()
        logger.info("New student registered: %s", student.email)
        return student

    @staticmethod
    def search_students(query: Optional[str]) -> list[Student]:
        query = (query or '').strip()
        if len(query) < StudentDefaultConfig.SEARCH_MIN_LENGTH:
            raise ValidationError(
                'Validation failed',
                {'query': f'Search query must be at least {StudentDefaultConfig.SEARCH_MIN_LENGTH} characters'},
            )
        like_pattern = f"%{query}%"
        return (
            Student.query.filter(
                or_(
                    Student.name.ilike(like_pattern),
                    Student.email.ilike(like_pattern),
                    Student.registration_no.ilike(like_pattern),
                )
            )
            .order_by(Student.name.asc())
            .limit(StudentDefaultConfig.SEARCH_LIMIT)
            .all()
        )
