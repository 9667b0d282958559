# modules/student/interface.py
from typing import Optional

from ...models import Student
from .services.student_service import StudentService


def find_student_by_id(student_id: int) -> Optional[Student]:
    """Student directory lookup used to resolve invitees and callers."""
    return StudentService.find_student_by_id(student_id)
