"""Derived identity fields computed before a student is persisted."""

import re
from typing import Optional

REGISTRATION_NO_PATTERN = re.compile(r'^EG/20(2[0-9]|[3-9][0-9])/\d{4}$')
USERNAME_PATTERN = re.compile(r'^[a-z0-9_-]+$')
CONTACT_NO_PATTERN = re.compile(r'^(\+94|0)?[0-9]{9,10}$')
EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')

_BATCH_PATTERN = re.compile(r'EG/(\d{4})/')


def normalize_email(email: str) -> str:
    return (email or '').strip().lower()


def derive_batch(registration_no: str) -> Optional[str]:
    """``EG/2024/1234`` -> ``2024``."""
    match = _BATCH_PATTERN.search(registration_no or '')
    return match.group(1) if match else None


def default_username(registration_no: str) -> str:
    """``EG/2024/1234`` -> ``eg_2024_1234``."""
    return (registration_no or '').strip().lower().replace('/', '_')
