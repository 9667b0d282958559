from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .logics.identity import (
    CONTACT_NO_PATTERN,
    EMAIL_PATTERN,
    REGISTRATION_NO_PATTERN,
    USERNAME_PATTERN,
    normalize_email,
)


class StudentCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(max_length=200)
    registration_no: str
    username: Optional[str] = Field(default=None, max_length=80)
    semester: Optional[int] = Field(default=None, ge=1, le=8)
    contact_no: Optional[str] = None

    class Config:
        extra = "ignore"
        str_strip_whitespace = True

    @field_validator('email')
    @classmethod
    def check_email(cls, value: str) -> str:
        value = normalize_email(value)
        if not EMAIL_PATTERN.match(value):
            raise ValueError('Please provide a valid email')
        return value

    @field_validator('registration_no')
    @classmethod
    def check_registration_no(cls, value: str) -> str:
        value = value.upper()
        if not REGISTRATION_NO_PATTERN.match(value):
            raise ValueError('Invalid registration number format. Use EG/20XX/XXXX')
        return value

    @field_validator('username')
    @classmethod
    def check_username(cls, value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        value = value.lower()
        if not USERNAME_PATTERN.match(value):
            raise ValueError('Username can only contain lowercase letters, numbers, hyphens, and underscores')
        return value

    @field_validator('contact_no')
    @classmethod
    def check_contact_no(cls, value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        if not CONTACT_NO_PATTERN.match(value):
            raise ValueError('Please provide a valid phone number')
        return value
