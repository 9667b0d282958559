"""Helpers turning request payloads into validated pydantic models."""

from __future__ import annotations

from typing import Any, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..core.error_handlers import ValidationError

ModelT = TypeVar('ModelT', bound=BaseModel)


def format_errors(exc: PydanticValidationError) -> dict[str, str]:
    """Map pydantic errors to ``{'field.path': 'message'}``."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        path = '.'.join(str(part) for part in error.get('loc', ())) or '__root__'
        message = error.get('msg', 'Invalid value')
        # pydantic prefixes messages raised from validators
        if message.startswith('Value error, '):
            message = message[len('Value error, '):]
        errors.setdefault(path, message)
    return errors


def load_payload(schema: Type[ModelT], payload: Any) -> ModelT:
    """Validate ``payload`` against ``schema`` or raise a 400 ValidationError."""
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError('Request body must be a JSON object')
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError('Validation failed', format_errors(exc)) from exc
