"""
Error Handlers for ComES

Provides:
- Custom exception classes
- Consistent error response format
- Flask error handlers
"""

from flask import jsonify, request, current_app
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError
from werkzeug.exceptions import HTTPException
from typing import Optional, Dict, Any


class ComesError(Exception):
    """Base exception class for ComES."""

    def __init__(
        self,
        message: str,
        code: str = 'UNKNOWN_ERROR',
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert error to dictionary for JSON response."""
        return {
            'success': False,
            'message': self.message,
            'code': self.code,
            'details': self.details
        }


class NotFoundError(ComesError):
    """Resource not found."""

    def __init__(self, resource: str = 'Resource', message: str = None):
        super().__init__(
            message=message or f'{resource} not found',
            code='NOT_FOUND',
            status_code=404,
            details={'resource': resource}
        )


class ValidationError(ComesError):
    """Input validation failed."""

    def __init__(self, message: str = 'Validation failed', errors: Dict = None):
        super().__init__(
            message=message,
            code='VALIDATION_ERROR',
            status_code=400,
            details={'errors': errors} if errors else None
        )


class AuthenticationError(ComesError):
    """No caller identity on a protected route."""

    def __init__(self, message: str = 'Authentication required'):
        super().__init__(
            message=message,
            code='AUTHENTICATION_ERROR',
            status_code=401
        )


class AuthorizationError(ComesError):
    """Access denied."""

    def __init__(self, message: str = 'You do not have permission to perform this action'):
        super().__init__(
            message=message,
            code='AUTHORIZATION_ERROR',
            status_code=403
        )


class ConflictError(ComesError):
    """Resource already exists or was changed concurrently."""

    def __init__(self, message: str = 'Resource already exists', details: Dict = None):
        super().__init__(
            message=message,
            code='CONFLICT',
            status_code=409,
            details=details
        )


class InvalidReferenceError(ComesError):
    """A submitted response points at a question the quiz does not have."""

    def __init__(self, question_id):
        super().__init__(
            message=f'Question {question_id} not found in this quiz',
            code='INVALID_REFERENCE',
            status_code=400,
            details={'question_id': question_id}
        )
        self.question_id = question_id


class InvalidStateError(ComesError):
    """The requested transition is not allowed from the current state."""

    def __init__(self, message: str = 'Operation not allowed in the current state',
                 code: str = 'INVALID_STATE', status_code: int = 400):
        super().__init__(message=message, code=code, status_code=status_code)


class LeaderCannotLeaveError(InvalidStateError):
    def __init__(self, message: str = 'Team leader cannot leave. Disband the team instead.'):
        super().__init__(message=message, code='LEADER_CANNOT_LEAVE')


class NotTeamLeaderError(InvalidStateError):
    def __init__(self, message: str = 'Only the team leader can perform this action'):
        super().__init__(message=message, code='NOT_TEAM_LEADER', status_code=403)


class DuplicateNameError(ComesError):
    def __init__(self, name: str):
        super().__init__(
            message='A team with this name already exists',
            code='DUPLICATE_NAME',
            status_code=409,
            details={'name': name}
        )


class NotInvitedError(ComesError):
    def __init__(self, message: str = 'You are not invited to this team'):
        super().__init__(
            message=message,
            code='NOT_INVITED',
            status_code=400
        )


def error_response(
    message: str,
    code: str = 'ERROR',
    status_code: int = 400,
    details: Dict = None
) -> tuple:
    """Create a standardized error response."""
    response = {
        'success': False,
        'message': message,
        'code': code
    }
    if details:
        response['details'] = details

    return jsonify(response), status_code


def success_response(data: Any = None, message: str = None) -> dict:
    """Create a standardized success response."""
    response = {'success': True}
    if data is not None:
        response['data'] = data
    if message:
        response['message'] = message
    return response


def register_error_handlers(app):
    """Register error handlers with Flask app."""

    @app.errorhandler(ComesError)
    def handle_comes_error(error):
        log = current_app.logger.error if error.status_code >= 500 else current_app.logger.warning
        log("%s %s - %s: %s", request.method, request.path, error.code, error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(StaleDataError)
    def handle_stale_data(error):
        current_app.logger.warning("Concurrent update rejected on %s: %s", request.path, error)
        from .extensions import db
        db.session.rollback()
        return error_response(
            'The resource was modified by another request. Please retry.',
            'CONFLICT',
            409,
        )

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(error):
        current_app.logger.warning("Integrity error on %s: %s", request.path, error.orig)
        from .extensions import db
        db.session.rollback()
        return error_response('The resource conflicts with an existing record', 'CONFLICT', 409)

    @app.errorhandler(404)
    def handle_not_found(error):
        if request.path.startswith('/api/'):
            return error_response(f'Cannot find {request.path} on this server', 'NOT_FOUND', 404)
        return error

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        if request.path.startswith('/api/'):
            return error_response('Method not allowed', 'METHOD_NOT_ALLOWED', 405)
        return error

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        if request.path.startswith('/api/'):
            return error_response(error.description or error.name, 'HTTP_ERROR', error.code or 500)
        return error

    @app.errorhandler(500)
    def handle_internal_error(error):
        current_app.logger.exception('Internal server error')
        if request.path.startswith('/api/'):
            return error_response('Something went wrong. Please try again later.', 'INTERNAL_ERROR', 500)
        return error
