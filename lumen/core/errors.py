"""
Error Taxonomy
==============

Every failure that crosses the HTTP boundary is one of these classes.
Routes catch AdminError and return `error.to_response()`; anything else
is classified before it reaches the client.
"""

from flask import jsonify


class AdminError(Exception):
    """Base class for errors reported to admin clients"""
    status_code = 500
    code = 'AdminError'
    default_message = 'Request failed'

    def __init__(self, message=None, field=None):
        self.message = message or self.default_message
        self.field = field
        super().__init__(self.message)

    def to_dict(self):
        data = {'error': self.message, 'code': self.code}
        if self.field:
            data['field'] = self.field
        return data

    def to_response(self):
        return jsonify(self.to_dict()), self.status_code


class ValidationError(AdminError):
    status_code = 400
    code = 'ValidationError'
    default_message = 'Invalid request'

    def __init__(self, field, message=None):
        super().__init__(message or f"{field} is required", field=field)


class NotFound(AdminError):
    status_code = 404
    code = 'NotFound'
    default_message = 'Record not found'


class DuplicateAccount(AdminError):
    status_code = 409
    code = 'DuplicateAccount'
    default_message = 'Email already in use'


class InvalidCredentials(AdminError):
    status_code = 401
    code = 'InvalidCredentials'
    default_message = 'Invalid email or password'


class Unauthenticated(AdminError):
    status_code = 401
    code = 'Unauthenticated'
    default_message = 'Authentication required'


class Forbidden(AdminError):
    status_code = 403
    code = 'Forbidden'
    default_message = 'Access denied. Admin privileges required.'


class StoreUnavailable(AdminError):
    status_code = 503
    code = 'StoreUnavailable'
    default_message = 'Data store unavailable, please try again later'


ERRORS_BY_CODE = {cls.code: cls for cls in (
    ValidationError, NotFound, DuplicateAccount, InvalidCredentials,
    Unauthenticated, Forbidden, StoreUnavailable,
)}

ERRORS_BY_STATUS = {
    400: ValidationError,
    401: Unauthenticated,
    403: Forbidden,
    404: NotFound,
    409: DuplicateAccount,
    422: ValidationError,
}


def error_from_response(status_code, body):
    """
    Rebuild a taxonomy error from an HTTP error response.

    Used by the client side. The server-reported reason is kept as the
    message; `code` wins over the status when both are present.
    """
    body = body if isinstance(body, dict) else {}
    message = body.get('error') or body.get('message') or f"Request failed ({status_code})"
    field = body.get('field')

    cls = ERRORS_BY_CODE.get(body.get('code')) or ERRORS_BY_STATUS.get(status_code, StoreUnavailable)
    if cls is ValidationError:
        return ValidationError(field or 'body', message)
    return cls(message, field=field)


def register_error_handlers(app):
    """Return taxonomy errors as JSON even when raised outside a route's try block"""
    from sqlalchemy.exc import SQLAlchemyError
    from .database import db
    from .logging_service import LoggingService

    @app.errorhandler(AdminError)
    def handle_admin_error(error):
        return error.to_response()

    @app.errorhandler(SQLAlchemyError)
    def handle_store_error(error):
        db.session.rollback()
        LoggingService.log_error_with_traceback('database', error)
        return StoreUnavailable().to_response()
