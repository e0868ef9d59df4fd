"""Typed application errors.

Services raise these; only the HTTP layer (see ``register_error_handlers``)
decides which status code each kind maps to.
"""
import enum
import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    AUTHORIZATION = "authorization"
    AUTHENTICATION = "authentication"


class AppError(Exception):
    kind = None

    def __init__(self, message, **context):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self):
        data = {"kind": self.kind.value, "message": self.message}
        if self.context:
            data["context"] = self.context
        return data


class ValidationError(AppError):
    kind = ErrorKind.VALIDATION

    def __init__(self, message, errors=None, **context):
        super().__init__(message, **context)
        self.errors = errors or {}


class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource, resource_id=None, message=None):
        super().__init__(message or f"{resource} not found", resource=resource, id=resource_id)
        self.resource = resource


class ConflictError(AppError):
    kind = ErrorKind.CONFLICT

    def __init__(self, message, reason, **context):
        super().__init__(message, reason=reason, **context)
        self.reason = reason


class AuthorizationError(AppError):
    kind = ErrorKind.AUTHORIZATION


class AuthenticationError(AppError):
    kind = ErrorKind.AUTHENTICATION


STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.AUTHORIZATION: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
}


def error_body(message, errors=None):
    body = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return body


def register_error_handlers(app):
    @app.errorhandler(AppError)
    def handle_app_error(error):
        status = STATUS_BY_KIND.get(error.kind, 500)
        app.logger.warning("%s rejected: %s %s", error.kind.value, error.message, error.context or "")
        errors = error.errors if isinstance(error, ValidationError) else None
        return jsonify(error_body(error.message, errors)), status

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify(error_body(error.description or error.name)), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        logger.exception("Unhandled error: %s", error)
        return jsonify(error_body("Internal server error")), 500
