from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException

from funnel.domain.exceptions import (
    Conflict,
    DomainError,
    Forbidden,
    InvalidTransition,
    InvariantViolation,
    NotFound,
    PersistenceError,
    ValidationError,
)

STATUS_CODES = {
    InvariantViolation: 400,
    InvalidTransition: 400,
    ValidationError: 400,
    Forbidden: 403,
    NotFound: 404,
    Conflict: 409,
    PersistenceError: 503,
}


def status_for(error: DomainError) -> int:
    for error_type in type(error).__mro__:
        if error_type in STATUS_CODES:
            return STATUS_CODES[error_type]
    return 500


def register_error_handlers(app):
    @app.errorhandler(DomainError)
    def handle_domain_error(error):
        status = status_for(error)
        if status >= 500:
            current_app.logger.error("%s: %s", type(error).__name__, error)

        response = jsonify({
            "error": type(error).__name__,
            "message": str(error)
        })
        response.status_code = status
        return response

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        response = jsonify({
            "error": error.name,
            "message": error.description
        })
        response.status_code = error.code
        return response
