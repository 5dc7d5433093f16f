import logging
from flask import jsonify
from werkzeug.exceptions import HTTPException
from contentsync.domain.exceptions import (
    ConflictError,
    InvariantViolation,
    PageNotFound,
)

logger = logging.getLogger(__name__)


def _error(kind, message, status):
    response = jsonify({
        "error": kind,
        "message": message
    })
    response.status_code = status
    return response


def register_error_handlers(app):
    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        logger.error("Invariant violation: %s", error)
        return _error("InvariantViolation", str(error), 400)

    @app.errorhandler(ConflictError)
    def handle_conflict(error):
        return _error("Conflict", str(error), 409)

    @app.errorhandler(PageNotFound)
    def handle_page_not_found(error):
        return _error("NotFound", str(error), 404)

    @app.errorhandler(ValueError)
    def handle_value_error(error):
        return _error("ValidationError", str(error), 400)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return _error(error.name, error.description, error.code)
