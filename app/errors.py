import logging
from flask import Blueprint
from werkzeug.exceptions import HTTPException
from app.utils.responses import error

errors_bp = Blueprint("errors_bp", __name__)


class AppError(Exception):
    """Base for failures that map onto a fixed HTTP status and message."""

    status = 500
    message = "An unexpected error occurred. Please try again later."

    def __init__(self, message=None, status=None, details=None):
        super().__init__(message or self.message)
        self.message = message or self.message
        if status is not None:
            self.status = status
        self.details = details


class ValidationError(AppError):
    status = 400
    message = "Validation error"


class AuthenticationError(AppError):
    status = 401
    message = "Authentication required"


class AuthorizationError(AppError):
    status = 403
    message = "Admin privileges required"


class NotFound(AppError):
    status = 404
    message = "Not found"


class VendorNotFound(NotFound):
    message = "Vendor not found"


class PersistenceError(AppError):
    status = 500
    message = "Database operation failed"


@errors_bp.app_errorhandler(AppError)
def handle_app_error(e):
    if e.status >= 500:
        logging.error("Request failed: %s", e.message, exc_info=e.__cause__ or e)
    return error(e.message, status=e.status, code=e.status, details=e.details)


@errors_bp.app_errorhandler(HTTPException)
def handle_http_exception(e):
    msg = e.description or getattr(e, "name", "HTTP Error")
    return error(msg, status=e.code, code=e.code)


@errors_bp.app_errorhandler(Exception)
def handle_unexpected_exception(e):
    logging.exception("Unhandled exception")
    return error(
        "An unexpected error occurred. Please try again later.",
        status=500,
        code=500,
    )
