"""Error taxonomy shared by services and route handlers.

Services raise these; the handlers registered in ``register_error_handlers``
turn them into ``{"error": ..., "details": ...}`` JSON bodies.
"""
import logging

from flask import current_app
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message=None, details=None, status_code=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        body = {'error': self.message}
        if self.details:
            body['details'] = self.details
        return body


class ValidationError(AppError):
    status_code = 400
    default_message = 'Validation failed'


class AuthError(AppError):
    status_code = 401
    default_message = 'Authentication required'


class ConflictError(AppError):
    status_code = 409
    default_message = 'Resource already exists'


class NotFoundError(AppError):
    status_code = 404
    default_message = 'Resource not found'


class RateLimitError(AppError):
    status_code = 429
    default_message = 'Too many requests'


class ExternalServiceError(AppError):
    """Raised by AI provider clients; always converted to fallback content."""
    status_code = 502
    default_message = 'External service unavailable'


class InternalError(AppError):
    status_code = 500


def internal_error_body(error):
    if current_app.config.get('ENVIRONMENT') == 'production':
        return InternalError().to_dict()
    return InternalError(str(error) or None).to_dict()


def register_error_handlers(app, api):
    """Attach handlers to the RESTX api (its routes) and to the Flask app (everything else)."""

    @api.errorhandler(AppError)
    def handle_api_app_error(error):
        return error.to_dict(), error.status_code

    @api.errorhandler(Exception)
    def handle_api_exception(error):
        if isinstance(error, HTTPException):
            return _http_error_body(error), error.code
        logger.exception(f"Unhandled error: {error}")
        return internal_error_body(error), 500

    @app.errorhandler(AppError)
    def handle_app_error(error):
        return error.to_dict(), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return _http_error_body(error), error.code

    @app.errorhandler(Exception)
    def handle_exception(error):
        logger.exception(f"Unhandled error: {error}")
        return internal_error_body(error), 500


def _http_error_body(error):
    if error.code == 413:
        return {'error': 'Request body too large'}
    return {'error': error.description or error.name}
