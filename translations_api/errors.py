"""API error types and the JSON error handlers that render them."""

import logging
from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base class for errors that map straight onto an HTTP response."""

    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self):
        return {'error': self.message}


class ValidationError(APIError):
    """Malformed input or a reference to a locale/tag that does not exist."""

    status_code = 422
    default_message = 'The given data was invalid.'

    def __init__(self, errors, message=None):
        super().__init__(message)
        self.errors = errors

    def to_dict(self):
        return {'error': self.message, 'errors': self.errors}


class ConflictError(APIError):
    """A (locale_id, key) pair is already taken."""

    status_code = 409
    default_message = 'Translation key already exists for this locale.'


class NotFoundError(APIError):
    status_code = 404
    default_message = 'Resource not found'


class UnauthorizedError(APIError):
    status_code = 401
    default_message = 'Unauthorized'


def register_error_handlers(app):
    """Render every error as JSON."""
    from translations_api import db

    @app.errorhandler(APIError)
    def handle_api_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return jsonify({'error': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        logger.exception(f"Unhandled error: {error}")
        return jsonify({'error': 'Internal server error'}), 500
