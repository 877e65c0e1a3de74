"""
Error handling middleware for Viral Studio.

This module provides centralized error handling and
response formatting for the API.
"""

import logging
from flask import jsonify, g
from werkzeug.exceptions import HTTPException

from ...core.models.errors import (
    ErrorResponse,
    ContentStudioError,
    ValidationError,
    ConfigurationError,
    ProviderInvocationError,
    RefinementValidationError,
    AuthenticationError,
    AuthorizationError,
    PersistenceError,
    RecordNotFoundError
)


logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Content generation failed, please try again later"
REFINEMENT_FAILURE_MESSAGE = "Could not apply that change, try rephrasing"


def _respond(error: ContentStudioError, status: int, message: str = None, **extra):
    body = ErrorResponse.from_exception(error, status=status, message=message)
    body.request_id = getattr(g, 'request_id', None)
    for key, value in extra.items():
        setattr(body, key, value)
    return jsonify(body.to_json()), status


class ErrorHandler:
    """Centralized error handling for the API."""

    @staticmethod
    def register_handlers(app):
        """Register error handlers with Flask app."""

        @app.errorhandler(ValidationError)
        def handle_validation_error(error):
            return ErrorHandler.handle_validation_error(error)

        @app.errorhandler(ConfigurationError)
        def handle_configuration_error(error):
            return ErrorHandler.handle_configuration_error(error)

        @app.errorhandler(ProviderInvocationError)
        def handle_provider_error(error):
            return ErrorHandler.handle_provider_error(error)

        @app.errorhandler(RefinementValidationError)
        def handle_refinement_validation_error(error):
            return ErrorHandler.handle_refinement_validation_error(error)

        @app.errorhandler(AuthenticationError)
        def handle_authentication_error(error):
            return ErrorHandler.handle_authentication_error(error)

        @app.errorhandler(AuthorizationError)
        def handle_authorization_error(error):
            return ErrorHandler.handle_authorization_error(error)

        @app.errorhandler(RecordNotFoundError)
        def handle_not_found_error(error):
            return ErrorHandler.handle_not_found_error(error)

        @app.errorhandler(PersistenceError)
        def handle_persistence_error(error):
            return ErrorHandler.handle_persistence_error(error)

        @app.errorhandler(HTTPException)
        def handle_http_exception(error):
            return ErrorHandler.handle_http_exception(error)

        @app.errorhandler(Exception)
        def handle_generic_error(error):
            return ErrorHandler.handle_generic_error(error)

    @staticmethod
    def handle_validation_error(error: ValidationError):
        """Handle validation errors."""
        logger.warning(f"Validation error: {error.message}")
        return _respond(error, 400, field=error.field, value=error.value)

    @staticmethod
    def handle_configuration_error(error: ConfigurationError):
        """Handle configuration errors."""
        logger.error(f"Configuration error: {error.message}")
        return _respond(error, 500, message=GENERIC_FAILURE_MESSAGE)

    @staticmethod
    def handle_provider_error(error: ProviderInvocationError):
        """Handle generation provider errors."""
        logger.error(f"Provider error for {error.platform}: {error.message}")
        status = 503 if error.retryable else 502
        return _respond(error, status, message=GENERIC_FAILURE_MESSAGE)

    @staticmethod
    def handle_refinement_validation_error(error: RefinementValidationError):
        """Handle rejected refinements."""
        logger.warning(f"Refinement rejected: {error.message}")
        return _respond(error, 422, message=REFINEMENT_FAILURE_MESSAGE)

    @staticmethod
    def handle_authentication_error(error: AuthenticationError):
        """Handle authentication errors."""
        logger.warning(f"Authentication error: {error.message}")
        return _respond(error, 401)

    @staticmethod
    def handle_authorization_error(error: AuthorizationError):
        """Handle authorization errors."""
        logger.warning(f"Authorization error: {error.message}")
        return _respond(error, 403)

    @staticmethod
    def handle_not_found_error(error: RecordNotFoundError):
        """Handle missing records."""
        logger.warning(f"Record not found: {error.message}")
        return _respond(error, 404)

    @staticmethod
    def handle_persistence_error(error: PersistenceError):
        """Handle persistence errors."""
        logger.error(f"Persistence error on {error.table}: {error.message}")
        return _respond(error, 500, message="Could not save content, please try again later")

    @staticmethod
    def handle_http_exception(error: HTTPException):
        """Handle routing and rate limit errors raised by Flask."""
        status = error.code or 500
        return jsonify(ErrorResponse(
            error=error.name.lower().replace(' ', '_'),
            message=error.description or error.name,
            error_code=f"HTTP_{status}",
            status=status,
            request_id=getattr(g, 'request_id', None)
        ).to_json()), status

    @staticmethod
    def handle_generic_error(error: Exception):
        """Handle generic errors."""
        request_id = getattr(g, 'request_id', 'unknown')

        logger.error(
            f"Unhandled error in request {request_id}: {str(error)}",
            exc_info=True
        )

        return jsonify(ErrorResponse(
            error="internal_server_error",
            message="An unexpected error occurred",
            error_code="INTERNAL_SERVER_ERROR",
            status=500,
            request_id=request_id,
            details={
                "error_type": type(error).__name__
            }
        ).to_json()), 500
