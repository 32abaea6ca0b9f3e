# prayertools/errors.py

import sentry_sdk
from flask import jsonify, current_app


class PrayerToolsError(Exception):
    """Base class for errors that map onto an HTTP response."""
    status_code = 500
    public_message = "Internal server error"

    def __init__(self, message=None):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message

    def to_dict(self):
        return {"error": self.message}


class ValidationError(PrayerToolsError):
    """Missing or malformed input."""
    status_code = 400
    public_message = "Invalid request"

    def __init__(self, message=None, errors=None):
        super().__init__(message)
        self.errors = errors or {}

    def to_dict(self):
        body = {"error": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class AuthenticationError(PrayerToolsError):
    """Unknown identity, wrong password or a bad token. The message stays generic."""
    status_code = 401
    public_message = "Invalid credentials"


class AuthorizationError(PrayerToolsError):
    status_code = 403
    public_message = "You do not have permission to perform this action"


class NotFoundError(PrayerToolsError):
    status_code = 404
    public_message = "Resource not found"


class UpstreamError(PrayerToolsError):
    """
    The prayer-times API was unreachable or answered with an error.

    `message` is what the caller sees. The underlying exception is kept on
    `cause` for logging only.
    """
    status_code = 500
    public_message = "Failed to fetch data from the prayer time service"

    def __init__(self, message=None, cause=None):
        super().__init__(message)
        self.cause = cause


def register_error_handlers(app):
    """Maps the exception classes above onto JSON responses."""

    @app.errorhandler(PrayerToolsError)
    def handle_prayer_tools_error(error):
        if isinstance(error, UpstreamError):
            current_app.logger.error(f"Upstream failure: {error.cause!r}")
        elif error.status_code >= 500:
            current_app.logger.error(f"Unhandled application error: {error}", exc_info=True)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(500)
    def handle_unexpected_error(error):
        original = getattr(error, 'original_exception', None) or error
        current_app.logger.error(f"Unexpected error: {original}", exc_info=original)
        sentry_sdk.capture_exception(original)
        return jsonify({"error": "Internal server error"}), 500
