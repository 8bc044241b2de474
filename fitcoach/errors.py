# fitcoach/errors.py
"""
Error taxonomy for the API.

Services raise these; ``register_error_handlers`` turns them into JSON
responses at the request boundary. Only unexpected failures are logged
with a stack trace.
"""

from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException

from . import db


class FitcoachError(Exception):
    status_code = 500

    def to_dict(self):
        return {"error": str(self)}


class Unauthenticated(FitcoachError):
    status_code = 401

    def __init__(self, message="Invalid token"):
        super().__init__(message)


class Forbidden(FitcoachError):
    status_code = 403

    def __init__(self, message="Access denied"):
        super().__init__(message)


class NotFound(FitcoachError):
    status_code = 404

    def __init__(self, entity):
        self.entity = entity
        super().__init__(f"{entity} not found")


class ValidationError(FitcoachError):
    """Carries one ``{"field", "message"}`` entry per offending field."""

    status_code = 400

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("; ".join(e["message"] for e in self.errors))

    @property
    def fields(self):
        return [e["field"] for e in self.errors]

    def to_dict(self):
        return {"errors": self.errors}

    @classmethod
    def single(cls, field, message):
        return cls([{"field": field, "message": message}])


class DuplicateKey(FitcoachError):
    status_code = 409

    def __init__(self, field, message):
        self.field = field
        super().__init__(message)

    def to_dict(self):
        return {"error": str(self), "field": self.field}


class Conflict(FitcoachError):
    status_code = 400


class InvalidCredentials(FitcoachError):
    status_code = 400

    def __init__(self, message="Invalid email or password"):
        super().__init__(message)


class Internal(FitcoachError):
    status_code = 500

    def to_dict(self):
        return {"error": "Server error", "details": str(self)}


def register_error_handlers(app):
    @app.errorhandler(FitcoachError)
    def handle_fitcoach_error(e):
        if e.status_code >= 500:
            db.session.rollback()
            current_app.logger.exception(f"Internal error: {e}")
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return jsonify({"error": e.name}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        db.session.rollback()
        current_app.logger.exception(f"Unhandled error: {e}")
        return jsonify({"error": "Server error", "details": str(e)}), 500
