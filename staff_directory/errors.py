# errors.py
from flask import jsonify
from werkzeug.exceptions import HTTPException


class ApiError(Exception):
    """Base for failures that are reported to the client as JSON."""

    status_code = 400
    message = "Bad request"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_dict(self) -> dict:
        return {"message": self.message}


class Unauthenticated(ApiError):
    status_code = 401
    message = "No token provided"


class InvalidToken(ApiError):
    status_code = 401
    message = "Invalid token"


class InvalidCredentials(ApiError):
    status_code = 401
    message = "Invalid credentials"


class Forbidden(ApiError):
    status_code = 403
    message = "Access denied"


class MissingFields(ApiError):
    message = "Missing required fields"

    def __init__(self, fields):
        super().__init__()
        self.fields = list(fields)

    def to_dict(self) -> dict:
        return {"message": self.message, "fields": self.fields}


class ValidationError(ApiError):
    """Malformed values; ``field_errors`` maps each offending field to its message."""

    message = "Validation error"

    def __init__(self, field_errors: dict):
        super().__init__()
        self.field_errors = dict(field_errors)

    @property
    def errors(self) -> list:
        return list(self.field_errors.values())

    def to_dict(self) -> dict:
        return {"message": self.message, "errors": self.errors}


class DuplicateEmail(ApiError):
    message = "Email already exists"


class NotFound(ApiError):
    status_code = 404
    message = "Employee not found"


def render_api_error(err: ApiError):
    return jsonify(err.to_dict()), err.status_code


def render_http_error(err: HTTPException):
    return jsonify({"message": err.description}), err.code


def register_error_handlers(app):
    app.register_error_handler(ApiError, render_api_error)
    app.register_error_handler(HTTPException, render_http_error)
