# synccircle/utils/api_errors.py

from enum import Enum
from flask import jsonify
from typing import Any, Dict, List, Optional


class ErrorType(Enum):
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    VALIDATION = "validation_error"
    INTERNAL = "internal_error"


STATUS_CODES = {
    ErrorType.UNAUTHORIZED: 401,
    ErrorType.FORBIDDEN: 403,
    ErrorType.NOT_FOUND: 404,
    ErrorType.VALIDATION: 400,
    ErrorType.INTERNAL: 500,
}


class ApiError:
    """Error returned by services in place of a result.

    Services return ``(result, error)`` tuples; views turn a non-None
    error into a JSON body with the matching status code.
    """

    def __init__(self, error_type: ErrorType, message: str, details: Optional[List[str]] = None):
        self.error_type = error_type
        self.message = message
        self.details = details or []

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.error_type]

    def to_dict(self) -> Dict[str, Any]:
        body = {
            'error': self.message,
            'error_type': self.error_type.value,
        }
        if self.details:
            body['details'] = self.details
        return body

    def __repr__(self):
        return f'<ApiError {self.error_type.value}: {self.message}>'

    @classmethod
    def not_found(cls, message: str) -> 'ApiError':
        return cls(ErrorType.NOT_FOUND, message)

    @classmethod
    def forbidden(cls, message: str) -> 'ApiError':
        return cls(ErrorType.FORBIDDEN, message)

    @classmethod
    def unauthorized(cls, message: str) -> 'ApiError':
        return cls(ErrorType.UNAUTHORIZED, message)

    @classmethod
    def validation(cls, message: str, details: Optional[List[str]] = None) -> 'ApiError':
        return cls(ErrorType.VALIDATION, message, details)

    @classmethod
    def internal(cls, message: str = "Internal server error") -> 'ApiError':
        return cls(ErrorType.INTERNAL, message)


def error_response(error: ApiError):
    """Build the ``(json, status)`` pair a view returns for an error."""
    return jsonify(error.to_dict()), error.status_code
