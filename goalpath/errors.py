## API error types, rendered as {"error": ...} JSON by the handlers in main
from typing import Any


class ApiError(Exception):
    status_code = 500

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details


class BadRequest(ApiError):
    status_code = 400


class NotAuthenticated(ApiError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized", details: Any = None):
        super().__init__(message, details)


class Forbidden(ApiError):
    status_code = 403

    def __init__(self, message: str = "Forbidden", details: Any = None):
        super().__init__(message, details)


class NotFound(ApiError):
    status_code = 404


class Conflict(ApiError):
    status_code = 409


class RateLimited(ApiError):
    status_code = 429

    def __init__(self, message: str = "Rate limit exceeded", details: Any = None):
        super().__init__(message, details)
