"""
errors.py — Domain Error Taxonomy

Purpose:
- Define the exceptions raised by services and the access guard.
- Each error carries the HTTP status and the stable `error` code that the
  exception handlers in main.py put into the JSON body.

This module does NOT:
- Build HTTP responses (see main.py).
- Log anything. Logging happens where the error is raised or handled.
"""

from typing import Optional


class RecipeAppError(Exception):
    """
    Base class for every error surfaced to API clients.

    Attributes:
        status_code: HTTP status used at the request boundary.
        error: Stable machine-readable code placed in the `error` field.
        message: Human-readable, client-safe message.
    """

    status_code: int = 500
    error: str = "InternalError"
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.error, "message": self.message}


class ValidationError(RecipeAppError):
    """Missing, blank or duplicate required fields."""

    status_code = 400
    error = "ValidationError"
    default_message = "Invalid request"


class Unauthenticated(RecipeAppError):
    """Missing, malformed, expired or badly signed credentials."""

    status_code = 401
    error = "Unauthenticated"
    default_message = "Authentication required"


class Forbidden(RecipeAppError):
    """Caller is authenticated but does not own the target resource."""

    status_code = 403
    error = "Forbidden"
    default_message = "Unauthorized"


class NotFound(RecipeAppError):
    status_code = 404
    error = "NotFound"
    default_message = "Resource not found"


class StoreError(RecipeAppError):
    """A write against the store failed for a reason other than a known conflict."""

    status_code = 400
    error = "StoreError"
    default_message = "Could not complete the request"


class InternalError(RecipeAppError):
    pass


class InvalidTokenError(Exception):
    """
    Raised by TokenService.verify().

    Kept outside the RecipeAppError tree: the access guard decides how a bad
    token is reported to the client.
    """
