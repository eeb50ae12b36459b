"""
Application errors raised by the service layer.

Every error carries the HTTP status it maps to. The exception handlers in
app.main turn them into the `{success, message}` envelope.
"""

from typing import Any, Dict


class AppError(Exception):
    """Base exception for all labeling API errors"""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def to_response(self) -> Dict[str, Any]:
        return {"success": False, "message": self.message}


class BadRequestError(AppError):
    def __init__(self, message: str):
        super().__init__(message, 400)


class UnauthorizedError(AppError):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, 401)


class NotFoundError(AppError):
    def __init__(self, message: str):
        super().__init__(message, 404)


class ConflictError(AppError):
    def __init__(self, message: str):
        super().__init__(message, 409)


class InternalError(AppError):
    """Store or programming failure; message is generic and safe to surface"""

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, 500)
