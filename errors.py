# errors.py
"""
Application error taxonomy.

Services raise these for expected failures; the handlers registered in
main.py turn them into HTTP responses. Anything that is not an AppError is
treated as an internal error.
"""
from typing import Optional


class AppError(Exception):
     """Base class for errors with a known HTTP status."""

     status_code: int = 500
     default_detail: str = "Internal server error"

     def __init__(self, detail: Optional[str] = None):
          self.detail = detail or self.default_detail
          super().__init__(self.detail)


class ValidationFailed(AppError):
     """Malformed or missing fields."""
     status_code = 400
     default_detail = "Invalid request data"

     def __init__(self, detail: Optional[str] = None, errors: Optional[list] = None):
          super().__init__(detail)
          self.errors = errors or []


class InvalidIdentifier(AppError):
     """An identifier that cannot name any record (wrong format)."""
     status_code = 400
     default_detail = "Invalid identifier format"


class DuplicateKeyError(AppError):
     """Unique constraint violated."""
     status_code = 409

     def __init__(self, field: str):
          self.field = field
          super().__init__(f"A record with this {field} already exists")


class ConflictError(AppError):
     """Referential-integrity guard refused the operation."""
     status_code = 409
     default_detail = "Operation conflicts with existing data"


class UnauthorizedError(AppError):
     status_code = 401
     default_detail = "Invalid or expired token"


class InvalidCredentialsError(UnauthorizedError):
     default_detail = "Invalid credentials"


class ForbiddenError(AppError):
     status_code = 403
     default_detail = "You do not have permission to perform this action"


class NotFoundError(AppError):
     status_code = 404
     default_detail = "Resource not found"


class ConfigurationError(RuntimeError):
     """Server-side misconfiguration; always surfaces as a 500."""
