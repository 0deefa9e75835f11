"""
Application errors raised out of the resolver Lambda.

AppSync turns a raised exception into a GraphQL field error carrying the
exception message, so every failure a caller should see is an ``AppError``
with a stable ``errorCode`` that clients can branch on.
"""

from typing import Any, Dict, Optional


class ErrorCode:
    """Values of ``AppError.error_code``."""

    NOT_FOUND = "NOT_FOUND"
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_PLAN = "INVALID_PLAN"
    RESOLVER_NOT_FOUND = "RESOLVER_NOT_FOUND"

    # Store or Stripe call failed
    DATABASE_ERROR = "DATABASE_ERROR"
    BILLING_ERROR = "BILLING_ERROR"


class AppError(Exception):
    """A failure reported to the GraphQL caller as ``message``."""

    def __init__(self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code
        self.message = message
        self.details = dict(details or {})

    def __repr__(self) -> str:
        return f"AppError({self.error_code!r}, {self.message!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Code, message and details flattened into one mapping for log lines."""
        payload = dict(self.details)
        payload.update(errorCode=self.error_code, message=self.message)
        return payload


def not_found(entity: str, **details: Any) -> AppError:
    """Build the not-found error for an entity, e.g. ``Subscription not found``."""
    return AppError(ErrorCode.NOT_FOUND, f"{entity} not found", details)


def invalid_input(message: str, details: Optional[Dict[str, Any]] = None) -> AppError:
    return AppError(ErrorCode.INVALID_INPUT, message, details)
