"""Domain errors raised by the service layer.

Each error carries the HTTP status it maps to so the application-level
exception handler can translate it without knowing every subclass.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class JudgingError(Exception):
    """Base class for client-visible judging failures."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


class AuthorizationError(JudgingError):
    """No authenticated judge identity is attached to the request."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class ValidationError(JudgingError):
    """Submitted data failed validation; nothing was persisted."""

    status_code = 400

    def __init__(self, message: str, fields: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.fields = list(fields or [])

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        if self.fields:
            payload["fields"] = self.fields
        return payload


class NotFoundError(JudgingError):
    """Referenced team or judge does not exist."""

    status_code = 404


class ConflictError(JudgingError):
    """Operation blocked by existing score records."""

    status_code = 409

    def __init__(self, message: str, blocking_scores: int) -> None:
        super().__init__(message)
        self.blocking_scores = blocking_scores

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["blocking_scores"] = self.blocking_scores
        return payload


__all__ = [
    "AuthorizationError",
    "ConflictError",
    "JudgingError",
    "NotFoundError",
    "ValidationError",
]
