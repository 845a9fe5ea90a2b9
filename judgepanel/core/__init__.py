"""Core configuration and infrastructure helpers."""

from .config import (
    ALLOWED_CORS_ORIGINS,
    BACKEND_URL,
    COOKIE_DOMAIN,
    COOKIE_SAMESITE,
    COOKIE_SECURE,
    DB_RESET,
    FRONTEND_ORIGIN,
    FRONTEND_ORIGINS,
    GOOGLE_CLIENT_ID,
    GOOGLE_CLIENT_SECRET,
    OAUTH_REDIRECT_URL,
    SECRET_KEY,
)
from .database import engine, get_session
from .errors import (
    AuthorizationError,
    ConflictError,
    JudgingError,
    NotFoundError,
    ValidationError,
)
from .time import isoformat, utcnow

__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "AuthorizationError",
    "BACKEND_URL",
    "COOKIE_DOMAIN",
    "COOKIE_SAMESITE",
    "COOKIE_SECURE",
    "ConflictError",
    "DB_RESET",
    "FRONTEND_ORIGIN",
    "FRONTEND_ORIGINS",
    "GOOGLE_CLIENT_ID",
    "GOOGLE_CLIENT_SECRET",
    "JudgingError",
    "NotFoundError",
    "OAUTH_REDIRECT_URL",
    "SECRET_KEY",
    "ValidationError",
    "engine",
    "get_session",
    "isoformat",
    "utcnow",
]
