"""Database model for judges."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class Judge(SQLModel, table=True):
    """Judge account linked to an identity provider subject."""

    id: Optional[int] = ORMField(default=None, primary_key=True)
    external_id: str = ORMField(index=True, unique=True, max_length=255)
    email: str = ORMField(default="", max_length=255)
    name: str = ORMField(max_length=255)
    created_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["Judge"]
