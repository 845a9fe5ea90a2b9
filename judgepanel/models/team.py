"""Database model for hackathon teams."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class Team(SQLModel, table=True):
    """Team imported by a judge, with members stored as JSON."""

    id: Optional[int] = ORMField(default=None, primary_key=True)
    name: str = ORMField(index=True, max_length=255)
    description: Optional[str] = None
    # [{"name": "Ada", "role": "Backend"}, ...]
    members_json: str = "[]"
    judge_id: Optional[int] = ORMField(default=None, foreign_key="judge.id", index=True)
    created_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["Team"]
