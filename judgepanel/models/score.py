"""Database model for rubric scores."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class Score(SQLModel, table=True):
    """One judge's rubric for one team."""

    __table_args__ = (UniqueConstraint("team_id", "judge_id", name="uq_score_team_judge"),)

    id: Optional[int] = ORMField(default=None, primary_key=True)
    team_id: int = ORMField(foreign_key="team.id", index=True)
    judge_id: int = ORMField(foreign_key="judge.id", index=True)
    innovation: int
    technical: int
    presentation: int
    impact: int
    overall: int
    feedback: Optional[str] = None
    # Reserved for locking a submission; nothing reads or writes it yet.
    is_finalized: bool = False
    created_at: datetime = ORMField(default_factory=utcnow)
    updated_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["Score"]
