"""Score submission endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends
from sqlmodel import Session

from ...core import ValidationError, get_session
from ...models import Judge, Team
from ...services.scores import get_score, list_scores, score_to_dict, upsert_score
from ...services.scoring import RUBRIC_FIELDS
from ..deps import get_current_judge

router = APIRouter(tags=["scores"])


@router.post("/scores")
def submit_score(
    body: Dict[str, Any] = Body(...),
    session: Session = Depends(get_session),
    judge: Judge = Depends(get_current_judge),
):
    """Create or update the current judge's score for a team."""

    team_id = body.get("team_id", body.get("teamId"))
    if isinstance(team_id, bool) or not isinstance(team_id, int):
        raise ValidationError("team_id must be an integer", fields=["team_id"])

    score = upsert_score(
        session,
        team_id=team_id,
        judge_id=judge.id,
        rubric={name: body.get(name) for name in RUBRIC_FIELDS},
        feedback=body.get("feedback"),
    )
    return {"ok": True, "score": score_to_dict(score)}


@router.get("/scores")
def get_scores(
    team_id: Optional[int] = None,
    session: Session = Depends(get_session),
    judge: Judge = Depends(get_current_judge),
):
    """List the current judge's scores, or fetch one with ``?team_id=``."""

    if team_id is not None:
        score = get_score(session, team_id, judge.id)
        if not score:
            return {"score": None}
        return {"score": score_to_dict(score, session.get(Team, score.team_id))}

    scores = list_scores(session, judge.id)
    return {
        "scores": [
            score_to_dict(score, session.get(Team, score.team_id)) for score in scores
        ]
    }


__all__ = ["router"]
