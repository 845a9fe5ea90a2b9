"""Score record store: upsert and lookups keyed by (team, judge)."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..core.errors import NotFoundError, ValidationError
from ..core.time import isoformat, utcnow
from ..models import Judge, Score, Team
from .scoring import Rubric, compute_aggregate, format_average, validate_rubric


def _validate_feedback(feedback: Any) -> Optional[str]:
    if feedback is None:
        return None
    if not isinstance(feedback, str):
        raise ValidationError("Feedback must be text", fields=["feedback"])
    return feedback


def get_score(session: Session, team_id: int, judge_id: int) -> Optional[Score]:
    return session.exec(
        select(Score).where(Score.team_id == team_id, Score.judge_id == judge_id)
    ).first()


def _apply(score: Score, rubric: Rubric, feedback: Optional[str]) -> None:
    for name, value in rubric.as_dict().items():
        setattr(score, name, value)
    score.feedback = feedback
    score.updated_at = utcnow()


def upsert_score(
    session: Session,
    *,
    team_id: int,
    judge_id: int,
    rubric: Union[Mapping[str, Any], Rubric],
    feedback: Any = None,
) -> Score:
    """Create or overwrite the score for ``(team_id, judge_id)``.

    Validation happens before any read or write, so a rejected submission
    leaves the stored record untouched.
    """

    values = validate_rubric(rubric)
    feedback = _validate_feedback(feedback)

    if session.get(Team, team_id) is None:
        raise NotFoundError("Team not found")
    if session.get(Judge, judge_id) is None:
        raise NotFoundError("Judge not found")

    existing = get_score(session, team_id, judge_id)
    if existing:
        _apply(existing, values, feedback)
        session.add(existing)
        session.commit()
        session.refresh(existing)
        logger.info("Updated score {} for team {} by judge {}", existing.id, team_id, judge_id)
        return existing

    score = Score(team_id=team_id, judge_id=judge_id, feedback=feedback, **values.as_dict())
    session.add(score)
    try:
        session.commit()
    except IntegrityError:
        # Another request inserted the pair first; last write wins.
        session.rollback()
        existing = get_score(session, team_id, judge_id)
        if existing is None:
            raise
        _apply(existing, values, feedback)
        session.add(existing)
        session.commit()
        session.refresh(existing)
        logger.warning(
            "Concurrent insert for team {} by judge {}; applied as update", team_id, judge_id
        )
        return existing

    session.refresh(score)
    logger.info("Created score {} for team {} by judge {}", score.id, team_id, judge_id)
    return score


def list_scores(session: Session, judge_id: int) -> List[Score]:
    return list(
        session.exec(
            select(Score).where(Score.judge_id == judge_id).order_by(Score.id)
        ).all()
    )


def scored_team_count(session: Session, judge_id: int) -> int:
    """Distinct teams scored by one judge."""

    team_ids = session.exec(select(Score.team_id).where(Score.judge_id == judge_id)).all()
    return len(set(team_ids))


def score_to_dict(score: Score, team: Optional[Team] = None) -> Dict[str, Any]:
    aggregate = compute_aggregate(score)
    payload: Dict[str, Any] = {
        "id": score.id,
        "team_id": score.team_id,
        "judge_id": score.judge_id,
        "innovation": score.innovation,
        "technical": score.technical,
        "presentation": score.presentation,
        "impact": score.impact,
        "overall": score.overall,
        "feedback": score.feedback,
        "is_finalized": score.is_finalized,
        "average": aggregate.average,
        "average_display": format_average(aggregate.average),
        "created_at": isoformat(score.created_at),
        "updated_at": isoformat(score.updated_at),
    }
    if team is not None:
        payload["team"] = {"id": team.id, "name": team.name}
    return payload


__all__ = [
    "get_score",
    "list_scores",
    "score_to_dict",
    "scored_team_count",
    "upsert_score",
]
