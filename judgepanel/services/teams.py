"""Helpers for team domain objects."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set

from loguru import logger
from sqlmodel import Session, func, select

from ..core.errors import ConflictError, NotFoundError, ValidationError
from ..core.time import isoformat
from ..models import Judge, Score, Team
from .roster import TeamCandidate


def members_from_team(team: Team) -> List[Dict[str, str]]:
    """Extract the member list from stored JSON."""

    return json.loads(team.members_json or "[]")


def team_to_dict(team: Team, *, has_scores: Optional[bool] = None) -> Dict[str, Any]:
    """Serialise a team model to API-friendly dict."""

    payload: Dict[str, Any] = {
        "id": team.id,
        "name": team.name,
        "description": team.description or "",
        "members": members_from_team(team),
        "judge_id": team.judge_id,
        "created_at": isoformat(team.created_at),
    }
    if has_scores is not None:
        payload["has_scores"] = has_scores
    return payload


def scored_team_ids(session: Session, team_ids: Optional[Iterable[int]] = None) -> Set[int]:
    """Ids of teams with at least one score from any judge."""

    query = select(Score.team_id)
    if team_ids is not None:
        query = query.where(Score.team_id.in_(list(team_ids)))
    return set(session.exec(query).all())


def list_teams(session: Session, judge_id: Optional[int] = None) -> List[Team]:
    """Teams ordered by name, optionally only those imported by one judge."""

    query = select(Team).order_by(Team.name, Team.id)
    if judge_id is not None:
        query = query.where(Team.judge_id == judge_id)
    return list(session.exec(query).all())


def count_teams(session: Session) -> int:
    return session.exec(select(func.count(Team.id))).one()


@dataclass
class ImportResult:
    inserted: List[Team] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


def import_teams(
    session: Session, judge: Judge, candidates: Sequence[TeamCandidate]
) -> ImportResult:
    """Insert candidates whose names the judge does not already own.

    Name matching is exact and case-sensitive. Duplicates, whether against
    stored teams or earlier rows of the same batch, are skipped silently.
    """

    existing = set(
        session.exec(select(Team.name).where(Team.judge_id == judge.id)).all()
    )
    result = ImportResult()
    for candidate in candidates:
        if candidate.name in existing:
            logger.info("Skipping duplicate team: {}", candidate.name)
            result.skipped.append(candidate.name)
            continue
        team = Team(
            name=candidate.name,
            description=candidate.description or "",
            members_json=json.dumps([member.as_dict() for member in candidate.members]),
            judge_id=judge.id,
        )
        session.add(team)
        existing.add(candidate.name)
        result.inserted.append(team)

    if result.inserted:
        session.commit()
        for team in result.inserted:
            session.refresh(team)
    logger.info(
        "Judge {} imported {} team(s), skipped {}",
        judge.id,
        len(result.inserted),
        len(result.skipped),
    )
    return result


@dataclass
class DeleteResult:
    deleted: List[int] = field(default_factory=list)
    blocked: List[int] = field(default_factory=list)


def delete_teams(session: Session, team_ids: Sequence[int]) -> DeleteResult:
    """Delete the unscored teams among ``team_ids``.

    Raises ``ConflictError`` when every selected team has scores; a mixed
    selection deletes the unscored ones and reports the rest as blocked.
    """

    if not team_ids:
        raise ValidationError("No teams selected for deletion", fields=["team_ids"])
    wanted = list(dict.fromkeys(team_ids))

    teams = session.exec(select(Team).where(Team.id.in_(wanted))).all()
    found = {team.id for team in teams}
    missing = [team_id for team_id in wanted if team_id not in found]
    if missing:
        raise NotFoundError(f"Team(s) not found: {', '.join(str(i) for i in missing)}")

    blocked = scored_team_ids(session, wanted)
    deletable = [team for team in teams if team.id not in blocked]
    if not deletable:
        blocking_scores = session.exec(
            select(func.count(Score.id)).where(Score.team_id.in_(wanted))
        ).one()
        raise ConflictError(
            "Selected teams have scores and cannot be deleted",
            blocking_scores=blocking_scores,
        )

    deleted_ids = [team.id for team in deletable]
    for team in deletable:
        session.delete(team)
    session.commit()

    result = DeleteResult(
        deleted=deleted_ids,
        blocked=[team_id for team_id in wanted if team_id in blocked],
    )
    logger.info("Deleted team(s) {}; blocked {}", result.deleted, result.blocked)
    return result


__all__ = [
    "DeleteResult",
    "ImportResult",
    "count_teams",
    "delete_teams",
    "import_teams",
    "list_teams",
    "members_from_team",
    "scored_team_ids",
    "team_to_dict",
]
