"""Team roster endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, File, UploadFile
from sqlmodel import Session

from ...core import ValidationError, get_session
from ...models import Judge
from ...services.results import scoring_queue
from ...services.roster import ParseResult, parse_team_rows, read_csv_rows
from ...services.scores import score_to_dict
from ...services.teams import (
    delete_teams,
    import_teams,
    list_teams,
    scored_team_ids,
    team_to_dict,
)
from ..deps import get_current_judge

router = APIRouter(tags=["teams"])

MAX_CSV_BYTES = 5 * 1024 * 1024


def _import_response(
    session: Session, judge: Judge, parsed: ParseResult
) -> Dict[str, Any]:
    result = import_teams(session, judge, parsed.teams)
    return {
        "ok": True,
        "message": f"Successfully imported {len(result.inserted)} unique teams",
        "inserted": len(result.inserted),
        "teams": [team_to_dict(team) for team in result.inserted],
        "errors": [error.as_dict() for error in parsed.errors],
    }


@router.get("/teams")
def get_teams(
    session: Session = Depends(get_session),
    judge: Judge = Depends(get_current_judge),
):
    """List all teams, flagging those scored by any judge."""

    teams = list_teams(session)
    scored = scored_team_ids(session)
    return {"teams": [team_to_dict(team, has_scores=team.id in scored) for team in teams]}


@router.get("/teams/mine")
def get_my_teams(
    session: Session = Depends(get_session),
    judge: Judge = Depends(get_current_judge),
):
    """List teams imported by the current judge."""

    return {"teams": [team_to_dict(team) for team in list_teams(session, judge.id)]}


@router.delete("/teams")
def remove_teams(
    body: Dict[str, Any] = Body(...),
    session: Session = Depends(get_session),
    judge: Judge = Depends(get_current_judge),
):
    """Delete selected teams that have no scores."""

    team_ids = body.get("team_ids")
    if team_ids is None:
        team_ids = body.get("teamIds")
    if not isinstance(team_ids, list) or any(
        isinstance(team_id, bool) or not isinstance(team_id, int) for team_id in team_ids
    ):
        raise ValidationError("team_ids must be a list of integers", fields=["team_ids"])

    result = delete_teams(session, team_ids)
    return {
        "ok": True,
        "message": f"{len(result.deleted)} unscored team(s) deleted successfully",
        "deleted": result.deleted,
        "blocked": result.blocked,
    }


@router.post("/teams/import")
def import_team_rows(
    body: Dict[str, Any] = Body(...),
    session: Session = Depends(get_session),
    judge: Judge = Depends(get_current_judge),
):
    """Import teams from a JSON body of the form ``{"teams": [...]}``."""

    rows = body.get("teams")
    if not isinstance(rows, list):
        raise ValidationError("Invalid data format", fields=["teams"])
    return _import_response(session, judge, parse_team_rows(rows))


@router.get("/teams/scoring")
def get_scoring_queue(
    session: Session = Depends(get_session),
    judge: Judge = Depends(get_current_judge),
):
    """Teams in name order, each with the current judge's score or null."""

    return {
        "teams": [
            {
                **team_to_dict(team),
                "score": score_to_dict(score) if score else None,
            }
            for team, score in scoring_queue(session, judge)
        ]
    }


@router.post("/teams/import/csv")
def import_team_csv(
    file: UploadFile = File(...),
    session: Session = Depends(get_session),
    judge: Judge = Depends(get_current_judge),
):
    """Import teams from an uploaded CSV file."""

    filename = (file.filename or "").lower()
    if not (filename.endswith(".csv") or file.content_type in ("text/csv", "application/csv")):
        raise ValidationError("Only CSV files are allowed", fields=["file"])

    content = file.file.read(MAX_CSV_BYTES + 1)
    if len(content) > MAX_CSV_BYTES:
        raise ValidationError("File too large. Maximum size is 5MB.", fields=["file"])

    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ValidationError("CSV must be UTF-8 encoded", fields=["file"]) from exc

    rows = read_csv_rows(text)
    return _import_response(session, judge, parse_team_rows(rows))


__all__ = ["router"]
