"""Leaderboard and progress endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlmodel import Session

from ...core import get_session
from ...models import Judge
from ...services.judges import judge_to_dict
from ...services.results import (
    build_leaderboard,
    judge_progress,
    leaderboard_frame,
    progress_to_dict,
    ranked_to_dict,
)
from ..deps import get_current_judge

router = APIRouter(tags=["results"])


@router.get("/results")
def get_results(
    session: Session = Depends(get_session),
    judge: Judge = Depends(get_current_judge),
):
    """Rank all teams by the current judge's scores."""

    leaderboard = build_leaderboard(session, judge)
    return {
        **progress_to_dict(leaderboard.progress),
        "rankings": [ranked_to_dict(entry) for entry in leaderboard.rankings],
    }


@router.get("/results.csv")
def download_results(
    session: Session = Depends(get_session),
    judge: Judge = Depends(get_current_judge),
):
    """Leaderboard as a CSV download."""

    frame = leaderboard_frame(build_leaderboard(session, judge))
    return Response(
        content=frame.to_csv(index=False),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="results.csv"'},
    )


@router.get("/dashboard")
def get_dashboard(
    session: Session = Depends(get_session),
    judge: Judge = Depends(get_current_judge),
):
    """Judging progress summary for the current judge."""

    return {
        "judge": judge_to_dict(judge),
        **progress_to_dict(judge_progress(session, judge)),
    }


__all__ = ["router"]
