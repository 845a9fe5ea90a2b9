"""Leaderboard and progress assembly for one judge."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
from sqlmodel import Session

from ..models import Judge, Score, Team
from .scores import list_scores, scored_team_count
from .scoring import (
    Progress,
    RankedTeam,
    compute_aggregate,
    compute_progress,
    format_average,
    rank_teams,
)
from .teams import count_teams, list_teams

CSV_COLUMNS = ["rank", "team_id", "team_name", "average", "status"]


@dataclass
class Leaderboard:
    rankings: List[RankedTeam]
    progress: Progress


def judge_progress(session: Session, judge: Judge) -> Progress:
    return compute_progress(count_teams(session), scored_team_count(session, judge.id))


def scoring_queue(session: Session, judge: Judge) -> List[Tuple[Team, Optional[Score]]]:
    """Every team in name order paired with the judge's own score, if any."""

    by_team = {score.team_id: score for score in list_scores(session, judge.id)}
    return [(team, by_team.get(team.id)) for team in list_teams(session)]


def build_leaderboard(session: Session, judge: Judge) -> Leaderboard:
    """Rank every team by the judge's own score.

    Teams are fed to the ranking in name order, so equal averages read
    alphabetically.
    """

    queue = scoring_queue(session, judge)
    rankings = rank_teams([(team, compute_aggregate(score)) for team, score in queue])
    scored = sum(1 for entry in rankings if entry.is_scored)
    return Leaderboard(rankings=rankings, progress=compute_progress(len(queue), scored))


def progress_to_dict(progress: Progress) -> Dict[str, int]:
    return {
        "total_teams": progress.total,
        "scored_teams": progress.scored,
        "pending_teams": progress.pending,
        "completion_pct": progress.completion_pct,
    }


def ranked_to_dict(entry: RankedTeam) -> Dict[str, Any]:
    return {
        "rank": entry.rank,
        "team": {"id": entry.team.id, "name": entry.team.name},
        "average": entry.average,
        "average_display": format_average(entry.average),
        "scored": entry.is_scored,
    }


def leaderboard_frame(leaderboard: Leaderboard) -> pd.DataFrame:
    """Tabular view of the rankings for CSV export."""

    rows = [
        {
            "rank": entry.rank if entry.is_scored else "",
            "team_id": entry.team.id,
            "team_name": entry.team.name,
            "average": format_average(entry.average) or "",
            "status": "scored" if entry.is_scored else "unscored",
        }
        for entry in leaderboard.rankings
    ]
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


__all__ = [
    "CSV_COLUMNS",
    "Leaderboard",
    "build_leaderboard",
    "judge_progress",
    "leaderboard_frame",
    "progress_to_dict",
    "ranked_to_dict",
    "scoring_queue",
]
