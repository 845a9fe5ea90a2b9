"""Service layer helpers."""

from .judges import Identity, get_or_create_judge, judge_to_dict, require_judge
from .roster import parse_team_rows, read_csv_rows
from .scores import list_scores, score_to_dict, upsert_score
from .scoring import compute_aggregate, compute_progress, rank_teams, validate_rubric
from .teams import delete_teams, import_teams, list_teams, team_to_dict

__all__ = [
    "Identity",
    "compute_aggregate",
    "compute_progress",
    "delete_teams",
    "get_or_create_judge",
    "import_teams",
    "judge_to_dict",
    "list_scores",
    "list_teams",
    "parse_team_rows",
    "rank_teams",
    "read_csv_rows",
    "require_judge",
    "score_to_dict",
    "team_to_dict",
    "upsert_score",
    "validate_rubric",
]
