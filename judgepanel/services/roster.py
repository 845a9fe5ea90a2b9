"""Team roster ingestion.

Raw rows come either from a JSON import body or from an uploaded CSV. Both
are normalised here into ``TeamCandidate`` objects before anything touches the
database; rows that cannot be read are reported back instead of coerced.

Accepted columns:

* ``team_name`` or ``name`` (required)
* ``description`` or ``project_description``
* ``member1_name``/``member1_role`` through ``member5_name``/``member5_role``
* ``members``: a list of ``{"name", "role"}`` objects, or a comma-separated
  string of names (used only when no numbered member columns are present)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from io import StringIO
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd

from ..core.errors import ValidationError

MAX_NUMBERED_MEMBERS = 5
MAX_NAME_LENGTH = 255


@dataclass(frozen=True)
class MemberCandidate:
    name: str
    role: str = ""

    def as_dict(self) -> Dict[str, str]:
        return {"name": self.name, "role": self.role}


@dataclass(frozen=True)
class TeamCandidate:
    name: str
    description: Optional[str] = None
    members: List[MemberCandidate] = field(default_factory=list)


@dataclass(frozen=True)
class RowError:
    row: int
    message: str

    def as_dict(self) -> Dict[str, Any]:
        return {"row": self.row, "message": self.message}


@dataclass
class ParseResult:
    teams: List[TeamCandidate] = field(default_factory=list)
    errors: List[RowError] = field(default_factory=list)


class _RowProblem(Exception):
    pass


def _text(row: Mapping[str, Any], key: str) -> str:
    value = row.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _RowProblem(f"Column '{key}' must be text")
    return value.strip()


def _first_text(row: Mapping[str, Any], *keys: str) -> str:
    for key in keys:
        value = _text(row, key)
        if value:
            return value
    return ""


def _member_from_item(item: Any) -> Optional[MemberCandidate]:
    if isinstance(item, str):
        name = item.strip()
        return MemberCandidate(name=name) if name else None
    if isinstance(item, Mapping):
        name = _text(item, "name")
        if not name:
            raise _RowProblem("Member entries need a name")
        return MemberCandidate(name=name, role=_text(item, "role"))
    raise _RowProblem("Members must be names or {name, role} objects")


def _parse_members(row: Mapping[str, Any]) -> List[MemberCandidate]:
    members: List[MemberCandidate] = []
    for idx in range(1, MAX_NUMBERED_MEMBERS + 1):
        name = _text(row, f"member{idx}_name")
        if name:
            members.append(MemberCandidate(name=name, role=_text(row, f"member{idx}_role")))
    if members:
        return members

    raw = row.get("members")
    if raw is None:
        return members
    if isinstance(raw, str):
        items: Sequence[Any] = raw.split(",")
    elif isinstance(raw, list):
        items = raw
    else:
        raise _RowProblem("Column 'members' must be a list or comma-separated text")

    for item in items:
        member = _member_from_item(item)
        if member:
            members.append(member)
    return members


def parse_team_row(row: Any) -> TeamCandidate:
    """Normalise one raw row, raising ``ValueError`` when it is unusable."""

    if not isinstance(row, Mapping):
        raise ValueError("Row must be an object")
    try:
        name = _first_text(row, "team_name", "name")
        if not name:
            raise _RowProblem("Missing team name (team_name or name)")
        if len(name) > MAX_NAME_LENGTH:
            raise _RowProblem(f"Team name longer than {MAX_NAME_LENGTH} characters")
        description = _first_text(row, "description", "project_description") or None
        members = _parse_members(row)
    except _RowProblem as exc:
        raise ValueError(str(exc)) from exc
    return TeamCandidate(name=name, description=description, members=members)


def parse_team_rows(rows: Sequence[Any]) -> ParseResult:
    """Parse every row, collecting candidates and 1-based row errors."""

    result = ParseResult()
    for index, row in enumerate(rows, start=1):
        try:
            result.teams.append(parse_team_row(row))
        except ValueError as exc:
            result.errors.append(RowError(row=index, message=str(exc)))
    return result


def read_csv_rows(text: str) -> List[Dict[str, Any]]:
    """Read CSV text into dict rows with every cell as a string."""

    if not text.strip():
        raise ValidationError("CSV file is empty")
    try:
        frame = pd.read_csv(
            StringIO(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise ValidationError(f"Could not read CSV: {exc}") from exc

    frame.columns = [str(column).strip() for column in frame.columns]
    if not {"team_name", "name"} & set(frame.columns):
        raise ValidationError(
            'CSV must contain either "team_name" or "name" column',
            fields=["team_name", "name"],
        )
    return frame.to_dict(orient="records")


__all__ = [
    "MemberCandidate",
    "ParseResult",
    "RowError",
    "TeamCandidate",
    "parse_team_row",
    "parse_team_rows",
    "read_csv_rows",
]
