"""Rubric validation, aggregation, ranking and progress helpers.

Everything here is a pure function over plain values so it can be used from
the routers, the CSV export and the tests without a database.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..core.errors import ValidationError

RUBRIC_FIELDS: Tuple[str, ...] = (
    "innovation",
    "technical",
    "presentation",
    "impact",
    "overall",
)
RUBRIC_MIN = 1
RUBRIC_MAX = 10


@dataclass(frozen=True)
class Rubric:
    """Validated rubric values for one (team, judge) pair."""

    innovation: int
    technical: int
    presentation: int
    impact: int
    overall: int

    def as_dict(self) -> Dict[str, int]:
        return {name: getattr(self, name) for name in RUBRIC_FIELDS}


def _is_rubric_value(value: Any) -> bool:
    # bool is an int subclass; True must not pass as 1.
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return RUBRIC_MIN <= value <= RUBRIC_MAX


def validate_rubric(values: Union[Mapping[str, Any], Rubric]) -> Rubric:
    """Return a ``Rubric`` or raise one ``ValidationError`` naming every bad field."""

    if isinstance(values, Rubric):
        values = values.as_dict()
    if not isinstance(values, Mapping):
        raise ValidationError("Invalid score values", fields=list(RUBRIC_FIELDS))

    invalid = [name for name in RUBRIC_FIELDS if not _is_rubric_value(values.get(name))]
    if invalid:
        raise ValidationError(
            f"Invalid score values: each of {', '.join(invalid)} must be an integer "
            f"from {RUBRIC_MIN} to {RUBRIC_MAX}",
            fields=invalid,
        )
    return Rubric(**{name: values[name] for name in RUBRIC_FIELDS})


# Aggregation ----------------------------------------------------------------


class _Unscored:
    """Marker for a team without a score record."""

    _instance: Optional["_Unscored"] = None

    def __new__(cls) -> "_Unscored":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSCORED"


UNSCORED = _Unscored()


@dataclass(frozen=True)
class Aggregate:
    """Mean of the five rubric fields of one score record."""

    average: float


AggregateResult = Union[Aggregate, _Unscored]


def compute_aggregate(record: Optional[Any]) -> AggregateResult:
    """Average a score record's rubric fields.

    ``record`` is anything exposing the rubric fields as attributes (a
    ``Score`` row or a ``Rubric``). ``None`` yields ``UNSCORED`` rather than a
    zero average so that missing scores never compete with real ones.
    """

    if record is None:
        return UNSCORED
    total = sum(getattr(record, name) for name in RUBRIC_FIELDS)
    return Aggregate(average=total / len(RUBRIC_FIELDS))


def format_average(average: Optional[float]) -> Optional[str]:
    """One-decimal display form of an average."""

    if average is None:
        return None
    return f"{average:.1f}"


# Ranking --------------------------------------------------------------------


@dataclass(frozen=True)
class RankedTeam:
    team: Any
    rank: Optional[int]
    average: Optional[float]

    @property
    def is_scored(self) -> bool:
        return self.rank is not None


def rank_teams(entries: Iterable[Tuple[Any, AggregateResult]]) -> List[RankedTeam]:
    """Order teams by descending average, unscored last.

    ``sorted`` is stable, so teams with equal averages keep their input order.
    Scored teams get contiguous ranks starting at 1; unscored teams get
    ``rank=None``.
    """

    scored: List[Tuple[Any, float]] = []
    unscored: List[Any] = []
    for team, aggregate in entries:
        if isinstance(aggregate, Aggregate):
            scored.append((team, aggregate.average))
        else:
            unscored.append(team)

    ordered = sorted(scored, key=lambda pair: pair[1], reverse=True)
    ranked = [
        RankedTeam(team=team, rank=position, average=average)
        for position, (team, average) in enumerate(ordered, start=1)
    ]
    ranked.extend(RankedTeam(team=team, rank=None, average=None) for team in unscored)
    return ranked


# Progress -------------------------------------------------------------------


@dataclass(frozen=True)
class Progress:
    total: int
    scored: int
    pending: int
    completion_pct: int


def compute_progress(total: int, scored: int) -> Progress:
    """Pending count and completion percentage, 0% when there are no teams."""

    pending = total - scored
    if total <= 0:
        completion_pct = 0
    else:
        # Half-up rounding; round() would send 12.5 to 12.
        completion_pct = int(math.floor(scored / total * 100 + 0.5))
    return Progress(
        total=total, scored=scored, pending=pending, completion_pct=completion_pct
    )


__all__ = [
    "Aggregate",
    "AggregateResult",
    "Progress",
    "RUBRIC_FIELDS",
    "RUBRIC_MAX",
    "RUBRIC_MIN",
    "RankedTeam",
    "Rubric",
    "UNSCORED",
    "compute_aggregate",
    "compute_progress",
    "format_average",
    "rank_teams",
    "validate_rubric",
]
