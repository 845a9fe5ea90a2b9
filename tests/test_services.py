"""Tests for the database-backed services."""

from __future__ import annotations

import json

import pytest
from sqlmodel import Session, select

from judgepanel.core.errors import ConflictError, NotFoundError, ValidationError
from judgepanel.models import Judge, Score, Team
from judgepanel.services.judges import Identity, get_or_create_judge, require_judge
from judgepanel.services.results import build_leaderboard, judge_progress, leaderboard_frame
from judgepanel.services.roster import TeamCandidate, MemberCandidate
from judgepanel.services.scores import get_score, list_scores, scored_team_count, upsert_score
from judgepanel.services.teams import delete_teams, import_teams, list_teams

NINES = {"innovation": 9, "technical": 9, "presentation": 9, "impact": 9, "overall": 9}
SEVENS = {"innovation": 7, "technical": 7, "presentation": 7, "impact": 7, "overall": 7}


def _scores_for(session: Session, team_id: int, judge_id: int) -> list[Score]:
    return list(
        session.exec(
            select(Score).where(Score.team_id == team_id, Score.judge_id == judge_id)
        ).all()
    )


class TestJudges:
    def test_creates_judge_on_first_use(self, session: Session) -> None:
        judge = get_or_create_judge(
            session, Identity(external_id="sub-1", name=None, email="kim@example.com")
        )
        assert judge.id is not None
        assert judge.name == "kim@example.com"
        again = get_or_create_judge(session, Identity(external_id="sub-1"))
        assert again.id == judge.id
        assert len(session.exec(select(Judge)).all()) == 1

    def test_falls_back_to_generic_name(self, session: Session) -> None:
        judge = get_or_create_judge(session, Identity(external_id="sub-2"))
        assert judge.name == "Judge"

    def test_require_judge_missing(self, session: Session) -> None:
        with pytest.raises(NotFoundError):
            require_judge(session, Identity(external_id="nobody"))


class TestUpsertScore:
    def test_creates_then_updates_single_record(
        self, session: Session, judge: Judge, make_team
    ) -> None:
        team = make_team("Alpha", judge)
        first = upsert_score(session, team_id=team.id, judge_id=judge.id, rubric=NINES)
        first_updated = first.updated_at
        second = upsert_score(
            session,
            team_id=team.id,
            judge_id=judge.id,
            rubric={**SEVENS, "overall": 10},
            feedback="Great demo",
        )

        records = _scores_for(session, team.id, judge.id)
        assert len(records) == 1
        assert second.id == first.id
        stored = records[0]
        assert (stored.innovation, stored.overall) == (7, 10)
        assert stored.feedback == "Great demo"
        assert stored.updated_at >= first_updated
        assert stored.is_finalized is False

    def test_invalid_submission_leaves_prior_state(
        self, session: Session, judge: Judge, make_team
    ) -> None:
        team = make_team("Alpha", judge)
        upsert_score(session, team_id=team.id, judge_id=judge.id, rubric=NINES, feedback="ok")

        with pytest.raises(ValidationError):
            upsert_score(
                session,
                team_id=team.id,
                judge_id=judge.id,
                rubric={**SEVENS, "impact": 11},
                feedback="changed",
            )

        session.expire_all()
        stored = get_score(session, team.id, judge.id)
        assert stored.impact == 9
        assert stored.innovation == 9
        assert stored.feedback == "ok"

    def test_invalid_first_submission_creates_nothing(
        self, session: Session, judge: Judge, make_team
    ) -> None:
        team = make_team("Alpha", judge)
        with pytest.raises(ValidationError):
            upsert_score(
                session, team_id=team.id, judge_id=judge.id, rubric={**NINES, "technical": 0}
            )
        assert _scores_for(session, team.id, judge.id) == []

    def test_unknown_team(self, session: Session, judge: Judge) -> None:
        with pytest.raises(NotFoundError):
            upsert_score(session, team_id=999, judge_id=judge.id, rubric=NINES)

    def test_non_text_feedback(self, session: Session, judge: Judge, make_team) -> None:
        team = make_team("Alpha", judge)
        with pytest.raises(ValidationError):
            upsert_score(
                session, team_id=team.id, judge_id=judge.id, rubric=NINES, feedback=5
            )

    def test_judges_score_independently(
        self, session: Session, judge: Judge, other_judge: Judge, make_team
    ) -> None:
        team = make_team("Alpha", judge)
        upsert_score(session, team_id=team.id, judge_id=judge.id, rubric=NINES)
        upsert_score(session, team_id=team.id, judge_id=other_judge.id, rubric=SEVENS)
        assert len(list_scores(session, judge.id)) == 1
        assert list_scores(session, other_judge.id)[0].overall == 7
        assert scored_team_count(session, judge.id) == 1

    def test_conflicting_insert_is_applied_as_update(
        self, session: Session, judge: Judge, make_team, monkeypatch
    ) -> None:
        team = make_team("Alpha", judge)
        first = upsert_score(session, team_id=team.id, judge_id=judge.id, rubric=NINES)

        calls = []

        def stale_lookup(session: Session, team_id: int, judge_id: int):
            # The first lookup misses, as if a concurrent request had not committed yet.
            calls.append(team_id)
            if len(calls) == 1:
                return None
            return get_score(session, team_id, judge_id)

        monkeypatch.setattr("judgepanel.services.scores.get_score", stale_lookup)
        second = upsert_score(
            session,
            team_id=team.id,
            judge_id=judge.id,
            rubric=SEVENS,
            feedback="second write",
        )

        assert len(calls) == 2
        assert second.id == first.id
        session.expire_all()
        records = _scores_for(session, team.id, judge.id)
        assert len(records) == 1
        assert (records[0].innovation, records[0].overall) == (7, 7)
        assert records[0].feedback == "second write"


class TestImportTeams:
    def test_skips_duplicate_names_in_batch(self, session: Session, judge: Judge) -> None:
        result = import_teams(
            session,
            judge,
            [
                TeamCandidate("Alpha", "first", [MemberCandidate("Ada", "Lead")]),
                TeamCandidate("Alpha", "second"),
                TeamCandidate("Beta"),
            ],
        )
        assert [team.name for team in result.inserted] == ["Alpha", "Beta"]
        assert result.skipped == ["Alpha"]

        stored = list_teams(session, judge.id)
        assert [team.name for team in stored] == ["Alpha", "Beta"]
        assert stored[0].description == "first"
        assert json.loads(stored[0].members_json) == [{"name": "Ada", "role": "Lead"}]

    def test_skips_names_the_judge_already_owns(
        self, session: Session, judge: Judge, other_judge: Judge, make_team
    ) -> None:
        make_team("Alpha", judge)
        result = import_teams(
            session, judge, [TeamCandidate("Alpha"), TeamCandidate("alpha")]
        )
        assert [team.name for team in result.inserted] == ["alpha"]

        other = import_teams(session, other_judge, [TeamCandidate("Alpha")])
        assert len(other.inserted) == 1


class TestDeleteTeams:
    def test_scored_team_is_protected(
        self, session: Session, judge: Judge, other_judge: Judge, make_team
    ) -> None:
        team = make_team("Alpha", judge)
        upsert_score(session, team_id=team.id, judge_id=other_judge.id, rubric=NINES)

        with pytest.raises(ConflictError) as excinfo:
            delete_teams(session, [team.id])
        assert excinfo.value.blocking_scores == 1
        assert session.get(Team, team.id) is not None

    def test_unscored_team_is_deleted(self, session: Session, judge: Judge, make_team) -> None:
        team_id = make_team("Alpha", judge).id
        keep_id = make_team("Beta", judge).id

        result = delete_teams(session, [team_id])

        assert result.deleted == [team_id]
        assert result.blocked == []
        assert [t.id for t in list_teams(session)] == [keep_id]

    def test_mixed_selection_deletes_only_unscored(
        self, session: Session, judge: Judge, make_team
    ) -> None:
        scored_id = make_team("Alpha", judge).id
        unscored_id = make_team("Beta", judge).id
        upsert_score(session, team_id=scored_id, judge_id=judge.id, rubric=NINES)

        result = delete_teams(session, [scored_id, unscored_id])

        assert result.deleted == [unscored_id]
        assert result.blocked == [scored_id]
        assert [t.name for t in list_teams(session)] == ["Alpha"]

    def test_empty_selection(self, session: Session) -> None:
        with pytest.raises(ValidationError):
            delete_teams(session, [])

    def test_unknown_team(self, session: Session) -> None:
        with pytest.raises(NotFoundError):
            delete_teams(session, [404])


class TestLeaderboard:
    def test_ranks_by_judges_own_scores(
        self, session: Session, judge: Judge, other_judge: Judge, make_team
    ) -> None:
        gamma = make_team("Gamma", judge)
        beta = make_team("Beta", judge)
        alpha = make_team("Alpha", judge)
        delta = make_team("Delta", judge)
        upsert_score(session, team_id=beta.id, judge_id=judge.id, rubric=NINES)
        upsert_score(session, team_id=alpha.id, judge_id=judge.id, rubric=NINES)
        upsert_score(session, team_id=delta.id, judge_id=judge.id, rubric=SEVENS)
        upsert_score(session, team_id=gamma.id, judge_id=other_judge.id, rubric=NINES)

        leaderboard = build_leaderboard(session, judge)

        assert [(entry.team.name, entry.rank) for entry in leaderboard.rankings] == [
            ("Alpha", 1),
            ("Beta", 2),
            ("Delta", 3),
            ("Gamma", None),
        ]
        assert leaderboard.progress.total == 4
        assert leaderboard.progress.scored == 3
        assert leaderboard.progress.completion_pct == 75
        assert judge_progress(session, judge) == leaderboard.progress

    def test_csv_frame(self, session: Session, judge: Judge, make_team) -> None:
        alpha = make_team("Alpha", judge)
        make_team("Beta", judge)
        upsert_score(
            session,
            team_id=alpha.id,
            judge_id=judge.id,
            rubric={**SEVENS, "overall": 8},
        )

        frame = leaderboard_frame(build_leaderboard(session, judge))

        assert list(frame["team_name"]) == ["Alpha", "Beta"]
        assert list(frame["average"]) == ["7.2", ""]
        assert list(frame["status"]) == ["scored", "unscored"]
