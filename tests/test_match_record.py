"""
Tests for MatchRecord construction and stored-form loading.
"""

from datetime import datetime, timezone

import pytest

from domain.models.match_record import MatchRecord, other_side
from domain.services.team_balancing_service import TeamBalancingService
from tests.conftest import make_rated


class TestFromAssignment:
    def test_copies_teams_and_scores(self):
        players = make_rated([2000, 1500, 1800, 1600])
        assignment = TeamBalancingService().score(players[:2], players[2:], {})
        when = datetime(2026, 5, 4, 12, 30, tzinfo=timezone.utc)

        record = MatchRecord.from_assignment(assignment, "A", index=7, recorded_at=when, match_id="m7")

        assert record.match_id == "m7"
        assert record.index == 7
        assert record.recorded_at == "2026-05-04T12:30:00+00:00"
        assert record.team_a_ids == ("p0", "p1")
        assert record.team_b_names == ("P2", "P3")
        assert (record.rating_a, record.rating_b, record.score) == (3500, 3400, 100)
        assert record.winning_ids == ("p0", "p1")
        assert record.losing_ids == ("p2", "p3")

    def test_generates_id(self):
        players = make_rated([1, 2])
        assignment = TeamBalancingService().score(players[:1], players[1:], {})
        record = MatchRecord.from_assignment(assignment, "B", index=1)
        assert record.match_id
        assert record.loser == "A"

    def test_rejects_unknown_winner(self):
        players = make_rated([1, 2])
        assignment = TeamBalancingService().score(players[:1], players[1:], {})
        with pytest.raises(ValueError):
            MatchRecord.from_assignment(assignment, "draw", index=1)


class TestStoredForm:
    def test_loads_camel_case_record(self):
        record = MatchRecord.from_dict(
            {
                "id": "abc",
                "index": 3,
                "timeISO": "2026-01-01T00:00:00.000Z",
                "winner": "B",
                "loser": "A",
                "mmrA": 8900,
                "mmrB": 8950,
                "score": 50,
                "teamA": ["Ann", "Ben"],
                "teamB": ["Cat", "Dan"],
                "teamAIds": ["a", "b"],
                "teamBIds": ["c", "d"],
            }
        )
        assert record.match_id == "abc"
        assert record.winner == "B"
        assert record.rating_b == 8950
        assert record.team_a_ids == ("a", "b")
        assert record.has_player_ids

    def test_legacy_record_has_no_ids(self):
        record = MatchRecord.from_dict({"id": "old", "winner": "A", "teamA": ["Ann"], "teamB": ["Ben"]})
        assert record.team_a_ids is None
        assert not record.has_player_ids
        assert record.winning_ids == ()

    def test_to_dict_round_trips_stored_shape(self):
        stored = {
            "id": "abc",
            "index": 1,
            "timeISO": "2026-01-01T00:00:00+00:00",
            "winner": "A",
            "loser": "B",
            "mmrA": 1,
            "mmrB": 2,
            "score": 1,
            "teamA": ["Ann"],
            "teamB": ["Ben"],
            "teamAIds": ["a"],
            "teamBIds": ["b"],
        }
        assert MatchRecord.from_dict(stored).to_dict() == stored

    def test_null_and_malformed_fields_fall_back_to_defaults(self):
        record = MatchRecord.from_dict(
            {
                "id": None,
                "index": None,
                "winner": "draw",
                "mmrA": None,
                "mmrB": "high",
                "score": None,
                "teamA": None,
                "teamB": "Ben",
                "teamAIds": None,
                "teamBIds": ["b"],
            }
        )
        assert record.match_id == ""
        assert (record.index, record.rating_a, record.rating_b, record.score) == (0, 0, 0, 0)
        assert record.winner == "A"
        assert record.team_a_names == ()
        assert record.team_b_names == ()
        assert record.team_a_ids is None
        assert record.team_b_ids == ("b",)

    def test_to_dict_omits_missing_ids(self):
        data = MatchRecord.from_dict({"id": "old", "winner": "A"}).to_dict()
        assert "teamAIds" not in data


def test_other_side():
    assert other_side("A") == "B"
    assert other_side("B") == "A"
    with pytest.raises(ValueError):
        other_side("X")
