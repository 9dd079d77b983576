"""
Tests for teammate pair counting over recent match history.
"""

from domain.models.match_record import MatchRecord
from domain.services.pair_history_service import build_pair_counts, get_pair_count, pair_key


def _record(index: int, team_a_ids, team_b_ids, winner: str = "A") -> MatchRecord:
    return MatchRecord(
        match_id=f"m{index}",
        index=index,
        recorded_at="2026-01-01T00:00:00+00:00",
        winner=winner,
        rating_a=0,
        rating_b=0,
        score=0,
        team_a_names=tuple(team_a_ids or ()),
        team_b_names=tuple(team_b_ids or ()),
        team_a_ids=tuple(team_a_ids) if team_a_ids is not None else None,
        team_b_ids=tuple(team_b_ids) if team_b_ids is not None else None,
    )


class TestPairKey:
    def test_order_independent(self):
        assert pair_key("b", "a") == pair_key("a", "b") == ("a", "b")

    def test_absent_pair_is_zero(self):
        assert get_pair_count({}, "x", "y") == 0


class TestBuildPairCounts:
    """Test pair counting from newest-first history."""

    def test_empty_history(self):
        assert build_pair_counts([], 3) == {}

    def test_same_team_pairs_only(self):
        history = [_record(1, ["a", "b", "c"], ["d", "e"])]
        counts = build_pair_counts(history, 3)
        assert counts == {
            ("a", "b"): 1,
            ("a", "c"): 1,
            ("b", "c"): 1,
            ("d", "e"): 1,
        }
        assert get_pair_count(counts, "a", "d") == 0

    def test_counts_accumulate_across_records(self):
        """A pair together on A in one match and on B in another counts twice."""
        history = [
            _record(2, ["a", "b"], ["c", "d"]),
            _record(1, ["c", "d"], ["a", "b"]),
        ]
        counts = build_pair_counts(history, 3)
        assert counts[pair_key("a", "b")] == 2
        assert counts[pair_key("c", "d")] == 2

    def test_only_most_recent_records_count(self):
        """lookback=3 over 5 records ignores the two oldest."""
        history = [
            _record(5, ["a", "b"], ["c", "d"]),
            _record(4, ["a", "c"], ["b", "d"]),
            _record(3, ["a", "d"], ["b", "c"]),
            _record(2, ["x", "y"], ["a", "b"]),
            _record(1, ["x", "z"], ["c", "d"]),
        ]
        counts = build_pair_counts(history, 3)
        assert pair_key("x", "y") not in counts
        assert pair_key("x", "z") not in counts
        assert counts[pair_key("a", "b")] == 1
        assert counts[pair_key("c", "d")] == 1

    def test_no_zero_entries(self):
        history = [_record(1, ["a", "b"], ["c", "d"])]
        assert all(count > 0 for count in build_pair_counts(history, 3).values())

    def test_non_positive_lookback(self):
        history = [_record(1, ["a", "b"], ["c", "d"])]
        assert build_pair_counts(history, 0) == {}
        assert build_pair_counts(history, -1) == {}

    def test_legacy_records_are_skipped(self):
        history = [
            _record(2, None, None),
            _record(1, ["a", "b"], ["c", "d"]),
        ]
        counts = build_pair_counts(history, 3)
        assert counts == {("a", "b"): 1, ("c", "d"): 1}

    def test_legacy_record_still_uses_a_lookback_slot(self):
        history = [
            _record(3, None, None),
            _record(2, None, None),
            _record(1, ["a", "b"], ["c", "d"]),
        ]
        assert build_pair_counts(history, 2) == {}

    def test_stored_dicts_accepted(self):
        history = [
            {"id": "m2", "winner": "B", "teamA": ["Ann", "Ben"], "teamB": ["Cat", "Dan"]},
            {"id": "m1", "winner": "A", "teamAIds": ["a", "b"], "teamBIds": ["c", "d"]},
        ]
        counts = build_pair_counts(history, 3)
        assert counts == {("a", "b"): 1, ("c", "d"): 1}

    def test_null_scalar_fields_do_not_block_counting(self):
        """A stored record with null index and ratings still contributes its pairs."""
        history = [
            {
                "id": "m1",
                "index": None,
                "winner": None,
                "mmrA": None,
                "mmrB": "n/a",
                "teamAIds": ["a", "b"],
                "teamBIds": ["c", "d"],
            },
        ]
        counts = build_pair_counts(history, 3)
        assert counts == {("a", "b"): 1, ("c", "d"): 1}
