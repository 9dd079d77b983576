"""
Tests for side-change detection between consecutive assignments.
"""

import pytest

from domain.models.player import RatedPlayer
from domain.services.team_balancing_service import TeamBalancingService
from domain.services.team_change_service import changed_players, detect_changes
from tests.conftest import make_rated


def _assignment(team_a, team_b):
    return TeamBalancingService().score(team_a, team_b, {})


class TestDetectChanges:
    def test_no_previous_assignment(self):
        players = make_rated([1500] * 4)
        assert detect_changes(None, _assignment(players[:2], players[2:])) == {}

    def test_flags_players_who_switched(self):
        p = make_rated([1500] * 4)
        before = _assignment([p[0], p[1]], [p[2], p[3]])
        after = _assignment([p[0], p[2]], [p[1], p[3]])
        assert detect_changes(before, after) == {
            "p0": False,
            "p2": True,
            "p1": True,
            "p3": False,
        }

    def test_same_split_with_swapped_labels_flags_everyone(self):
        p = make_rated([1500] * 4)
        before = _assignment([p[0], p[1]], [p[2], p[3]])
        after = _assignment([p[2], p[3]], [p[0], p[1]])
        assert all(detect_changes(before, after).values())

    def test_new_player_is_not_flagged(self):
        p = make_rated([1500] * 5)
        before = _assignment([p[0], p[1]], [p[2], p[3]])
        after = _assignment([p[0], p[4]], [p[2], p[3]])
        changes = detect_changes(before, after)
        assert changes["p4"] is False
        assert "p1" not in changes

    def test_id_matching_handles_duplicate_names(self):
        twin_a = RatedPlayer(player_id="x", name="Sam", rating=1500)
        twin_b = RatedPlayer(player_id="y", name="Sam", rating=1500)
        other = make_rated([1500, 1500])
        before = _assignment([twin_a, other[0]], [twin_b, other[1]])
        after = _assignment([twin_a, other[1]], [twin_b, other[0]])
        changes = detect_changes(before, after)
        assert changes["x"] is False
        assert changes["y"] is False
        assert changes["p0"] is True

    def test_name_matching_conflates_duplicate_names(self):
        """Keyed by name, players sharing a name on both sides look switched."""
        twin_a = RatedPlayer(player_id="x", name="Sam", rating=1500)
        twin_b = RatedPlayer(player_id="y", name="Sam", rating=1500)
        other = make_rated([1500, 1500])
        before = _assignment([twin_a, other[0]], [twin_b, other[1]])
        after = _assignment([twin_a, other[1]], [twin_b, other[0]])
        changes = detect_changes(before, after, key="name")
        assert changes["Sam"] is True
        assert changes["P0"] is True

    def test_unknown_key(self):
        p = make_rated([1500] * 2)
        a = _assignment(p[:1], p[1:])
        with pytest.raises(ValueError):
            detect_changes(a, a, key="rank")


class TestChangedPlayers:
    def test_returns_switched_players_in_team_order(self):
        p = make_rated([1500] * 4)
        before = _assignment([p[0], p[1]], [p[2], p[3]])
        after = _assignment([p[0], p[3]], [p[2], p[1]])
        assert changed_players(before, after) == [p[3], p[1]]

    def test_empty_without_previous(self):
        p = make_rated([1500] * 2)
        assert changed_players(None, _assignment(p[:1], p[1:])) == []
