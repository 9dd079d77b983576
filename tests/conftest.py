"""
Pytest fixtures for tests.

Shared rated-player and roster builders. Import make_rated from here
instead of redefining it in each test module.
"""

import pytest

from domain.models.player import Player, RatedPlayer


def make_rated(ratings: list[int], prefix: str = "p") -> list[RatedPlayer]:
    """Build rated players with ids p0, p1, ... and names P0, P1, ..."""
    return [
        RatedPlayer(player_id=f"{prefix}{i}", name=f"{prefix.upper()}{i}", rating=r)
        for i, r in enumerate(ratings)
    ]


@pytest.fixture
def ten_player_roster():
    """
    Ten selected players with stable ids.

    Their ratings are 2700, 2300, 2100, 2000, 1900, 1800, 1350, 1300, 1250,
    1200, which split evenly (8950 per team).
    """
    ranks = [
        "challenger", "master", "diamond1", "diamond2", "diamond3",
        "diamond4", "gold1", "gold2", "gold3", "gold4",
    ]
    return [
        Player(name=f"Player{i}", rank=rank, player_id=f"id{i}")
        for i, rank in enumerate(ranks)
    ]
