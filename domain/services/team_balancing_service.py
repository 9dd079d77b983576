"""
Team balancing domain service.

Handles team rating sums and matchup scoring.
"""

import itertools
from collections.abc import Sequence

from config import TEAMMATE_PENALTY
from domain.models.assignment import Assignment
from domain.models.player import RatedPlayer
from domain.services.pair_history_service import PairCounts, get_pair_count


class TeamBalancingService:
    """
    Pure domain service for team balancing logic.

    Responsibilities:
    - Calculate team rating sums
    - Apply teammate repeat penalties
    - Score a matchup (lower is better)
    """

    def __init__(self, pair_penalty: int | None = None):
        """
        Initialize team balancing service.

        Args:
            pair_penalty: Cost per prior same-team occurrence of a pair (default 20)
        """
        self.pair_penalty = pair_penalty if pair_penalty is not None else TEAMMATE_PENALTY

    @staticmethod
    def calculate_team_rating(team: Sequence[RatedPlayer]) -> int:
        return sum(p.rating for p in team)

    def teammate_penalty(self, team: Sequence[RatedPlayer], pair_counts: PairCounts) -> int:
        """
        Repeat cost for one team.

        A pair that shared a team k times in the lookback window adds
        k * pair_penalty when reunited.
        """
        penalty = 0
        for a, b in itertools.combinations(team, 2):
            times = get_pair_count(pair_counts, a.player_id, b.player_id)
            if times > 0:
                penalty += times * self.pair_penalty
        return penalty

    def score(
        self,
        team_a: Sequence[RatedPlayer],
        team_b: Sequence[RatedPlayer],
        pair_counts: PairCounts | None = None,
    ) -> Assignment:
        """
        Score a matchup.

        Team sizes are not validated here; the partitioners guarantee them.

        Args:
            team_a: First team
            team_b: Second team
            pair_counts: Recent teammate pair counts (None = no history)

        Returns:
            Assignment with rating sums, rating difference, pair penalty and total score
        """
        pair_counts = pair_counts or {}
        rating_a = self.calculate_team_rating(team_a)
        rating_b = self.calculate_team_rating(team_b)
        rating_diff = abs(rating_a - rating_b)
        pair_penalty = self.teammate_penalty(team_a, pair_counts) + self.teammate_penalty(
            team_b, pair_counts
        )
        return Assignment(
            team_a=tuple(team_a),
            team_b=tuple(team_b),
            score=rating_diff + pair_penalty,
            rating_a=rating_a,
            rating_b=rating_b,
            rating_diff=rating_diff,
            pair_penalty=pair_penalty,
        )
