"""
Assignment domain model: one way of splitting a lobby into two teams.
"""

from dataclasses import dataclass

from domain.models.player import RatedPlayer

TEAM_A = "A"
TEAM_B = "B"


@dataclass(frozen=True)
class Assignment:
    """
    A scored partition of rated players into team A and team B.

    score = rating_diff + pair_penalty (lower is better).
    """

    team_a: tuple[RatedPlayer, ...]
    team_b: tuple[RatedPlayer, ...]
    score: int
    rating_a: int
    rating_b: int
    rating_diff: int
    pair_penalty: int

    @property
    def team_a_ids(self) -> list[str]:
        return [p.player_id for p in self.team_a]

    @property
    def team_b_ids(self) -> list[str]:
        return [p.player_id for p in self.team_b]

    @property
    def players(self) -> list[RatedPlayer]:
        return list(self.team_a) + list(self.team_b)

    def __str__(self) -> str:
        team_a = ", ".join(p.name for p in self.team_a)
        team_b = ", ".join(p.name for p in self.team_b)
        return (
            f"A[{self.rating_a}]: {team_a} | B[{self.rating_b}]: {team_b} "
            f"(score {self.score} = diff {self.rating_diff} + pairs {self.pair_penalty})"
        )
