"""
Player domain model.
"""

import uuid
from dataclasses import dataclass, field, replace


def new_player_id() -> str:
    """Generate a stable unique player identifier."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Player:
    """
    Represents a registered player on the roster.

    This is a pure domain model with no infrastructure dependencies.
    Instances are immutable; state changes produce new copies.
    """

    name: str
    rank: str
    player_id: str = field(default_factory=new_player_id)
    wins: int = 0
    losses: int = 0
    streak: int = 0  # >0 consecutive wins, <0 consecutive losses, 0 none
    selected: bool = True

    def with_streak_reset(self) -> "Player":
        """Return a copy with the streak cleared. Win/loss totals are kept."""
        return replace(self, streak=0)

    def __str__(self) -> str:
        return f"{self.name} ({self.rank}, W-L: {self.wins}-{self.losses}, streak: {self.streak:+d})"


@dataclass(frozen=True)
class RatedPlayer:
    """A player snapshot carrying the effective rating used for one balancing run."""

    player_id: str
    name: str
    rating: int

    def __str__(self) -> str:
        return f"{self.name} ({self.rating})"
