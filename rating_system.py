"""
Rank-based rating model with a bounded streak adjustment.
"""

import logging
from collections.abc import Iterable

from config import DEFAULT_RATING, STREAK_CAP, STREAK_UNIT
from domain.models.player import Player, RatedPlayer

logger = logging.getLogger("balance_bot.rating")

# Lowest to highest
RANKS: tuple[str, ...] = (
    "iron4", "iron3", "iron2", "iron1",
    "bronze4", "bronze3", "bronze2", "bronze1",
    "silver4", "silver3", "silver2", "silver1",
    "gold4", "gold3", "gold2", "gold1",
    "platinum4", "platinum3", "platinum2", "platinum1",
    "emerald4", "emerald3", "emerald2", "emerald1",
    "diamond4", "diamond3", "diamond2", "diamond1",
    "master", "grandmaster", "challenger",
)

RANK_TO_RATING: dict[str, int] = {
    "iron4": 600, "iron3": 650, "iron2": 700, "iron1": 750,
    "bronze4": 800, "bronze3": 850, "bronze2": 900, "bronze1": 950,
    "silver4": 1000, "silver3": 1050, "silver2": 1100, "silver1": 1150,
    "gold4": 1200, "gold3": 1250, "gold2": 1300, "gold1": 1350,
    "platinum4": 1400, "platinum3": 1450, "platinum2": 1500, "platinum1": 1550,
    "emerald4": 1600, "emerald3": 1650, "emerald2": 1700, "emerald1": 1750,
    "diamond4": 1800, "diamond3": 1900, "diamond2": 2000, "diamond1": 2100,
    "master": 2300, "grandmaster": 2500, "challenger": 2700,
}


def normalize_rank(rank: str | None) -> str:
    """Canonical form of a rank label ("  Gold2 " -> "gold2")."""
    return (rank or "").strip().lower()


def is_known_rank(rank: str | None) -> bool:
    return normalize_rank(rank) in RANK_TO_RATING


class RankRatingSystem:
    """
    Maps rank labels to ratings for team balancing.

    Handles:
    - Rank label -> base rating lookup (unknown labels use a default)
    - Streak adjustment: hot streaks raise the rating, cold streaks lower it
    """

    def __init__(
        self,
        default_rating: int | None = None,
        streak_unit: int | None = None,
        streak_cap: int | None = None,
    ):
        """
        Initialize rating system.

        Args:
            default_rating: Rating for unrecognized rank labels (default 1200)
            streak_unit: Rating change per streak game beyond the first (default 25)
            streak_cap: Maximum absolute streak adjustment (default 100)
        """
        self.default_rating = default_rating if default_rating is not None else DEFAULT_RATING
        self.streak_unit = streak_unit if streak_unit is not None else STREAK_UNIT
        self.streak_cap = streak_cap if streak_cap is not None else STREAK_CAP

    def base_rating(self, rank: str | None) -> int:
        key = normalize_rank(rank)
        rating = RANK_TO_RATING.get(key)
        if rating is None:
            logger.debug(f"Unknown rank {rank!r}, using default rating {self.default_rating}")
            return self.default_rating
        return rating

    def streak_adjustment(self, streak: int) -> int:
        """
        Rating adjustment for a signed streak.

        No effect below a 2-streak; then (|streak| - 1) * unit with the streak's
        sign, clamped to [-cap, +cap].
        """
        magnitude = abs(streak)
        if magnitude < 2:
            return 0
        raw = (magnitude - 1) * self.streak_unit
        adjustment = raw if streak > 0 else -raw
        return max(-self.streak_cap, min(self.streak_cap, adjustment))

    def effective_rating(self, rank: str | None, streak: int = 0) -> int:
        """Base rank rating plus streak adjustment."""
        return self.base_rating(rank) + self.streak_adjustment(streak)

    def rate_player(self, player: Player) -> RatedPlayer:
        return RatedPlayer(
            player_id=player.player_id,
            name=player.name,
            rating=self.effective_rating(player.rank, player.streak),
        )

    def rate_players(self, players: Iterable[Player]) -> list[RatedPlayer]:
        """Snapshot effective ratings for a balancing run, preserving order."""
        return [self.rate_player(p) for p in players]


_default_system = RankRatingSystem()


def streak_adjustment(streak: int) -> int:
    return _default_system.streak_adjustment(streak)


def effective_rating(rank: str | None, streak: int = 0) -> int:
    return _default_system.effective_rating(rank, streak)


def rate_players(players: Iterable[Player]) -> list[RatedPlayer]:
    return _default_system.rate_players(players)
