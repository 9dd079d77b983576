"""
Win/loss and streak bookkeeping after a match result.
"""

from collections.abc import Iterable
from dataclasses import replace

from domain.models.player import Player


def next_streak(streak: int, won: bool) -> int:
    """
    Streak after one more result.

    A win extends a winning streak (or starts one at 1, breaking any losing
    streak); a loss does the same in the negative direction.
    """
    if won:
        return streak + 1 if streak >= 0 else 1
    return streak - 1 if streak <= 0 else -1


def apply_player_result(player: Player, won: bool) -> Player:
    if won:
        return replace(player, wins=player.wins + 1, streak=next_streak(player.streak, True))
    return replace(player, losses=player.losses + 1, streak=next_streak(player.streak, False))


def apply_match_result(
    roster: Iterable[Player],
    winning_ids: Iterable[str],
    losing_ids: Iterable[str],
) -> list[Player]:
    """
    Apply a match outcome to a roster.

    Args:
        roster: Current players (not mutated)
        winning_ids: Player ids on the winning team
        losing_ids: Player ids on the losing team

    Returns:
        New roster in the same order; players who did not play are unchanged.
    """
    winners = set(winning_ids)
    losers = set(losing_ids)
    updated = []
    for player in roster:
        if player.player_id in winners:
            updated.append(apply_player_result(player, won=True))
        elif player.player_id in losers:
            updated.append(apply_player_result(player, won=False))
        else:
            updated.append(player)
    return updated


def reset_streak(roster: Iterable[Player], player_id: str) -> list[Player]:
    """Zero one player's streak. Win/loss totals are untouched."""
    return [p.with_streak_reset() if p.player_id == player_id else p for p in roster]


def reset_all_streaks(roster: Iterable[Player]) -> list[Player]:
    return [p.with_streak_reset() for p in roster]
