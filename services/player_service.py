"""
Roster management: registration, lobby selection, ranks, and streaks.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from config import LOBBY_READY_THRESHOLD, ROSTER_MAX_PLAYERS
from domain.models.player import Player
from domain.services.match_result_service import reset_all_streaks, reset_streak
from rating_system import RANKS, is_known_rank, normalize_rank
from services.error_codes import (
    INVALID_RANK,
    LOBBY_FULL,
    PLAYER_ALREADY_EXISTS,
    PLAYER_NOT_FOUND,
    ROSTER_FULL,
    VALIDATION_ERROR,
)
from services.result import Result

logger = logging.getLogger("balance_bot.services.player")

Roster = list[Player]


@dataclass(frozen=True)
class StreakLeaders:
    """Longest current win and loss streaks, with every tied player."""

    win_streak: int = 0
    win_names: list[str] = field(default_factory=list)
    loss_streak: int = 0
    loss_names: list[str] = field(default_factory=list)


class PlayerService:
    """
    Encapsulates roster changes.

    The roster is passed in and a new roster is returned in the Result;
    nothing is mutated in place.
    """

    def __init__(self, max_players: int | None = None, lobby_size: int | None = None):
        self.max_players = max_players if max_players is not None else ROSTER_MAX_PLAYERS
        self.lobby_size = lobby_size if lobby_size is not None else LOBBY_READY_THRESHOLD

    @staticmethod
    def _find(roster: Sequence[Player], player_id: str) -> Player | None:
        for player in roster:
            if player.player_id == player_id:
                return player
        return None

    @staticmethod
    def get_selected(roster: Sequence[Player]) -> Roster:
        return [p for p in roster if p.selected]

    def add_player(
        self,
        roster: Sequence[Player],
        name: str,
        rank: str = "silver4",
        *,
        allow_duplicate_name: bool = False,
        player_id: str | None = None,
    ) -> Result[Roster]:
        """
        Register a new player.

        The new player starts selected unless the lobby is already full.
        A display name already on the roster is rejected unless
        allow_duplicate_name is set; players are told apart by id.
        """
        trimmed = (name or "").strip()
        if not trimmed:
            return Result.fail("Player name cannot be empty.", code=VALIDATION_ERROR)
        if len(roster) >= self.max_players:
            return Result.fail(f"Roster is limited to {self.max_players} players.", code=ROSTER_FULL)
        if not is_known_rank(rank):
            return Result.fail(
                f"Unknown rank {rank!r}. Choose one of: {', '.join(RANKS)}", code=INVALID_RANK
            )
        if not allow_duplicate_name and any(p.name == trimmed for p in roster):
            return Result.fail(
                f"A player named {trimmed!r} already exists.", code=PLAYER_ALREADY_EXISTS
            )

        kwargs = {"player_id": player_id} if player_id else {}
        new_player = Player(
            name=trimmed,
            rank=normalize_rank(rank),
            selected=len(self.get_selected(roster)) < self.lobby_size,
            **kwargs,
        )
        logger.info(f"Registered player {new_player.name} ({new_player.rank}) as {new_player.player_id}")
        return Result.ok([*roster, new_player])

    def remove_player(self, roster: Sequence[Player], player_id: str) -> Result[Roster]:
        if self._find(roster, player_id) is None:
            return Result.fail("Player not found.", code=PLAYER_NOT_FOUND)
        return Result.ok([p for p in roster if p.player_id != player_id])

    def toggle_select(self, roster: Sequence[Player], player_id: str) -> Result[Roster]:
        """Select or deselect a player; selection is capped at the lobby size."""
        player = self._find(roster, player_id)
        if player is None:
            return Result.fail("Player not found.", code=PLAYER_NOT_FOUND)
        if not player.selected and len(self.get_selected(roster)) >= self.lobby_size:
            return Result.fail(f"Lobby already has {self.lobby_size} players.", code=LOBBY_FULL)
        return Result.ok(
            [replace(p, selected=not p.selected) if p.player_id == player_id else p for p in roster]
        )

    def update_rank(self, roster: Sequence[Player], player_id: str, rank: str) -> Result[Roster]:
        if self._find(roster, player_id) is None:
            return Result.fail("Player not found.", code=PLAYER_NOT_FOUND)
        if not is_known_rank(rank):
            return Result.fail(f"Unknown rank {rank!r}.", code=INVALID_RANK)
        normalized = normalize_rank(rank)
        return Result.ok(
            [replace(p, rank=normalized) if p.player_id == player_id else p for p in roster]
        )

    def reset_streak(self, roster: Sequence[Player], player_id: str) -> Result[Roster]:
        if self._find(roster, player_id) is None:
            return Result.fail("Player not found.", code=PLAYER_NOT_FOUND)
        return Result.ok(reset_streak(roster, player_id))

    def reset_all_streaks(self, roster: Sequence[Player]) -> Result[Roster]:
        logger.info(f"Resetting streaks for {len(roster)} players")
        return Result.ok(reset_all_streaks(roster))

    @staticmethod
    def get_streak_leaders(roster: Sequence[Player]) -> StreakLeaders:
        """Find the longest win streak and loss streak currently running."""
        win_streak, win_names = 0, []
        loss_streak, loss_names = 0, []
        for p in roster:
            if p.streak > 0:
                if p.streak > win_streak:
                    win_streak, win_names = p.streak, [p.name]
                elif p.streak == win_streak:
                    win_names.append(p.name)
            elif p.streak < 0:
                length = -p.streak
                if length > loss_streak:
                    loss_streak, loss_names = length, [p.name]
                elif length == loss_streak:
                    loss_names.append(p.name)
        return StreakLeaders(win_streak, win_names, loss_streak, loss_names)
