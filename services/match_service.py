"""
Match orchestration: shuffling and recording.
"""

import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime

from config import LOBBY_READY_THRESHOLD, TEAMMATE_LOOKBACK
from domain.models.assignment import TEAM_A, TEAM_B, Assignment
from domain.models.match_record import MatchRecord
from domain.models.player import Player
from domain.services.match_result_service import apply_match_result
from domain.services.pair_history_service import build_pair_counts
from domain.services.team_change_service import detect_changes
from rating_system import RankRatingSystem
from services.error_codes import INSUFFICIENT_PLAYERS, INVALID_RESULT, NO_PENDING_MATCH
from services.player_service import PlayerService, Roster
from services.result import Result
from shuffler import BalancedShuffler

logger = logging.getLogger("balance_bot.services.match")


@dataclass(frozen=True)
class LobbyState:
    """
    Snapshot of everything the balancer reads between runs.

    history is newest-first. previous_assignment is the baseline for change
    highlighting; pending_assignment is the shuffle awaiting a result.
    """

    roster: tuple[Player, ...] = ()
    history: tuple[MatchRecord, ...] = ()
    pending_assignment: Assignment | None = None
    previous_assignment: Assignment | None = None
    changes: dict[str, bool] = field(default_factory=dict)


@dataclass(frozen=True)
class ShuffleOutcome:
    assignment: Assignment
    changes: dict[str, bool]


class MatchService:
    """Handles team shuffling, state tracking, and match recording."""

    def __init__(
        self,
        state: LobbyState | None = None,
        *,
        shuffler: BalancedShuffler | None = None,
        rating_system: RankRatingSystem | None = None,
        player_service: PlayerService | None = None,
        lookback: int | None = None,
        lobby_size: int | None = None,
    ):
        """
        Initialize MatchService.

        Args:
            state: Initial roster/history snapshot (e.g. loaded by the caller)
            shuffler: Team shuffler (default BalancedShuffler())
            rating_system: Rank rating model (default RankRatingSystem())
            player_service: Roster operations (default PlayerService())
            lookback: Recent matches considered for teammate penalties (default 3)
            lobby_size: Players required to shuffle (default 10)
        """
        self._state = state or LobbyState()
        self.shuffler = shuffler or BalancedShuffler()
        self.rating_system = rating_system or RankRatingSystem()
        self.player_service = player_service or PlayerService()
        self.lookback = lookback if lookback is not None else TEAMMATE_LOOKBACK
        self.lobby_size = lobby_size if lobby_size is not None else LOBBY_READY_THRESHOLD
        # Single writer: a shuffle must never see a roster mutated mid-run
        self._lock = threading.Lock()

    @property
    def state(self) -> LobbyState:
        return self._state

    def _update_roster(self, op: Callable[[Sequence[Player]], Result[Roster]]) -> Result[Roster]:
        with self._lock:
            result = op(self._state.roster)
            if result:
                self._state = replace(self._state, roster=tuple(result.value))
            else:
                logger.warning(f"Roster change rejected: {result.error}")
            return result

    def add_player(self, name: str, rank: str = "silver4", *, allow_duplicate_name: bool = False) -> Result[Roster]:
        return self._update_roster(
            lambda roster: self.player_service.add_player(
                roster, name, rank, allow_duplicate_name=allow_duplicate_name
            )
        )

    def remove_player(self, player_id: str) -> Result[Roster]:
        return self._update_roster(lambda roster: self.player_service.remove_player(roster, player_id))

    def toggle_select(self, player_id: str) -> Result[Roster]:
        return self._update_roster(lambda roster: self.player_service.toggle_select(roster, player_id))

    def update_rank(self, player_id: str, rank: str) -> Result[Roster]:
        return self._update_roster(
            lambda roster: self.player_service.update_rank(roster, player_id, rank)
        )

    def reset_streak(self, player_id: str) -> Result[Roster]:
        return self._update_roster(lambda roster: self.player_service.reset_streak(roster, player_id))

    def reset_all_streaks(self) -> Result[Roster]:
        return self._update_roster(self.player_service.reset_all_streaks)

    def shuffle(self) -> Result[ShuffleOutcome]:
        """
        Balance the selected players into two teams.

        Requires exactly lobby_size selected players. The new assignment
        becomes pending and is compared against the previous one to flag
        players who switched sides.
        """
        with self._lock:
            state = self._state
            selected = [p for p in state.roster if p.selected]
            if len(selected) != self.lobby_size:
                logger.warning(f"Shuffle rejected: {len(selected)} players selected")
                return Result.fail(
                    f"Select exactly {self.lobby_size} players (currently {len(selected)}).",
                    code=INSUFFICIENT_PLAYERS,
                )

            rated = self.rating_system.rate_players(selected)
            pair_counts = build_pair_counts(state.history, self.lookback)
            assignment = self.shuffler.balance(rated, pair_counts)
            if assignment is None:
                return Result.fail(
                    f"Cannot balance {len(rated)} players.", code=INSUFFICIENT_PLAYERS
                )

            changes = detect_changes(state.previous_assignment, assignment)
            self._state = replace(
                state,
                pending_assignment=assignment,
                previous_assignment=assignment,
                changes=changes,
            )
            logger.info(
                f"Shuffled {len(rated)} players: score {assignment.score} "
                f"({sum(changes.values())} switched sides)"
            )
            return Result.ok(ShuffleOutcome(assignment=assignment, changes=changes))

    def record_result(self, winner: str, *, recorded_at: datetime | None = None) -> Result[MatchRecord]:
        """
        Record the winner ("A" or "B") of the pending shuffle.

        Prepends a history entry and applies win/loss/streak updates.
        """
        if winner not in (TEAM_A, TEAM_B):
            return Result.fail(f"Winner must be 'A' or 'B', got {winner!r}.", code=INVALID_RESULT)

        with self._lock:
            state = self._state
            assignment = state.pending_assignment
            if assignment is None:
                return Result.fail("Shuffle teams before recording a result.", code=NO_PENDING_MATCH)

            record = MatchRecord.from_assignment(
                assignment, winner, index=len(state.history) + 1, recorded_at=recorded_at
            )
            roster = apply_match_result(state.roster, record.winning_ids, record.losing_ids)
            self._state = replace(
                state,
                roster=tuple(roster),
                history=(record, *state.history),
                pending_assignment=None,
                previous_assignment=assignment,
            )
            logger.info(
                f"Recorded match #{record.index}: team {record.winner} won "
                f"(A {record.rating_a} vs B {record.rating_b}, score {record.score})"
            )
            return Result.ok(record)

    def clear_history(self) -> Result[None]:
        with self._lock:
            logger.info(f"Clearing {len(self._state.history)} match records")
            self._state = replace(self._state, history=())
            return Result.ok()
