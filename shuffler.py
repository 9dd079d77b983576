"""
Balanced team shuffling algorithm.
"""

import heapq
import itertools
import logging
import random
from collections.abc import Iterator, Sequence

from config import LOBBY_READY_THRESHOLD, MIN_RANDOM_PLAYERS, SHUFFLER_SETTINGS
from domain.models.assignment import Assignment
from domain.models.player import RatedPlayer
from domain.services.pair_history_service import PairCounts
from domain.services.team_balancing_service import TeamBalancingService

logger = logging.getLogger("balance_bot.shuffler")

EXACT_PLAYER_COUNT = 10


def anchored_team_indices(n: int = EXACT_PLAYER_COUNT, team_size: int | None = None) -> Iterator[tuple[int, ...]]:
    """
    Yield every distinct team-A index set with index 0 fixed on team A.

    Swapping team labels never changes the score, so pinning one player to A
    removes the mirrored half of the search space. For n=10 this yields
    C(9, 4) = 126 tuples in lexicographic order. Calling again restarts the
    sequence.
    """
    team_size = team_size if team_size is not None else n // 2
    if n <= 0 or team_size <= 0:
        return
    for rest in itertools.combinations(range(1, n), team_size - 1):
        yield (0, *rest)


class BalancedShuffler:
    """
    Implements balanced team shuffling.

    Minimizes team rating difference plus the teammate repeat penalty.
    Exhaustive for a 10-player lobby, random search otherwise.
    """

    def __init__(
        self,
        pair_penalty: int | None = None,
        random_iterations: int | None = None,
        rng: random.Random | None = None,
        log_top_k: int | None = None,
    ):
        """
        Initialize the shuffler.

        Args:
            pair_penalty: Cost per prior same-team occurrence of a pair (default 20)
            random_iterations: Random splits tried by the fallback search (default 3000)
            rng: Random source for the fallback search (default: module-level random)
            log_top_k: Number of best candidates logged per exhaustive search (default 5)
        """
        settings = SHUFFLER_SETTINGS
        self.balancing_service = TeamBalancingService(pair_penalty=pair_penalty)
        self.random_iterations = (
            random_iterations
            if random_iterations is not None
            else settings["random_iterations"]
        )
        self.log_top_k = log_top_k if log_top_k is not None else settings["log_top_k"]
        self.rng = rng or random.Random()

    @property
    def pair_penalty(self) -> int:
        return self.balancing_service.pair_penalty

    def best_exact_10(
        self,
        players: Sequence[RatedPlayer],
        pair_counts: PairCounts | None = None,
    ) -> Assignment | None:
        """
        Find the optimal split of exactly 10 players into two teams of 5.

        Scores all 126 distinct partitions. On ties the first candidate in
        enumeration order wins, so results are deterministic.

        Args:
            players: Exactly 10 rated players
            pair_counts: Recent teammate pair counts

        Returns:
            Best assignment, or None if the lobby is not exactly 10 players
        """
        if len(players) != EXACT_PLAYER_COUNT:
            return None

        pair_counts = pair_counts or {}
        best: Assignment | None = None

        # Track top candidates for logging without storing every matchup.
        # Keep a numeric tiebreaker so heapq never compares Assignment objects.
        top_heap: list[tuple[int, int, Assignment]] = []
        evaluated = 0

        for team_a_indices in anchored_team_indices(len(players)):
            chosen = set(team_a_indices)
            team_a = [players[i] for i in range(len(players)) if i in chosen]
            team_b = [players[i] for i in range(len(players)) if i not in chosen]
            candidate = self.balancing_service.score(team_a, team_b, pair_counts)
            evaluated += 1

            if best is None or candidate.score < best.score:
                best = candidate

            if self.log_top_k > 0:
                entry = (-candidate.score, -evaluated, candidate)
                if len(top_heap) < self.log_top_k:
                    heapq.heappush(top_heap, entry)
                elif entry > top_heap[0]:
                    heapq.heapreplace(top_heap, entry)

        if SHUFFLER_SETTINGS["log_candidates"] and top_heap:
            self._log_top_candidates(
                sorted(((-s, -n, a) for s, n, a in top_heap), key=lambda x: (x[0], x[1])),
                evaluated,
            )
        return best

    def _log_top_candidates(self, ranked: list[tuple[int, int, Assignment]], evaluated: int) -> None:
        logger.info("=" * 60)
        logger.info(f"TOP {len(ranked)} MATCHUPS ({evaluated} partitions evaluated):")
        for i, (score, _, assignment) in enumerate(ranked, 1):
            logger.info(
                f"#{i} - Total Score: {score} (Rating Diff: {assignment.rating_diff}, "
                f"Pair Penalty: {assignment.pair_penalty})"
            )
            logger.info(
                f"  Team A: {', '.join(str(p) for p in assignment.team_a)} = {assignment.rating_a}"
            )
            logger.info(
                f"  Team B: {', '.join(str(p) for p in assignment.team_b)} = {assignment.rating_b}"
            )
        logger.info("=" * 60)

    def best_random(
        self,
        players: Sequence[RatedPlayer],
        iterations: int | None = None,
        pair_counts: PairCounts | None = None,
    ) -> Assignment | None:
        """
        Search random even splits and keep the best one found.

        Each iteration shuffles the players uniformly (Fisher-Yates via
        random.shuffle) and cuts at the midpoint; with an odd count team B
        gets the extra player. No optimality guarantee.

        Args:
            players: At least 6 rated players
            iterations: Number of random splits to try (default 3000)
            pair_counts: Recent teammate pair counts

        Returns:
            Best assignment found, or None if too few players or no iterations
        """
        iterations = iterations if iterations is not None else self.random_iterations
        if len(players) < MIN_RANDOM_PLAYERS or iterations <= 0:
            return None

        pair_counts = pair_counts or {}
        pool = list(players)
        mid = len(pool) // 2
        best: Assignment | None = None

        for _ in range(iterations):
            self.rng.shuffle(pool)
            candidate = self.balancing_service.score(pool[:mid], pool[mid:], pair_counts)
            if best is None or candidate.score < best.score:
                best = candidate

        logger.info(
            f"Random search over {iterations} splits of {len(players)} players: best score {best.score}"
        )
        return best

    def balance(
        self,
        players: Sequence[RatedPlayer],
        pair_counts: PairCounts | None = None,
    ) -> Assignment | None:
        """
        Split players into two balanced teams.

        Uses the exhaustive search for a 10-player lobby and falls back to the
        random search for other sizes.

        Returns:
            Best assignment, or None if neither strategy applies
        """
        result = self.best_exact_10(players, pair_counts)
        strategy = "exact"
        if result is None:
            result = self.best_random(players, pair_counts=pair_counts)
            strategy = "random"

        if result is None:
            logger.info(
                f"Cannot balance {len(players)} players "
                f"(need {LOBBY_READY_THRESHOLD} for exact, {MIN_RANDOM_PLAYERS}+ for random)"
            )
            return None

        logger.info(f"SELECTED ({strategy}): {result}")
        return result
