"""
Teammate pair counting over recent match history.
"""

import itertools
import logging
from collections.abc import Iterable, Sequence
from typing import Any

from domain.models.match_record import MatchRecord

logger = logging.getLogger("balance_bot.domain.pair_history")

PairKey = tuple[str, str]
PairCounts = dict[PairKey, int]


def pair_key(a: str, b: str) -> PairKey:
    """Order-independent key for a pair of player ids."""
    return (a, b) if a <= b else (b, a)


def get_pair_count(pair_counts: PairCounts, a: str, b: str) -> int:
    """Times the pair shared a team in the window (0 if never)."""
    return pair_counts.get(pair_key(a, b), 0)


def _add_team_pairs(pair_counts: PairCounts, team_ids: Iterable[str]) -> None:
    for a, b in itertools.combinations(team_ids, 2):
        if a == b:
            continue
        key = pair_key(a, b)
        pair_counts[key] = pair_counts.get(key, 0) + 1


def build_pair_counts(
    history: Sequence[MatchRecord | dict[str, Any]],
    lookback: int,
) -> PairCounts:
    """
    Count same-team occurrences of each player pair in recent matches.

    Args:
        history: Match records, newest first. Stored dicts are accepted too.
        lookback: Number of most recent records to consider

    Returns:
        Mapping from pair_key to count; pairs never teamed are absent.
    """
    pair_counts: PairCounts = {}
    if lookback <= 0:
        return pair_counts

    for entry in history[:lookback]:
        record = entry if isinstance(entry, MatchRecord) else MatchRecord.from_dict(entry)
        if not record.has_player_ids:
            logger.debug(f"Skipping legacy match record {record.match_id!r} without player ids")
            continue
        # Only same-team co-occurrence counts; never pairs across A and B
        _add_team_pairs(pair_counts, record.team_a_ids or ())
        _add_team_pairs(pair_counts, record.team_b_ids or ())

    return pair_counts
