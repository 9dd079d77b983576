"""
Centralized configuration for the Balanced Shuffle optimizer.
"""

from __future__ import annotations

import os
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _parse_int(env_var: str, default: int) -> int:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_bool(env_var: str, default: bool) -> bool:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


# Lobby sizing
LOBBY_READY_THRESHOLD = _parse_int("LOBBY_READY_THRESHOLD", 10)  # Players required for exact balancing
ROSTER_MAX_PLAYERS = _parse_int("ROSTER_MAX_PLAYERS", 20)
MIN_RANDOM_PLAYERS = _parse_int("MIN_RANDOM_PLAYERS", 6)  # Smaller lobbies are not worth balancing

# Rank-based rating
DEFAULT_RATING = _parse_int("DEFAULT_RATING", 1200)  # Used for unrecognized rank labels

# Streak-based rating adjustment: 2-streak = +/-25, 3 = +/-50, 4 = +/-75, 5+ = +/-100
STREAK_UNIT = _parse_int("STREAK_UNIT", 25)
STREAK_CAP = _parse_int("STREAK_CAP", 100)

# Teammate repeat avoidance
TEAMMATE_LOOKBACK = _parse_int("TEAMMATE_LOOKBACK", 3)  # Most recent matches considered
TEAMMATE_PENALTY = _parse_int("TEAMMATE_PENALTY", 20)  # Per prior same-team occurrence of a pair

SHUFFLER_SETTINGS: dict[str, Any] = {
    "random_iterations": _parse_int("RANDOM_SEARCH_ITERATIONS", 3000),
    "log_top_k": _parse_int("SHUFFLE_LOG_TOP_K", 5),
    "log_candidates": _parse_bool("SHUFFLE_LOG_CANDIDATES", True),
}
