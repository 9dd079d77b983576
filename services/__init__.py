"""
Application services layer.

Services own roster/history state and orchestrate the domain services.
"""

from services.match_service import LobbyState, MatchService, ShuffleOutcome
from services.player_service import PlayerService, StreakLeaders

# Result type for consistent error handling
from services.result import Result

__all__ = [
    "LobbyState",
    "MatchService",
    "PlayerService",
    "Result",
    "ShuffleOutcome",
    "StreakLeaders",
]
