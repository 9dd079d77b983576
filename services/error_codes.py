"""
Standard error codes for service layer.

Usage:
    from services.error_codes import INSUFFICIENT_PLAYERS
    from services.result import Result

    if len(selected) != 10:
        return Result.fail("Select exactly 10 players", code=INSUFFICIENT_PLAYERS)
"""

# General errors
VALIDATION_ERROR = "validation_error"

# Roster errors
PLAYER_NOT_FOUND = "player_not_found"
PLAYER_ALREADY_EXISTS = "player_already_exists"
ROSTER_FULL = "roster_full"
INVALID_RANK = "invalid_rank"

# Lobby errors
LOBBY_FULL = "lobby_full"
INSUFFICIENT_PLAYERS = "insufficient_players"

# Match errors
NO_PENDING_MATCH = "no_pending_match"
INVALID_RESULT = "invalid_result"
