"""
Detects players who switched sides between two consecutive assignments.
"""

from domain.models.assignment import TEAM_A, TEAM_B, Assignment
from domain.models.player import RatedPlayer

KEY_BY_ID = "id"
KEY_BY_NAME = "name"


def _player_key(player: RatedPlayer, key: str) -> str:
    if key == KEY_BY_ID:
        return player.player_id
    if key == KEY_BY_NAME:
        return player.name
    raise ValueError(f"Unknown change key: {key!r}")


def _sides(assignment: Assignment, key: str) -> dict[str, set[str]]:
    # A set per key: duplicate display names can sit on both teams
    sides: dict[str, set[str]] = {}
    for p in assignment.team_a:
        sides.setdefault(_player_key(p, key), set()).add(TEAM_A)
    for p in assignment.team_b:
        sides.setdefault(_player_key(p, key), set()).add(TEAM_B)
    return sides


def detect_changes(
    previous: Assignment | None,
    current: Assignment,
    key: str = KEY_BY_ID,
) -> dict[str, bool]:
    """
    Flag each player of `current` who changed team since `previous`.

    Args:
        previous: The preceding assignment, or None if there is none
        current: The new assignment
        key: "id" to match players by player id, "name" by display name.
            Name matching conflates players sharing a display name.

    Returns:
        Mapping from player id (or name) to True if the player switched sides.
        Empty when there is no previous assignment.
    """
    if previous is None:
        return {}

    before = _sides(previous, key)
    now = _sides(current, key)
    changes: dict[str, bool] = {}
    for player_key, now_sides in now.items():
        was_sides = before.get(player_key, set())
        changes[player_key] = (TEAM_A in was_sides and TEAM_B in now_sides) or (
            TEAM_B in was_sides and TEAM_A in now_sides
        )
    return changes


def changed_players(previous: Assignment | None, current: Assignment) -> list[RatedPlayer]:
    """Players of `current` who switched sides, in team order."""
    changes = detect_changes(previous, current)
    return [p for p in current.players if changes.get(p.player_id)]
