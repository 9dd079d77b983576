"""
Match history entry domain model.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from domain.models.assignment import TEAM_A, TEAM_B, Assignment


def other_side(side: str) -> str:
    if side == TEAM_A:
        return TEAM_B
    if side == TEAM_B:
        return TEAM_A
    raise ValueError(f"Unknown team side: {side!r}")


def _coerce_int(raw: Any, default: int = 0) -> int:
    if raw is None:
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


def _coerce_str(raw: Any, default: str = "") -> str:
    return default if raw is None else str(raw)


def _coerce_names(raw: Any) -> tuple[str, ...]:
    if not isinstance(raw, (list, tuple)):
        return ()
    return tuple(str(x) for x in raw)


def _optional_ids(raw: Any) -> tuple[str, ...] | None:
    # Anything but a list of ids marks the record as legacy
    if not isinstance(raw, (list, tuple)):
        return None
    return tuple(str(x) for x in raw if x is not None)


@dataclass(frozen=True)
class MatchRecord:
    """
    A recorded match result.

    History is kept newest-first. team_a_ids / team_b_ids are None for
    legacy records that stored display names only; such records are ignored
    when counting teammate pairs.
    """

    match_id: str
    index: int
    recorded_at: str
    winner: str
    rating_a: int
    rating_b: int
    score: int
    team_a_names: tuple[str, ...]
    team_b_names: tuple[str, ...]
    team_a_ids: tuple[str, ...] | None = None
    team_b_ids: tuple[str, ...] | None = None

    @property
    def loser(self) -> str:
        return other_side(self.winner)

    @property
    def has_player_ids(self) -> bool:
        return self.team_a_ids is not None or self.team_b_ids is not None

    @property
    def winning_ids(self) -> tuple[str, ...]:
        ids = self.team_a_ids if self.winner == TEAM_A else self.team_b_ids
        return ids or ()

    @property
    def losing_ids(self) -> tuple[str, ...]:
        ids = self.team_b_ids if self.winner == TEAM_A else self.team_a_ids
        return ids or ()

    @classmethod
    def from_assignment(
        cls,
        assignment: Assignment,
        winner: str,
        index: int,
        *,
        recorded_at: datetime | None = None,
        match_id: str | None = None,
    ) -> "MatchRecord":
        """Build a history entry for the given winning side of an assignment."""
        other_side(winner)  # validates
        when = recorded_at or datetime.now(timezone.utc)
        return cls(
            match_id=match_id or uuid.uuid4().hex,
            index=index,
            recorded_at=when.isoformat(),
            winner=winner,
            rating_a=assignment.rating_a,
            rating_b=assignment.rating_b,
            score=assignment.score,
            team_a_names=tuple(p.name for p in assignment.team_a),
            team_b_names=tuple(p.name for p in assignment.team_b),
            team_a_ids=tuple(assignment.team_a_ids),
            team_b_ids=tuple(assignment.team_b_ids),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MatchRecord":
        """
        Load a record from its stored JSON form.

        Accepts both the stored camelCase shape (teamAIds, mmrA, timeISO, ...)
        and the snake_case field names of this class. Missing, null or
        unparseable fields fall back to defaults; this never raises for a
        dict input.
        """

        def pick(*keys: str) -> Any:
            for key in keys:
                if key in data:
                    return data[key]
            return None

        winner = pick("winner")
        return cls(
            match_id=_coerce_str(pick("match_id", "id")),
            index=_coerce_int(pick("index")),
            recorded_at=_coerce_str(pick("recorded_at", "timeISO")),
            winner=winner if winner in (TEAM_A, TEAM_B) else TEAM_A,
            rating_a=_coerce_int(pick("rating_a", "mmrA")),
            rating_b=_coerce_int(pick("rating_b", "mmrB")),
            score=_coerce_int(pick("score")),
            team_a_names=_coerce_names(pick("team_a_names", "teamA")),
            team_b_names=_coerce_names(pick("team_b_names", "teamB")),
            team_a_ids=_optional_ids(pick("team_a_ids", "teamAIds")),
            team_b_ids=_optional_ids(pick("team_b_ids", "teamBIds")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the stored JSON shape."""
        data: dict[str, Any] = {
            "id": self.match_id,
            "index": self.index,
            "timeISO": self.recorded_at,
            "winner": self.winner,
            "loser": self.loser,
            "mmrA": self.rating_a,
            "mmrB": self.rating_b,
            "score": self.score,
            "teamA": list(self.team_a_names),
            "teamB": list(self.team_b_names),
        }
        if self.team_a_ids is not None:
            data["teamAIds"] = list(self.team_a_ids)
        if self.team_b_ids is not None:
            data["teamBIds"] = list(self.team_b_ids)
        return data
