"""
Service return values.

MatchService and PlayerService reject bad lobby operations (wrong player
count, unknown rank, duplicate name, nothing to record) by returning a failed
Result carrying a message and one of the codes in services.error_codes.
Callers branch on truthiness:

    result = match_service.shuffle()
    if not result:
        print(f"Error ({result.error_code}): {result.error}")
    assignment = result.unwrap().assignment
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a lobby operation: a value on success, a message and code on rejection."""

    success: bool
    value: T | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def ok(cls, value: T | None = None) -> "Result[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: str, code: str | None = None) -> "Result[T]":
        return cls(success=False, error=error, error_code=code)

    def __bool__(self) -> bool:
        return self.success

    def unwrap(self) -> T:
        """Return the value of a successful result; raise ValueError for a rejection."""
        if not self.success:
            raise ValueError(f"Lobby operation rejected ({self.error_code}): {self.error}")
        return self.value  # type: ignore
