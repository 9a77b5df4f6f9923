"""
Results - Outcomes of engine operations.

Nothing inside the simulation is fatal. Anomalies degrade to
"no state change" and are reported through these result objects
instead of being raised to the caller.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .grid import GridPosition


class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_MOVE_SUBMISSION = "INVALID_MOVE_SUBMISSION"
    INSUFFICIENT_PLATFORM = "INSUFFICIENT_PLATFORM"
    NO_LEGAL_MOVE = "NO_LEGAL_MOVE"
    GAME_OVER = "GAME_OVER"


@dataclass
class SubmissionResult:
    """
    Result of submitting the human move.

    A failed submission leaves the previously submitted move in place.
    """
    success: bool
    move: GridPosition | None = None
    error: str | None = None
    error_code: ErrorCode | None = None

    @classmethod
    def failure(cls, error: str, error_code: ErrorCode = ErrorCode.INVALID_MOVE_SUBMISSION) -> SubmissionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def accepted(cls, move: GridPosition | None) -> SubmissionResult:
        return cls(success=True, move=move)


@dataclass
class MarkResult:
    """Result of marking tiles unstable at the start of a turn."""
    requested: int
    marked: list[GridPosition] = field(default_factory=list)
    error_code: ErrorCode | None = None

    @property
    def complete(self) -> bool:
        return len(self.marked) >= self.requested
