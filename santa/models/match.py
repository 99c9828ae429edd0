"""Match data models.

Pure data structures for draw results.
"""

from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field
from enum import Enum
from typing import Any

from santa.models.participant import Participant


class FailureReason(Enum):
    """Why a draw produced no assignment set."""
    INFEASIBLE = "infeasible"
    INSUFFICIENT_PARTICIPANTS = "insufficient_participants"
    TOO_MANY_ASSIGNMENTS = "too_many_assignments"


FAILURE_MESSAGES = {
    FailureReason.INFEASIBLE: (
        "Could not generate valid matches with the current rules. "
        "Try removing some exclusions or assignments."
    ),
    FailureReason.INSUFFICIENT_PARTICIPANTS: "At least 2 named participants are needed to draw matches.",
    FailureReason.TOO_MANY_ASSIGNMENTS: "There are more specific pairs than participants.",
}


@dataclass(frozen=True)
class Match:
    """One giver and the person they buy for."""
    giver: Participant
    receiver: Participant

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "giver": self.giver.to_dict(),
            "receiver": self.receiver.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Match":
        """Create from dictionary."""
        return cls(
            giver=Participant.from_dict(data.get("giver", {})),
            receiver=Participant.from_dict(data.get("receiver", {})),
        )


@dataclass
class MatchResult:
    """Outcome of a draw: a complete assignment set or a failure reason."""
    matches: list[Match] = dataclass_field(default_factory=list)
    failure: FailureReason | None = None
    attempts: int = 0
    used_fallback: bool = False

    @property
    def success(self) -> bool:
        return self.failure is None

    @property
    def message(self) -> str:
        if self.failure is None:
            return ""
        return FAILURE_MESSAGES[self.failure]

    @classmethod
    def failed(cls, reason: FailureReason, attempts: int = 0) -> "MatchResult":
        return cls(matches=[], failure=reason, attempts=attempts)

    def as_id_pairs(self) -> list[tuple[str, str]]:
        """Giver/receiver ids in draw order."""
        return [(m.giver.id, m.receiver.id) for m in self.matches]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data: dict[str, Any] = {
            "success": self.success,
            "attempts": self.attempts,
        }
        if self.success:
            data["matches"] = [m.to_dict() for m in self.matches]
            data["usedFallback"] = self.used_fallback
        else:
            data["reason"] = self.failure.value
            data["error"] = self.message
        return data
