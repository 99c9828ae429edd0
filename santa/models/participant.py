"""Participant and rule data models.

Pure data structures with no business logic.
Wire keys follow the browser client (camelCase for rule fields).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class Participant:
    """A person taking part in the gift exchange."""
    id: str
    name: str
    notes: str = ""
    budget: str = ""

    @property
    def is_named(self) -> bool:
        """Blank-named rows are placeholders in the roster, not people."""
        return bool(self.name.strip())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "notes": self.notes,
            "budget": self.budget,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Participant":
        """Create from dictionary."""
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name") or ""),
            notes=str(data.get("notes") or ""),
            budget=str(data.get("budget") or ""),
        )


@dataclass(frozen=True)
class Exclusion:
    """Two people who must not draw each other, in either direction."""
    p1: str
    p2: str

    @property
    def key(self) -> frozenset[str]:
        """Order-independent identity of the pair."""
        return frozenset((self.p1, self.p2))

    def involves(self, a: str, b: str) -> bool:
        return self.key == frozenset((a, b))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"p1": self.p1, "p2": self.p2}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Exclusion":
        """Create from dictionary."""
        return cls(p1=str(data.get("p1", "")), p2=str(data.get("p2", "")))


@dataclass(frozen=True)
class ForcedAssignment:
    """A giver who must draw one specific receiver."""
    giver_id: str
    receiver_id: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"giverId": self.giver_id, "receiverId": self.receiver_id}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ForcedAssignment":
        """Create from dictionary (accepts camelCase or snake_case keys)."""
        return cls(
            giver_id=str(data.get("giverId", data.get("giver_id", ""))),
            receiver_id=str(data.get("receiverId", data.get("receiver_id", ""))),
        )
