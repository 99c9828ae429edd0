"""Data models - Pure data structures with no business logic."""

from .participant import Participant, Exclusion, ForcedAssignment
from .match import FailureReason, Match, MatchResult

__all__ = [
    "Participant",
    "Exclusion",
    "ForcedAssignment",
    "FailureReason",
    "Match",
    "MatchResult",
]
