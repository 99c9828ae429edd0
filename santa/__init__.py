"""Secret Santa match generator package."""

from .models import (
    Exclusion,
    FailureReason,
    ForcedAssignment,
    Match,
    MatchResult,
    Participant,
)
from .services import MatchService, generate_matches

__all__ = [
    "Participant",
    "Exclusion",
    "ForcedAssignment",
    "FailureReason",
    "Match",
    "MatchResult",
    "MatchService",
    "generate_matches",
]
