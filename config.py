"""Global configuration values."""

import os
from dataclasses import dataclass

# Attempts the greedy draw gets before giving up
MAX_MATCH_ATTEMPTS = int(os.environ.get("MAX_MATCH_ATTEMPTS", "100"))

# Minimum named participants the generator page accepts (the matcher itself needs 2)
MIN_PARTICIPANTS = int(os.environ.get("MIN_PARTICIPANTS", "3"))

# Run an exhaustive bipartite-matching search once the greedy attempts are used up
MATCH_COMPLETE_FALLBACK = os.environ.get("MATCH_COMPLETE_FALLBACK", "true").lower() in ("1", "true", "yes")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

SECRET_KEY = os.environ.get("SECRET_KEY", "secret-santa-dev-key")
MAX_CONTENT_LENGTH = 1 * 1024 * 1024  # 1MB max request body
PORT = int(os.environ.get("PORT", "5000"))


@dataclass(frozen=True)
class MatchSettings:
    """Knobs for a single draw, passed to the matcher by value."""
    max_attempts: int = MAX_MATCH_ATTEMPTS
    complete_fallback: bool = MATCH_COMPLETE_FALLBACK
