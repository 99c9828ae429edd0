"""Service layer - Business logic modules.

Each service module has a clear interface and can be developed/tested independently.
"""

from .match_service import MatchService, generate_matches
from .participant_service import eligible_participants, find_duplicate_names, parse_bulk_names
from .rules_service import RuleError, add_assignment, add_exclusion, check_preconditions, prune_rules
from .share_service import ExchangeData, ShareTokenError, decode_exchange, encode_exchange

__all__ = [
    "MatchService",
    "generate_matches",
    "eligible_participants",
    "find_duplicate_names",
    "parse_bulk_names",
    "RuleError",
    "add_assignment",
    "add_exclusion",
    "check_preconditions",
    "prune_rules",
    "ExchangeData",
    "ShareTokenError",
    "decode_exchange",
    "encode_exchange",
]
