"""Rules Service - Exclusion and specific-pair bookkeeping.

This module handles:
- Adding exclusions and forced pairs with the same checks the rule editor applies
- Dropping rules that point at people no longer on the roster
- Listing everything that must be fixed before a draw can start

Interface Contract:
- add_exclusion / add_assignment return a new list or raise RuleError
- check_preconditions returns a list of human-readable problems (empty = ready)
"""

from __future__ import annotations

from typing import Iterable

from config import MIN_PARTICIPANTS
from santa.models import Exclusion, ForcedAssignment, Participant
from santa.services.participant_service import eligible_participants, find_duplicate_names


class RuleError(ValueError):
    """Raised when a rule cannot be added."""
    pass


def add_exclusion(exclusions: list[Exclusion], p1: str, p2: str) -> list[Exclusion]:
    """Return ``exclusions`` with {p1, p2} appended."""
    if not p1 or not p2:
        raise RuleError("Select two people for the exclusion.")
    if p1 == p2:
        raise RuleError("A person cannot be excluded from themselves.")
    if any(ex.involves(p1, p2) for ex in exclusions):
        raise RuleError("This exclusion already exists.")
    return [*exclusions, Exclusion(p1=p1, p2=p2)]


def add_assignment(
    assignments: list[ForcedAssignment],
    giver_id: str,
    receiver_id: str,
) -> list[ForcedAssignment]:
    """Return ``assignments`` with giver -> receiver appended."""
    if not giver_id or not receiver_id:
        raise RuleError("Select both a giver and a receiver.")
    if giver_id == receiver_id:
        raise RuleError("A person cannot be assigned to themselves.")
    if any(a.giver_id == giver_id for a in assignments):
        raise RuleError("This giver has already been assigned.")
    if any(a.receiver_id == receiver_id for a in assignments):
        raise RuleError("This receiver has already been assigned.")
    return [*assignments, ForcedAssignment(giver_id=giver_id, receiver_id=receiver_id)]


def prune_rules(
    participants: Iterable[Participant],
    exclusions: Iterable[Exclusion],
    assignments: Iterable[ForcedAssignment],
) -> tuple[list[Exclusion], list[ForcedAssignment]]:
    """Drop rules with stale ids and repeated exclusions (in either order)."""
    active_ids = {p.id for p in eligible_participants(participants)}

    kept_exclusions = []
    seen_keys = set()
    for ex in exclusions:
        if ex.p1 == ex.p2 or ex.p1 not in active_ids or ex.p2 not in active_ids:
            continue
        if ex.key in seen_keys:
            continue
        seen_keys.add(ex.key)
        kept_exclusions.append(ex)

    kept_assignments = [
        a for a in assignments
        if a.giver_id in active_ids and a.receiver_id in active_ids and a.giver_id != a.receiver_id
    ]
    return kept_exclusions, kept_assignments


def check_preconditions(
    participants: Iterable[Participant],
    exclusions: Iterable[Exclusion] = (),
    assignments: Iterable[ForcedAssignment] = (),
    *,
    min_participants: int = MIN_PARTICIPANTS,
) -> list[str]:
    """Everything the organiser has to fix before drawing."""
    roster = list(participants)
    named = eligible_participants(roster)
    assignments = list(assignments)
    problems = []

    if len(named) < min_participants:
        problems.append(f"You need at least {min_participants} participants to start a gift exchange.")

    duplicates = find_duplicate_names(roster)
    if duplicates:
        names = sorted({p.name.strip() for p in named if p.id in duplicates}, key=str.lower)
        problems.append(f"Each participant needs a unique name. Duplicates: {', '.join(names)}.")

    active_exclusions, active_assignments = prune_rules(named, exclusions, assignments)
    if len(active_assignments) > len(named):
        problems.append("There are more specific pairs than participants.")

    givers = [a.giver_id for a in active_assignments]
    receivers = [a.receiver_id for a in active_assignments]
    if len(set(givers)) != len(givers):
        problems.append("A giver appears in more than one specific pair.")
    if len(set(receivers)) != len(receivers):
        problems.append("A receiver appears in more than one specific pair.")
    if any(a.giver_id == a.receiver_id for a in assignments):
        problems.append("A specific pair assigns someone to themselves.")

    excluded = {ex.key for ex in active_exclusions}
    if any(frozenset((a.giver_id, a.receiver_id)) in excluded for a in active_assignments):
        problems.append("A specific pair conflicts with an exclusion.")

    return problems
