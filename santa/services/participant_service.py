"""Participant Service - Roster helpers used before a draw.

This module handles:
- Filtering out blank placeholder rows
- Spotting duplicate names (case-insensitive, trimmed)
- Bulk-adding participants from pasted text
"""

from __future__ import annotations

import uuid
from collections import defaultdict
from typing import Iterable

from santa.models import Participant


def eligible_participants(participants: Iterable[Participant]) -> list[Participant]:
    """Participants with a non-blank name, in input order."""
    return [p for p in participants if p.is_named]


def normalize_name(name: str) -> str:
    return name.strip().lower()


def find_duplicate_names(participants: Iterable[Participant]) -> set[str]:
    """Ids of named participants whose names collide with another participant's."""
    ids_by_name: dict[str, list[str]] = defaultdict(list)
    for p in eligible_participants(participants):
        ids_by_name[normalize_name(p.name)].append(p.id)
    return {pid for ids in ids_by_name.values() if len(ids) > 1 for pid in ids}


def parse_bulk_names(text: str) -> list[Participant]:
    """One participant per non-empty line, each with a fresh id."""
    names = [line.strip() for line in text.splitlines()]
    return [Participant(id=str(uuid.uuid4()), name=name) for name in names if name]


def merge_bulk_names(existing: list[Participant], text: str) -> list[Participant]:
    """Append bulk-added names, dropping blank placeholder rows from the existing roster."""
    return eligible_participants(existing) + parse_bulk_names(text)
