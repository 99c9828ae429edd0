"""Match Service - Secret Santa draw.

This module handles:
- Seeding forced giver/receiver pairs
- Randomized greedy drawing of the remaining pairs, retried with fresh shuffles
- An exhaustive bipartite-matching search once the greedy attempts are used up

Interface Contract:
- generate(participants, exclusions, forced_assignments) -> MatchResult
- A draw that cannot be completed is a MatchResult with success=False,
  never an exception
- Dangling ids in rules are ignored
"""

from __future__ import annotations

import logging
import random
from typing import Iterable

import networkx as nx
from networkx.algorithms import bipartite

from config import MatchSettings
from santa.models import (
    Exclusion,
    FailureReason,
    ForcedAssignment,
    Match,
    MatchResult,
    Participant,
)

logger = logging.getLogger(__name__)

MIN_DRAW_SIZE = 2


class MatchService:
    """Service for drawing giver/receiver pairs."""

    def __init__(self, settings: MatchSettings | None = None, rng: random.Random | None = None):
        """Initialize with optional settings and random source.

        Args:
            settings: Attempt ceiling and fallback switch. If None, uses config defaults.
            rng: Random source. If None, every draw gets a fresh ``random.Random``.
        """
        self.settings = settings or MatchSettings()
        self._rng = rng

    def generate(
        self,
        participants: Iterable[Participant],
        exclusions: Iterable[Exclusion] = (),
        forced_assignments: Iterable[ForcedAssignment] = (),
    ) -> MatchResult:
        """Draw a complete assignment set.

        Args:
            participants: Roster in input order. Blank-named rows are skipped.
            exclusions: Pairs who must not draw each other.
            forced_assignments: Pairs fixed in advance.

        Returns:
            MatchResult: Every named participant once as giver and once as
            receiver, or a failure reason.
        """
        rng = self._rng or random.Random()
        active = _active_roster(participants)
        by_id = {p.id: p for p in active}
        # Pairs pointing at people no longer on the roster are ignored
        forced = [
            fa for fa in forced_assignments
            if fa.giver_id in by_id and fa.receiver_id in by_id
        ]

        if len(active) < MIN_DRAW_SIZE:
            logger.info("[match] not enough participants: %d", len(active))
            return MatchResult.failed(FailureReason.INSUFFICIENT_PARTICIPANTS)
        if len(forced) > len(active):
            logger.info("[match] forced=%d exceeds participants=%d", len(forced), len(active))
            return MatchResult.failed(FailureReason.TOO_MANY_ASSIGNMENTS)

        excluded = _exclusion_keys(exclusions, by_id)

        seeded: list[Match] = []
        used_givers: set[str] = set()
        used_receivers: set[str] = set()
        for fa in forced:
            giver = by_id.get(fa.giver_id)
            receiver = by_id.get(fa.receiver_id)
            if giver is None or receiver is None or giver.id == receiver.id:
                continue
            if giver.id in used_givers or receiver.id in used_receivers:
                continue
            if frozenset((giver.id, receiver.id)) in excluded:
                logger.info("[match] forced pair %s->%s is excluded", giver.id, receiver.id)
                return MatchResult.failed(FailureReason.INFEASIBLE)
            seeded.append(Match(giver=giver, receiver=receiver))
            used_givers.add(giver.id)
            used_receivers.add(receiver.id)

        givers = [p for p in active if p.id not in used_givers]
        receivers = [p for p in active if p.id not in used_receivers]

        attempts = max(1, self.settings.max_attempts)
        for attempt in range(1, attempts + 1):
            drawn = _greedy_attempt(givers, receivers, excluded, rng)
            if drawn is not None:
                logger.info("[match] drawn participants=%d attempts=%d", len(active), attempt)
                return MatchResult(matches=seeded + drawn, attempts=attempt)

        if self.settings.complete_fallback:
            drawn = _complete_search(givers, receivers, excluded, rng)
            if drawn is not None:
                logger.info("[match] greedy exhausted after %d attempts, fallback succeeded", attempts)
                return MatchResult(matches=seeded + drawn, attempts=attempts, used_fallback=True)

        logger.info("[match] infeasible participants=%d attempts=%d", len(active), attempts)
        return MatchResult.failed(FailureReason.INFEASIBLE, attempts=attempts)


def _active_roster(participants: Iterable[Participant]) -> list[Participant]:
    """Named participants in input order, first occurrence of each id."""
    seen: set[str] = set()
    roster = []
    for p in participants:
        if not p.is_named or p.id in seen:
            continue
        seen.add(p.id)
        roster.append(p)
    return roster


def _exclusion_keys(exclusions: Iterable[Exclusion], by_id: dict[str, Participant]) -> set[frozenset[str]]:
    keys = set()
    for ex in exclusions:
        if ex.p1 == ex.p2 or ex.p1 not in by_id or ex.p2 not in by_id:
            continue
        keys.add(ex.key)
    return keys


def _allowed(giver: Participant, receiver: Participant, excluded: set[frozenset[str]]) -> bool:
    return giver.id != receiver.id and frozenset((giver.id, receiver.id)) not in excluded


def _greedy_attempt(
    givers: list[Participant],
    receivers: list[Participant],
    excluded: set[frozenset[str]],
    rng: random.Random,
) -> list[Match] | None:
    """One shuffled pass with no backtracking. None if a giver is left without options."""
    pool = list(receivers)
    rng.shuffle(pool)
    drawn = []
    for giver in givers:
        candidates = [i for i, r in enumerate(pool) if _allowed(giver, r, excluded)]
        if not candidates:
            return None
        receiver = pool.pop(rng.choice(candidates))
        drawn.append(Match(giver=giver, receiver=receiver))
    return drawn


def _complete_search(
    givers: list[Participant],
    receivers: list[Participant],
    excluded: set[frozenset[str]],
    rng: random.Random,
) -> list[Match] | None:
    """Perfect bipartite matching (Hopcroft-Karp) over a graph built in random order.

    Finds an assignment whenever one exists. None means the rules are impossible.
    """
    graph = nx.Graph()
    order = list(range(len(givers)))
    rng.shuffle(order)
    top_nodes = []
    for gi in order:
        options = [ri for ri, r in enumerate(receivers) if _allowed(givers[gi], r, excluded)]
        if not options:
            return None
        rng.shuffle(options)
        node = ("giver", gi)
        top_nodes.append(node)
        graph.add_node(node, bipartite=0)
        graph.add_edges_from((node, ("receiver", ri)) for ri in options)

    matching = bipartite.hopcroft_karp_matching(graph, top_nodes=top_nodes)
    if any(node not in matching for node in top_nodes):
        return None
    return [
        Match(giver=g, receiver=receivers[matching[("giver", gi)][1]])
        for gi, g in enumerate(givers)
    ]


def generate_matches(
    participants: Iterable[Participant],
    exclusions: Iterable[Exclusion] = (),
    forced_assignments: Iterable[ForcedAssignment] = (),
    *,
    settings: MatchSettings | None = None,
    rng: random.Random | None = None,
) -> MatchResult:
    """Draw matches with a throwaway MatchService."""
    return MatchService(settings=settings, rng=rng).generate(participants, exclusions, forced_assignments)
