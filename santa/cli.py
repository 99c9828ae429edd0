from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .models import Exclusion, ForcedAssignment, Participant
from .services.match_service import MatchService
from .services.rules_service import check_preconditions, prune_rules
from .services.share_service import build_exchange, encode_exchange
from config import MAX_MATCH_ATTEMPTS, MIN_PARTICIPANTS, MATCH_COMPLETE_FALLBACK, MatchSettings


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Draw Secret Santa matches from a JSON file of participants and rules."
    )
    parser.add_argument(
        "draw_file",
        type=Path,
        help="JSON file with 'participants', optional 'exclusions' and 'forcedAssignments'",
    )
    parser.add_argument(
        "--attempts",
        type=int,
        default=MAX_MATCH_ATTEMPTS,
        help=f"Random attempts before giving up (default: {MAX_MATCH_ATTEMPTS})",
    )
    parser.add_argument(
        "--no-fallback",
        action="store_true",
        help="Skip the exhaustive search after the random attempts run out",
    )
    parser.add_argument("--share", action="store_true", help="Also print a share token for the result")
    parser.add_argument("--event-details", default="", help="Message shown on every card (with --share)")
    parser.add_argument("--reveal-date", default="", help="Reveal date stored in the share token")
    return parser.parse_args(argv)


def load_draw_file(path: Path) -> tuple[list[Participant], list[Exclusion], list[ForcedAssignment]]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    participants = [Participant.from_dict(p) for p in data.get("participants", [])]
    exclusions = [Exclusion.from_dict(e) for e in data.get("exclusions", [])]
    assignments = [ForcedAssignment.from_dict(a) for a in data.get("forcedAssignments", [])]
    return participants, exclusions, assignments


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        participants, exclusions, assignments = load_draw_file(args.draw_file)
    except (OSError, json.JSONDecodeError, AttributeError) as e:
        print(f"Could not read {args.draw_file}: {e}", file=sys.stderr)
        return 2

    problems = check_preconditions(
        participants, exclusions, assignments, min_participants=MIN_PARTICIPANTS
    )
    if problems:
        for problem in problems:
            print(f"- {problem}", file=sys.stderr)
        return 2

    exclusions, assignments = prune_rules(participants, exclusions, assignments)
    settings = MatchSettings(
        max_attempts=args.attempts,
        complete_fallback=MATCH_COMPLETE_FALLBACK and not args.no_fallback,
    )
    result = MatchService(settings=settings).generate(participants, exclusions, assignments)
    if not result.success:
        print(result.message, file=sys.stderr)
        return 1

    for match in result.matches:
        print(f"{match.giver.name} -> {match.receiver.name}")

    if args.share:
        named = [p for p in participants if p.is_named]
        exchange = build_exchange(
            named,
            result.matches,
            event_details=args.event_details,
            reveal_date=args.reveal_date,
        )
        print()
        print(encode_exchange(exchange))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
