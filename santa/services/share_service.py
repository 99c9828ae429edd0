"""Share Service - Exchange links that carry the whole draw.

A finished exchange is stored in the link itself, no server record:
JSON -> zlib deflate -> URL-safe base64 with the '=' padding stripped.

Interface Contract:
- build_exchange(participants, matches, ...) -> ExchangeData
- encode_exchange(data) -> str
- decode_exchange(token) -> ExchangeData
- Decoding raises ShareTokenError on any malformed token
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import zlib
from dataclasses import dataclass, field as dataclass_field
from typing import Any, Iterable

from santa.models import Match, Participant

logger = logging.getLogger(__name__)


class ShareTokenError(Exception):
    """Raised when a share token cannot be built or read."""
    pass


class UnknownGiverError(ShareTokenError):
    """Raised when a reveal asks for a giver the exchange does not have."""
    pass


@dataclass
class ExchangeData:
    """Compact exchange payload. Participants are referenced by list position."""
    participants: list[Participant] = dataclass_field(default_factory=list)
    pairs: list[tuple[int, int]] = dataclass_field(default_factory=list)
    event_details: str = ""
    reveal_date: str = ""
    style: dict[str, Any] = dataclass_field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the short-key wire form."""
        data: dict[str, Any] = {
            "p": [{"name": p.name, "notes": p.notes, "budget": p.budget} for p in self.participants],
            "m": [{"g": g, "r": r} for g, r in self.pairs],
        }
        if self.style:
            data["style"] = self.style
        if self.event_details:
            data["e"] = self.event_details
        if self.reveal_date:
            data["rd"] = self.reveal_date
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExchangeData":
        """Create from the short-key wire form."""
        participants = [
            Participant(
                id=str(i),
                name=str(p.get("name") or ""),
                notes=str(p.get("notes") or ""),
                budget=str(p.get("budget") or ""),
            )
            for i, p in enumerate(data.get("p", []))
        ]
        pairs = [(int(m["g"]), int(m["r"])) for m in data.get("m", [])]
        return cls(
            participants=participants,
            pairs=pairs,
            event_details=str(data.get("e") or ""),
            reveal_date=str(data.get("rd") or ""),
            style=data.get("style") or {},
        )


def build_exchange(
    participants: Iterable[Participant],
    matches: Iterable[Match],
    *,
    event_details: str = "",
    reveal_date: str = "",
    style: dict[str, Any] | None = None,
) -> ExchangeData:
    """Index matches against the participant list.

    Raises:
        ShareTokenError: If a match names someone not in ``participants``
    """
    roster = list(participants)
    index_of = {p.id: i for i, p in enumerate(roster)}
    pairs = []
    for m in matches:
        if m.giver.id not in index_of or m.receiver.id not in index_of:
            raise ShareTokenError(f"Match {m.giver.name} -> {m.receiver.name} is not on the roster")
        pairs.append((index_of[m.giver.id], index_of[m.receiver.id]))
    return ExchangeData(
        participants=roster,
        pairs=pairs,
        event_details=event_details,
        reveal_date=reveal_date,
        style=dict(style or {}),
    )


def encode_exchange(data: ExchangeData) -> str:
    """Compress an exchange into a URL-safe token."""
    raw = json.dumps(data.to_dict(), ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    token = base64.urlsafe_b64encode(zlib.compress(raw)).decode("ascii").rstrip("=")
    logger.info("[share] encoded participants=%d token_len=%d", len(data.participants), len(token))
    return token


def decode_exchange(token: str) -> ExchangeData:
    """Read a token produced by ``encode_exchange``."""
    token = (token or "").strip()
    if not token:
        raise ShareTokenError("Share token is empty")
    padded = token + "=" * (-len(token) % 4)
    try:
        raw = zlib.decompress(base64.urlsafe_b64decode(padded))
        payload = json.loads(raw.decode("utf-8"))
    except (binascii.Error, zlib.error, UnicodeDecodeError, ValueError) as e:
        logger.info("[share] decode failed: %s", e)
        raise ShareTokenError(f"Invalid share token: {e}") from e
    if not isinstance(payload, dict):
        raise ShareTokenError("Invalid share token: payload is not an object")
    try:
        data = ExchangeData.from_dict(payload)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ShareTokenError(f"Invalid share token: {e}") from e

    size = len(data.participants)
    if any(not (0 <= g < size and 0 <= r < size) for g, r in data.pairs):
        raise ShareTokenError("Invalid share token: match index out of range")
    return data


def lookup_match(data: ExchangeData, giver_index: int) -> Match:
    """The reveal for one giver."""
    for g, r in data.pairs:
        if g == giver_index:
            return Match(giver=data.participants[g], receiver=data.participants[r])
    raise UnknownGiverError(f"No match for participant {giver_index}")
