"""Public ticket identifier format: TKT-0001, TKT-0002, ..."""

from __future__ import annotations

import re

TICKET_PREFIX = "TKT-"
TICKET_NUMBER_WIDTH = 4

_TICKET_ID_RE = re.compile(r"^TKT-(\d{4,})$")


def format_ticket_id(number: int) -> str:
    """Format a sequence value as a public ticket id.

    Numbers wider than four digits are kept whole (TKT-10000), never truncated.
    """
    if number < 1:
        raise ValueError(f"Ticket numbers start at 1, got {number}")
    return f"{TICKET_PREFIX}{number:0{TICKET_NUMBER_WIDTH}d}"


def parse_ticket_number(ticket_id: str) -> int | None:
    """Return the numeric part of a public ticket id, or None if malformed."""
    match = _TICKET_ID_RE.match((ticket_id or "").strip())
    return int(match.group(1)) if match else None
