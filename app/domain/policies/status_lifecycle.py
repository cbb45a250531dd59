"""StatusLifecycle — ticket status values, progress indicator, department updates.

Transitions are unrestricted: department staff may move a ticket from any
state to any other, including Resolved back to Open, to correct mistakes.
"""

from __future__ import annotations

from app.domain.value_objects.enums import Team, TicketStatus

PROGRESS_BY_STATUS: dict[TicketStatus, int] = {
    TicketStatus.OPEN: 0,
    TicketStatus.IN_PROGRESS: 60,
    TicketStatus.RESOLVED: 100,
}

INITIAL_STATUS = TicketStatus.OPEN

STATUS_MAP: dict[str, TicketStatus] = {s.value.lower(): s for s in TicketStatus}
TEAM_MAP: dict[str, Team] = {t.value.lower(): t for t in Team}


def progress_for(status: TicketStatus) -> int:
    """Progress percentage shown to citizens and the dashboard."""
    return PROGRESS_BY_STATUS[status]


def parse_status(raw: str | None) -> TicketStatus:
    """Map a submitted status string to TicketStatus.

    Raises:
        ValueError: if the value is blank or not a known status.
    """
    status = STATUS_MAP.get((raw or "").strip().lower())
    if status is None:
        raise ValueError(f"Unknown ticket status: {raw!r}")
    return status


def parse_team(raw: str | None) -> Team | None:
    """Map a submitted team string to Team. Blank means "unassigned".

    Raises:
        ValueError: if the value is not blank and not a known team.
    """
    cleaned = (raw or "").strip()
    if not cleaned:
        return None
    team = TEAM_MAP.get(cleaned.lower())
    if team is None:
        raise ValueError(f"Unknown team: {raw!r}")
    return team
