"""Ticket entity — a persisted, triaged citizen complaint."""

from dataclasses import dataclass
from datetime import datetime

from app.domain.policies.status_lifecycle import progress_for
from app.domain.value_objects.enums import Category, Priority, Team, TicketStatus
from app.domain.value_objects.geo_point import GeoPoint


@dataclass
class Ticket:
    id: int | None
    ticket_id: str | None
    citizen_message: str
    category: Category
    location: str
    priority: Priority
    summary: str = ""
    status: TicketStatus = TicketStatus.OPEN
    assigned_team: Team | None = None
    photo_ref: str | None = None
    photo_analysis: str | None = None
    fallback_used: bool = False
    submitter_id: str | None = None
    geo_location: GeoPoint | None = None
    created_at: datetime | None = None

    @property
    def progress(self) -> int:
        return progress_for(self.status)

    def is_numbered(self) -> bool:
        return self.ticket_id is not None

    def is_resolved(self) -> bool:
        return self.status == TicketStatus.RESOLVED

    def has_coordinates(self) -> bool:
        return self.geo_location is not None
