"""Port interface for ticket persistence."""

from abc import ABC, abstractmethod

from app.domain.entities.ticket import Ticket
from app.domain.value_objects.enums import Team, TicketStatus


class TicketRepository(ABC):
    @abstractmethod
    async def save(self, ticket: Ticket) -> Ticket:
        """Insert a fully numbered ticket inside the current transaction.

        Raises:
            AllocationConflict: if the ticket_id is already taken.
        """
        ...

    @abstractmethod
    async def get_by_ticket_id(self, ticket_id: str) -> Ticket | None:
        ...

    @abstractmethod
    async def get_all(self) -> list[Ticket]:
        """All tickets, newest first."""
        ...

    @abstractmethod
    async def get_by_submitter(self, submitter_id: str) -> list[Ticket]:
        """Tickets of one submitter, newest first."""
        ...

    @abstractmethod
    async def update_status(
        self, ticket_id: str, status: TicketStatus, assigned_team: Team | None
    ) -> Ticket | None:
        """Change status and assigned team only. Returns None if no such ticket."""
        ...
