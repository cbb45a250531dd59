"""UpdateTicketUseCase — department status / team changes."""

from __future__ import annotations

import logging

from app.application.ports.ticket_repo import TicketRepository
from app.application.ports.unit_of_work import UnitOfWork
from app.domain.entities.ticket import Ticket
from app.domain.exceptions import TicketNotFound
from app.domain.policies.status_lifecycle import parse_status, parse_team

logger = logging.getLogger(__name__)


class UpdateTicketUseCase:
    def __init__(self, ticket_repo: TicketRepository, uow: UnitOfWork):
        self._tickets = ticket_repo
        self._uow = uow

    async def execute(
        self, ticket_id: str, status: str, assigned_team: str | None = None
    ) -> Ticket:
        """Set status and assigned team; nothing else on the ticket changes.

        Raises:
            ValueError: for an unknown status or team.
            TicketNotFound: if no ticket has this identifier.
        """
        new_status = parse_status(status)
        team = parse_team(assigned_team)
        ticket_id = (ticket_id or "").strip()

        ticket = await self._tickets.update_status(ticket_id, new_status, team)
        if ticket is None:
            await self._uow.rollback()
            raise TicketNotFound(ticket_id)

        await self._uow.commit()
        logger.info(
            "Ticket %s → status=%s, team=%s (progress %d%%)",
            ticket_id, new_status.value, team.value if team else None, ticket.progress,
        )
        return ticket
