"""TicketAllocator — numbers and stores a ticket in one transaction.

The sequence increment and the ticket insert share a single commit, so a
ticket is either durable with its TKT-#### identifier or absent, and a failed
attempt gives its number back instead of burning it.
"""

from __future__ import annotations

import asyncio
import logging

from app.application.ports.ticket_repo import TicketRepository
from app.application.ports.ticket_sequence_repo import (
    TICKET_SEQUENCE,
    TicketSequenceRepository,
)
from app.application.ports.unit_of_work import UnitOfWork
from app.domain.entities.ticket import Ticket
from app.domain.exceptions import AllocationConflict, PersistenceFailure
from app.domain.value_objects.ticket_number import format_ticket_id

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_BACKOFF_SECONDS = 0.05


class TicketAllocator:
    """Assigns the next public ticket id and persists the ticket atomically."""

    def __init__(
        self,
        ticket_repo: TicketRepository,
        sequence_repo: TicketSequenceRepository,
        uow: UnitOfWork,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        backoff_seconds: float = DEFAULT_BACKOFF_SECONDS,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._tickets = ticket_repo
        self._sequence = sequence_repo
        self._uow = uow
        self._max_attempts = max_attempts
        self._backoff = backoff_seconds

    async def create(self, ticket: Ticket) -> Ticket:
        """Allocate an identifier for *ticket*, insert it and commit.

        Allocation conflicts are retried with exponential backoff and never
        reach the caller. Before each retry the sequence is resynchronized
        past the highest stored ticket number, so a sequence that fell behind
        the table (restored backup, re-seeded row) recovers instead of
        colliding on the same id again.

        Raises:
            PersistenceFailure: if the ticket cannot be stored, including when
                every retry ended in a conflict.
        """
        if ticket.is_numbered():
            raise ValueError(f"Ticket already numbered: {ticket.ticket_id}")

        for attempt in range(1, self._max_attempts + 1):
            try:
                number = await self._sequence.next_value(TICKET_SEQUENCE)
                ticket.ticket_id = format_ticket_id(number)
                saved = await self._tickets.save(ticket)
                await self._uow.commit()
                logger.info("Ticket %s committed (attempt %d)", saved.ticket_id, attempt)
                return saved

            except AllocationConflict as e:
                await self._rollback(ticket)
                if attempt == self._max_attempts:
                    break
                await self._resync_sequence()
                delay = self._backoff * (2 ** (attempt - 1))
                logger.warning(
                    "Attempt %d/%d: ticket number conflict (%s), retrying in %.3fs",
                    attempt, self._max_attempts, e, delay,
                )
                await asyncio.sleep(delay)

            except PersistenceFailure:
                await self._rollback(ticket)
                raise

            except Exception as e:
                logger.exception("Failed to persist ticket")
                await self._rollback(ticket)
                raise PersistenceFailure(str(e) or e.__class__.__name__) from e

        raise PersistenceFailure(
            f"Could not allocate a ticket id after {self._max_attempts} attempts"
        )

    async def _resync_sequence(self) -> None:
        """Move the sequence past stored tickets so the next attempt gets a free number."""
        try:
            await self._sequence.resync(TICKET_SEQUENCE)
            await self._uow.commit()
        except Exception:
            logger.exception("Sequence resync failed")
            await self._uow.rollback()

    async def _rollback(self, ticket: Ticket) -> None:
        ticket.id = None
        ticket.ticket_id = None
        try:
            await self._uow.rollback()
        except Exception:
            logger.exception("Rollback failed")
