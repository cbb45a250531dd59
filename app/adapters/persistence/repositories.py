"""SQLAlchemy repository implementations."""

from __future__ import annotations

import logging

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.models import TicketModel, TicketSequenceModel
from app.application.ports.ticket_repo import TicketRepository
from app.application.ports.ticket_sequence_repo import (
    TICKET_SEQUENCE,
    TicketSequenceRepository,
)
from app.application.ports.unit_of_work import UnitOfWork
from app.domain.entities.ticket import Ticket
from app.domain.exceptions import AllocationConflict
from app.domain.value_objects.enums import Category, Priority, Team, TicketStatus
from app.domain.value_objects.geo_point import GeoPoint
from app.domain.value_objects.ticket_number import parse_ticket_number

logger = logging.getLogger(__name__)

# ─── Mappers ─────────────────────────────────────────────────────────


def _ticket_to_domain(m: TicketModel) -> Ticket:
    location = None
    if m.lat is not None and m.lng is not None:
        location = GeoPoint(latitude=m.lat, longitude=m.lng)
    return Ticket(
        id=m.id,
        ticket_id=m.ticket_id,
        citizen_message=m.citizen_message,
        category=Category(m.category),
        location=m.location,
        priority=Priority(m.priority),
        summary=m.summary,
        status=TicketStatus(m.status),
        assigned_team=Team(m.assigned_team) if m.assigned_team else None,
        photo_ref=m.photo_ref,
        photo_analysis=m.photo_analysis,
        fallback_used=m.fallback_used,
        submitter_id=m.submitter_id,
        geo_location=location,
        created_at=m.created_at,
    )


def _newest_first(stmt):
    return stmt.order_by(TicketModel.created_at.desc(), TicketModel.id.desc())


async def highest_ticket_number(session: AsyncSession) -> int:
    """Numeric part of the highest stored ticket id, 0 if there are none."""
    result = await session.execute(
        select(TicketModel.ticket_id)
        .order_by(func.length(TicketModel.ticket_id).desc(), TicketModel.ticket_id.desc())
        .limit(1)
    )
    last = result.scalar_one_or_none()
    return (parse_ticket_number(last) or 0) if last else 0


# ─── Repositories ────────────────────────────────────────────────────


class SqlTicketRepository(TicketRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, ticket: Ticket) -> Ticket:
        m = TicketModel(
            ticket_id=ticket.ticket_id,
            citizen_message=ticket.citizen_message,
            category=ticket.category.value,
            location=ticket.location,
            priority=ticket.priority.value,
            summary=ticket.summary,
            status=ticket.status.value,
            assigned_team=ticket.assigned_team.value if ticket.assigned_team else None,
            photo_ref=ticket.photo_ref,
            photo_analysis=ticket.photo_analysis,
            fallback_used=ticket.fallback_used,
            submitter_id=ticket.submitter_id,
            lat=ticket.geo_location.latitude if ticket.geo_location else None,
            lng=ticket.geo_location.longitude if ticket.geo_location else None,
        )
        self._s.add(m)
        try:
            await self._s.flush()
        except IntegrityError as e:
            raise AllocationConflict(f"Ticket id {ticket.ticket_id} already taken") from e
        ticket.id = m.id
        ticket.created_at = m.created_at
        return ticket

    async def get_by_ticket_id(self, ticket_id: str) -> Ticket | None:
        result = await self._s.execute(
            select(TicketModel)
            .where(TicketModel.ticket_id == ticket_id)
            .execution_options(populate_existing=True)
        )
        m = result.scalar_one_or_none()
        return _ticket_to_domain(m) if m else None

    async def get_all(self) -> list[Ticket]:
        result = await self._s.execute(_newest_first(select(TicketModel)))
        return [_ticket_to_domain(m) for m in result.scalars()]

    async def get_by_submitter(self, submitter_id: str) -> list[Ticket]:
        result = await self._s.execute(
            _newest_first(select(TicketModel).where(TicketModel.submitter_id == submitter_id))
        )
        return [_ticket_to_domain(m) for m in result.scalars()]

    async def update_status(
        self, ticket_id: str, status: TicketStatus, assigned_team: Team | None
    ) -> Ticket | None:
        result = await self._s.execute(
            update(TicketModel)
            .where(TicketModel.ticket_id == ticket_id)
            .values(
                status=status.value,
                assigned_team=assigned_team.value if assigned_team else None,
            )
            .returning(TicketModel.id)
            .execution_options(synchronize_session=False)
        )
        if result.scalar_one_or_none() is None:
            return None
        await self._s.flush()
        return await self.get_by_ticket_id(ticket_id)


class SqlTicketSequenceRepository(TicketSequenceRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def next_value(self, name: str = TICKET_SEQUENCE) -> int:
        # UPDATE takes the row lock; concurrent allocators wait here until the holder commits.
        result = await self._s.execute(
            update(TicketSequenceModel)
            .where(TicketSequenceModel.name == name)
            .values(value=TicketSequenceModel.value + 1, updated_at=func.now())
            .returning(TicketSequenceModel.value)
            .execution_options(synchronize_session=False)
        )
        value = result.scalar_one_or_none()
        if value is not None:
            return value

        # Missing row: continue after the highest ticket number already stored.
        start = await highest_ticket_number(self._s) + 1
        self._s.add(TicketSequenceModel(name=name, value=start))
        try:
            await self._s.flush()
        except IntegrityError as e:
            raise AllocationConflict(f"Sequence {name!r} created concurrently") from e
        return start

    async def resync(self, name: str = TICKET_SEQUENCE) -> None:
        highest = await highest_ticket_number(self._s)
        result = await self._s.execute(
            update(TicketSequenceModel)
            .where(TicketSequenceModel.name == name, TicketSequenceModel.value < highest)
            .values(value=highest, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount:
            logger.warning("Sequence %r was behind stored tickets, moved to %d", name, highest)


class SqlUnitOfWork(UnitOfWork):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def commit(self) -> None:
        try:
            await self._s.commit()
        except IntegrityError as e:
            raise AllocationConflict("Unique constraint violated on commit") from e

    async def rollback(self) -> None:
        await self._s.rollback()
