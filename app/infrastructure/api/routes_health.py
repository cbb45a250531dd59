"""Health check endpoint."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.database import get_session
from app.adapters.persistence.models import TicketSequenceModel
from app.application.ports.ticket_sequence_repo import TICKET_SEQUENCE
from app.domain.value_objects.ticket_number import format_ticket_id

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(session: AsyncSession = Depends(get_session)):
    """Check database connectivity and the ticket id sequence.

    A missing sequence row is reported but not fatal: the first submission
    recreates it after the highest stored ticket number.
    """
    try:
        result = await session.execute(
            select(TicketSequenceModel.value).where(TicketSequenceModel.name == TICKET_SEQUENCE)
        )
        last_issued = result.scalar_one_or_none()
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Health check: database unreachable: %s", e)
        return {
            "status": "degraded",
            "database": f"error: {e}",
            "ticket_sequence": "unknown",
            "last_ticket_id": None,
        }

    return {
        "status": "ok",
        "database": "connected",
        "ticket_sequence": "ready" if last_issued is not None else "missing",
        "last_ticket_id": format_ticket_id(last_issued) if last_issued else None,
    }
