"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.llm.openai_adapter import OpenAIAdapter
from app.adapters.persistence.database import get_session
from app.adapters.persistence.repositories import (
    SqlTicketRepository,
    SqlTicketSequenceRepository,
    SqlUnitOfWork,
)
from app.adapters.storage.local_photo_store import LocalPhotoStore
from app.application.ports.ticket_repo import TicketRepository
from app.application.use_cases.process_complaint import ProcessComplaintUseCase
from app.application.use_cases.update_ticket import UpdateTicketUseCase
from app.config import settings

# Re-export session dependency
get_db_session = get_session

# Singleton adapters (stateless; the OpenAI client is created on first use)
_llm_adapter = OpenAIAdapter()
_photo_store = LocalPhotoStore()


def get_ticket_repo(session: AsyncSession = Depends(get_session)) -> TicketRepository:
    return SqlTicketRepository(session)


def get_process_complaint_uc(
    session: AsyncSession = Depends(get_session),
) -> ProcessComplaintUseCase:
    return ProcessComplaintUseCase(
        llm=_llm_adapter,
        ticket_repo=SqlTicketRepository(session),
        sequence_repo=SqlTicketSequenceRepository(session),
        uow=SqlUnitOfWork(session),
        photo_store=_photo_store,
        max_attempts=settings.allocation_max_attempts,
        backoff_seconds=settings.allocation_backoff_seconds,
    )


def get_update_ticket_uc(
    session: AsyncSession = Depends(get_session),
) -> UpdateTicketUseCase:
    return UpdateTicketUseCase(
        ticket_repo=SqlTicketRepository(session),
        uow=SqlUnitOfWork(session),
    )


def get_submitter_id(
    x_submitter_id: str | None = Header(default=None, alias="X-Submitter-Id"),
) -> str | None:
    """Opaque submitter identity supplied by the front end, if any."""
    if x_submitter_id is None:
        return None
    return x_submitter_id.strip() or None
