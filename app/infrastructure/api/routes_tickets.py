"""Ticket endpoints — status lookup, department updates, dashboard lists."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Form, HTTPException, Query

from app.application.ports.ticket_repo import TicketRepository
from app.application.use_cases.update_ticket import UpdateTicketUseCase
from app.domain.entities.ticket import Ticket
from app.domain.exceptions import TicketNotFound
from app.infrastructure.api.dependencies import (
    get_submitter_id,
    get_ticket_repo,
    get_update_ticket_uc,
)

router = APIRouter(tags=["tickets"])


@router.get("/ticket-status")
async def ticket_status(
    ticket_id: str | None = Query(default=None, alias="ticketId"),
    repo: TicketRepository = Depends(get_ticket_repo),
):
    """Look up one ticket by its public identifier."""
    ticket_id = (ticket_id or "").strip()
    if not ticket_id:
        raise HTTPException(status_code=400, detail="No ticket ID")

    ticket = await repo.get_by_ticket_id(ticket_id)
    if ticket is None:
        raise HTTPException(status_code=404, detail="Not found")
    return _serialize_ticket(ticket)


@router.post("/update-ticket")
async def update_ticket(
    ticket_id: str = Form(...),
    status: str = Form(...),
    assigned_team: str | None = Form(default=None),
    uc: UpdateTicketUseCase = Depends(get_update_ticket_uc),
):
    """Department action: change status and/or assigned team."""
    try:
        ticket = await uc.execute(ticket_id, status, assigned_team)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TicketNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _serialize_ticket(ticket)


@router.get("/tickets")
async def list_tickets(repo: TicketRepository = Depends(get_ticket_repo)):
    """All tickets, newest first."""
    tickets = await repo.get_all()
    return {
        "total": len(tickets),
        "tickets": [_serialize_ticket(t) for t in tickets],
    }


@router.get("/my-complaints")
async def my_complaints(
    submitter_id: str | None = Depends(get_submitter_id),
    repo: TicketRepository = Depends(get_ticket_repo),
):
    """Tickets filed by the caller identified by X-Submitter-Id."""
    tickets = await repo.get_by_submitter(submitter_id) if submitter_id else []
    return {
        "total": len(tickets),
        "tickets": [_serialize_ticket(t) for t in tickets],
    }


def _serialize_ticket(t: Ticket) -> dict:
    """Convert a Ticket to an API response dict."""
    return {
        "ticket_id": t.ticket_id,
        "citizen_message": t.citizen_message,
        "category": t.category.value,
        "location": t.location,
        "priority": t.priority.value,
        "summary": t.summary,
        "status": t.status.value,
        "assigned_team": t.assigned_team.value if t.assigned_team else None,
        "progress": t.progress,
        "photo_ref": t.photo_ref,
        "photo_analysis": t.photo_analysis,
        "fallback_used": t.fallback_used,
        "lat": t.geo_location.latitude if t.geo_location else None,
        "lng": t.geo_location.longitude if t.geo_location else None,
        "created_at": t.created_at.isoformat() if t.created_at else None,
    }
