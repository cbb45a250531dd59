"""Pytest configuration and shared fixtures (in-memory fakes for the ports)."""

from __future__ import annotations

import asyncio
import json

import pytest

from app.application.ports.llm_port import LLMPort
from app.application.ports.photo_store_port import PhotoStorePort
from app.application.ports.ticket_repo import TicketRepository
from app.application.ports.ticket_sequence_repo import (
    TICKET_SEQUENCE,
    TicketSequenceRepository,
)
from app.application.ports.unit_of_work import UnitOfWork
from app.domain.entities.complaint import PhotoUpload
from app.domain.entities.ticket import Ticket
from app.domain.exceptions import AllocationConflict, ClassifierUnavailable
from app.domain.value_objects.ticket_number import parse_ticket_number

# ─── LLM ─────────────────────────────────────────────────────────────


class ScriptedLLM(LLMPort):
    """Returns queued answers; an Exception in the queue is raised instead."""

    def __init__(self, text_replies=(), image_replies=()):
        self.text_replies = list(text_replies)
        self.image_replies = list(image_replies)
        self.calls: list[dict] = []

    async def complete(self, instruction, content=None, image=None, json_mode=False):
        self.calls.append(
            {"instruction": instruction, "content": content, "image": image, "json_mode": json_mode}
        )
        queue = self.image_replies if image is not None else self.text_replies
        if not queue:
            raise ClassifierUnavailable("No scripted reply")
        reply = queue.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


# ─── Ticket store ────────────────────────────────────────────────────


class InMemoryTicketStore:
    """Committed state shared by every session, with a row lock on the sequence."""

    def __init__(self):
        self.tickets: dict[str, Ticket] = {}
        self.sequences: dict[str, int] = {TICKET_SEQUENCE: 0}
        self.sequence_lock = asyncio.Lock()
        self.conflicts_to_raise = 0
        self.commit_error: Exception | None = None
        self._next_pk = 1

    def session(self) -> InMemorySession:
        return InMemorySession(self)


class InMemorySession(TicketRepository, TicketSequenceRepository, UnitOfWork):
    def __init__(self, store: InMemoryTicketStore):
        self._store = store
        self._pending: list[Ticket] = []
        self._sequence_updates: dict[str, int] = {}
        self._holds_lock = False
        self.commits = 0
        self.rollbacks = 0

    # sequence
    async def next_value(self, name=TICKET_SEQUENCE):
        if not self._holds_lock:
            await self._store.sequence_lock.acquire()
            self._holds_lock = True
        current = self._sequence_updates.get(name, self._store.sequences.get(name, 0))
        await asyncio.sleep(0)
        self._sequence_updates[name] = current + 1
        return current + 1

    async def resync(self, name=TICKET_SEQUENCE):
        highest = max((parse_ticket_number(tid) or 0 for tid in self._store.tickets), default=0)
        if not self._holds_lock:
            await self._store.sequence_lock.acquire()
            self._holds_lock = True
        current = self._sequence_updates.get(name, self._store.sequences.get(name, 0))
        if current < highest:
            self._sequence_updates[name] = highest

    # tickets
    async def save(self, ticket):
        if self._store.conflicts_to_raise:
            self._store.conflicts_to_raise -= 1
            raise AllocationConflict(f"Ticket id {ticket.ticket_id} already taken")
        if ticket.ticket_id in self._store.tickets or any(
            t.ticket_id == ticket.ticket_id for t in self._pending
        ):
            raise AllocationConflict(f"Ticket id {ticket.ticket_id} already taken")
        ticket.id = self._store._next_pk
        self._store._next_pk += 1
        self._pending.append(ticket)
        return ticket

    async def get_by_ticket_id(self, ticket_id):
        return self._store.tickets.get(ticket_id)

    async def get_all(self):
        return sorted(self._store.tickets.values(), key=lambda t: t.id, reverse=True)

    async def get_by_submitter(self, submitter_id):
        return [t for t in await self.get_all() if t.submitter_id == submitter_id]

    async def update_status(self, ticket_id, status, assigned_team):
        ticket = self._store.tickets.get(ticket_id)
        if ticket is None:
            return None
        ticket.status = status
        ticket.assigned_team = assigned_team
        return ticket

    # unit of work
    async def commit(self):
        if self._store.commit_error is not None:
            raise self._store.commit_error
        for ticket in self._pending:
            self._store.tickets[ticket.ticket_id] = ticket
        self._store.sequences.update(self._sequence_updates)
        self.commits += 1
        self._reset()

    async def rollback(self):
        self.rollbacks += 1
        self._reset()

    def _reset(self):
        self._pending.clear()
        self._sequence_updates.clear()
        if self._holds_lock:
            self._store.sequence_lock.release()
            self._holds_lock = False


# ─── Photos ──────────────────────────────────────────────────────────


class InMemoryPhotoStore(PhotoStorePort):
    def __init__(self, fail: bool = False):
        self.saved: list[PhotoUpload] = []
        self._fail = fail

    async def save(self, photo):
        if self._fail:
            raise OSError("disk full")
        self.saved.append(photo)
        return f"photo-{len(self.saved)}.jpg"


# ─── Fixtures ────────────────────────────────────────────────────────


def classification_json(
    category="Roads & Potholes",
    priority="High",
    summary="Large pothole on the main road",
    location="Main Street",
    thinking=("Pothole mentioned", "Busy road"),
):
    return json.dumps(
        {
            "thinking": list(thinking),
            "category": category,
            "location": location,
            "priority": priority,
            "summary": summary,
        }
    )


@pytest.fixture
def ticket_store():
    return InMemoryTicketStore()


@pytest.fixture
def photo_store():
    return InMemoryPhotoStore()


@pytest.fixture
def failing_photo_store():
    return InMemoryPhotoStore(fail=True)


@pytest.fixture
def make_llm():
    return ScriptedLLM


@pytest.fixture
def classifier_reply():
    return classification_json


@pytest.fixture
def sample_photo():
    return PhotoUpload(content=b"\xff\xd8\xff\xe0fake-jpeg", mime_type="image/jpeg", filename="pothole.jpg")
