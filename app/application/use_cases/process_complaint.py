"""ProcessComplaintUseCase — full pipeline: photo → classify → allocate → persist."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from app.application.ports.llm_port import LLMPort
from app.application.ports.photo_store_port import PhotoStorePort
from app.application.ports.ticket_repo import TicketRepository
from app.application.ports.ticket_sequence_repo import TicketSequenceRepository
from app.application.ports.unit_of_work import UnitOfWork
from app.application.use_cases.allocate_ticket import (
    DEFAULT_BACKOFF_SECONDS,
    DEFAULT_MAX_ATTEMPTS,
    TicketAllocator,
)
from app.application.use_cases.analyze_photo import (
    PHOTO_ANALYSIS_UNAVAILABLE,
    AnalyzePhotoUseCase,
    augment_with_analysis,
)
from app.application.use_cases.classify_complaint import ClassifyComplaintUseCase
from app.domain.entities.classification import ClassificationResult
from app.domain.entities.complaint import Complaint
from app.domain.entities.ticket import Ticket
from app.domain.exceptions import (
    ClassificationParseFailure,
    PersistenceFailure,
    PhotoAnalysisFailure,
)
from app.domain.policies.fallback import (
    FALLBACK_TRACE_MARKER,
    FALLBACK_UNCLEAR_NOTE,
    fallback_classification,
)
from app.domain.policies.location import resolve_location
from app.domain.policies.status_lifecycle import INITIAL_STATUS
from app.domain.value_objects.agent_trace import AgentTrace

logger = logging.getLogger(__name__)

ERROR_TICKET_ID = "ERROR"
ERROR_CATEGORY = "Error"
TRACE_PREVIEW_CHARS = 100


@dataclass
class SubmissionResult:
    """What the caller gets back for one complaint."""

    ticket_id: str
    category: str
    location: str
    priority: str
    summary: str
    agent_trace: list[str] = field(default_factory=list)
    photo_analysis: str | None = None
    fallback_used: bool = False
    error: str | None = None

    @classmethod
    def failed(cls, error: str, trace: AgentTrace) -> SubmissionResult:
        return cls(
            ticket_id=ERROR_TICKET_ID,
            category=ERROR_CATEGORY,
            location="Agent failed",
            priority="High",
            summary="Please try again",
            agent_trace=trace.to_list(),
            error=error,
        )


class ProcessComplaintUseCase:
    """Turns one normalized complaint into a stored, numbered ticket.

    Optional stages (photo analysis, coordinates, city/state, submitter) run
    only when the complaint carries them. Classifier and photo failures never
    abort the submission; only a persistence failure does.
    """

    def __init__(
        self,
        llm: LLMPort,
        ticket_repo: TicketRepository,
        sequence_repo: TicketSequenceRepository,
        uow: UnitOfWork,
        photo_store: PhotoStorePort | None = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        backoff_seconds: float = DEFAULT_BACKOFF_SECONDS,
    ):
        self._classifier = ClassifyComplaintUseCase(llm)
        self._photo_analyzer = AnalyzePhotoUseCase(llm)
        self._allocator = TicketAllocator(
            ticket_repo, sequence_repo, uow,
            max_attempts=max_attempts, backoff_seconds=backoff_seconds,
        )
        self._photos = photo_store

    async def execute(self, complaint: Complaint) -> SubmissionResult:
        """Process a single complaint end-to-end.

        Pipeline:
        1. Photo storage + analysis (optional, folded into the body)
        2. Classification, or fallback defaults
        3. Location resolution
        4. Identifier allocation + insert in one commit
        """
        trace = AgentTrace()
        trace.add("AI agent activated")
        preview = complaint.message[:TRACE_PREVIEW_CHARS]
        if len(complaint.message) > TRACE_PREVIEW_CHARS:
            preview += "..."
        trace.add(f"Reading complaint: {preview}")

        body = complaint.message
        photo_ref = None
        photo_analysis = None

        # Step 1: Photo
        if complaint.photo is not None:
            photo_ref = await self._store_photo(complaint, trace)

            trace.add("Analyzing uploaded photo")
            try:
                photo_analysis = await self._photo_analyzer.execute(complaint.photo)
                body = augment_with_analysis(body, photo_analysis)
                trace.add("Photo analysis complete")
            except PhotoAnalysisFailure as e:
                logger.warning("Photo analysis failed: %s", e)
                photo_analysis = PHOTO_ANALYSIS_UNAVAILABLE
                trace.add(f"Photo analysis failed: {e}")

        # Step 2: Classify
        trace.add("Classifying complaint")
        classification = await self._classify(body, trace)

        # Step 3: Location
        location = resolve_location(classification, complaint.city, complaint.state)

        ticket = Ticket(
            id=None,
            ticket_id=None,
            citizen_message=body,
            category=classification.category,
            location=location,
            priority=classification.priority,
            summary=classification.summary,
            status=INITIAL_STATUS,
            photo_ref=photo_ref,
            photo_analysis=photo_analysis,
            fallback_used=classification.fallback_used,
            submitter_id=complaint.submitter_id,
            geo_location=complaint.location,
        )

        # Step 4: Allocate + persist
        trace.add("Saving to database")
        try:
            ticket = await self._allocator.create(ticket)
        except PersistenceFailure as e:
            logger.error("Complaint could not be stored: %s", e)
            trace.add(f"Agent error: {e}")
            return SubmissionResult.failed(str(e), trace)

        trace.add(f"Ticket created: {ticket.ticket_id}")
        logger.info(
            "Ticket %s: category=%s, priority=%s, fallback=%s",
            ticket.ticket_id, ticket.category.value,
            ticket.priority.value, ticket.fallback_used,
        )

        return SubmissionResult(
            ticket_id=ticket.ticket_id,
            category=ticket.category.value,
            location=ticket.location,
            priority=ticket.priority.value,
            summary=ticket.summary,
            agent_trace=trace.to_list(),
            photo_analysis=photo_analysis,
            fallback_used=ticket.fallback_used,
        )

    async def _classify(self, body: str, trace: AgentTrace) -> ClassificationResult:
        try:
            result = await self._classifier.execute(body)
        except ClassificationParseFailure as e:
            logger.warning("Using fallback classification: %s", e)
            trace.add(FALLBACK_UNCLEAR_NOTE)
            trace.add(FALLBACK_TRACE_MARKER)
            return fallback_classification(body)

        trace.extend(result.reasoning)
        return result

    async def _store_photo(self, complaint: Complaint, trace: AgentTrace) -> str | None:
        if self._photos is None:
            return None
        try:
            return await self._photos.save(complaint.photo)
        except OSError:
            logger.exception("Failed to store complaint photo")
            trace.add("Photo could not be stored")
            return None
