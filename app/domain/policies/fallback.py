"""FallbackPolicy — safe classification used when the classifier output is unusable.

Trades accuracy for availability: every complaint still becomes a storable
ticket when the classifier is down or answers with garbage.
"""

from __future__ import annotations

from app.domain.entities.classification import NO_LOCATION, ClassificationResult
from app.domain.value_objects.enums import Category, Priority

FALLBACK_SUMMARY_CHARS = 100
FALLBACK_UNCLEAR_NOTE = "AI response unclear, using safe defaults"
FALLBACK_TRACE_MARKER = "Fallback classification used"


def fallback_classification(body: str | None) -> ClassificationResult:
    """Deterministic defaults. Never raises."""
    return ClassificationResult(
        category=Category.ROADS_AND_POTHOLES,
        location=NO_LOCATION,
        priority=Priority.MEDIUM,
        summary=(body or "")[:FALLBACK_SUMMARY_CHARS],
        reasoning=["Used fallback classification"],
        fallback_used=True,
    )
