"""Location resolution for a new ticket.

Precedence: classifier-extracted location, then the submitted
"city, state" form values, then "No location mentioned".
"""

from __future__ import annotations

from app.domain.entities.classification import NO_LOCATION, ClassificationResult


def resolve_location(
    classification: ClassificationResult,
    city: str | None = None,
    state: str | None = None,
) -> str:
    if classification.has_location():
        return classification.location.strip()

    parts = [p.strip() for p in (city, state) if p and p.strip()]
    if parts:
        return ", ".join(parts)

    return NO_LOCATION
