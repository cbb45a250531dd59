"""ClassifyComplaintUseCase — one classifier call, strictly parsed."""

from __future__ import annotations

import logging

from app.application.ports.llm_port import LLMPort
from app.domain.entities.classification import NO_LOCATION, ClassificationResult
from app.domain.exceptions import ClassificationParseFailure, ClassifierUnavailable
from app.domain.policies.classification_parser import parse_classification
from app.domain.value_objects.enums import Category, Priority

logger = logging.getLogger(__name__)

_CATEGORIES = ", ".join(f'"{c.value}"' for c in Category)
_PRIORITIES = ", ".join(f'"{p.value}"' for p in Priority)

CLASSIFICATION_PROMPT = f"""\
You are an intelligent AI agent that triages citizen complaints for a city administration.

Think step by step, then return a JSON object with exactly these fields:

{{
  "thinking": ["short reasoning step", "short reasoning step", "short reasoning step"],
  "category": one of [{_CATEGORIES}],
  "location": "the place mentioned in the complaint, or \\"{NO_LOCATION}\\"",
  "priority": one of [{_PRIORITIES}],
  "summary": "one short sentence describing the problem"
}}

Rules:
- Pick the single category that best matches the problem.
- If the complaint contains an "AI Photo Analysis" paragraph, use it as visual context.
- Priority guidance:
  * immediate danger to people (accidents, exposed wires, deep potholes on busy roads, blocked roads) → High
  * service outages affecting many people (no water, dark street, uncollected garbage for days) → Medium
  * cosmetic or minor inconvenience → Low
- Return ONLY valid JSON, no markdown or extra text."""


class ClassifyComplaintUseCase:
    """Sends the complaint body to the classifier exactly once and parses the answer."""

    def __init__(self, llm: LLMPort):
        self._llm = llm

    async def execute(self, body: str) -> ClassificationResult:
        """Classify a complaint body.

        Raises:
            ClassificationParseFailure: if the classifier is unreachable or its
                answer is not a well-formed classification.
        """
        try:
            raw = await self._llm.complete(
                CLASSIFICATION_PROMPT,
                content=f"Complaint:\n{body}",
                json_mode=True,
            )
        except ClassifierUnavailable as e:
            logger.warning("Classifier unavailable: %s", e)
            raise ClassificationParseFailure(f"Classifier unavailable: {e}") from e
        except Exception as e:
            logger.exception("Unexpected error from the classifier")
            raise ClassificationParseFailure(f"Classifier error: {e.__class__.__name__}: {e}") from e

        try:
            result = parse_classification(raw)
        except ClassificationParseFailure:
            logger.warning("Unparseable classifier response: %.200r", raw)
            raise

        logger.info(
            "Classified complaint: category=%s, priority=%s, location=%s",
            result.category.value, result.priority.value, result.location,
        )
        return result
