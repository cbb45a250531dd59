"""Strict parser for classifier output.

Markdown code fences are stripped first (normalization); the remaining text
must then be one JSON object with a known category, a known priority and a
non-empty summary. Anything else is a ClassificationParseFailure.
"""

from __future__ import annotations

import json
import re

from app.domain.entities.classification import NO_LOCATION, ClassificationResult
from app.domain.exceptions import ClassificationParseFailure
from app.domain.value_objects.enums import Category, Priority

CATEGORY_MAP: dict[str, Category] = {c.value.lower(): c for c in Category}
PRIORITY_MAP: dict[str, Priority] = {p.value.lower(): p for p in Priority}

DEFAULT_REASONING = ["Analysis complete"]

_FENCED_BLOCK_RE = re.compile(r"```[A-Za-z0-9_-]*[ \t]*\n?(.*?)```", re.DOTALL)


def strip_code_fences(text: str | None) -> str:
    """Return the content of a fenced block, or the text with stray fence markers removed."""
    cleaned = (text or "").strip()
    match = _FENCED_BLOCK_RE.search(cleaned)
    if match:
        return match.group(1).strip()
    return cleaned.replace("```json", "").replace("```", "").strip()


def _lookup_key(value: object) -> str:
    return value.strip().lower() if isinstance(value, str) else ""


def parse_classification(raw_text: str | None) -> ClassificationResult:
    """Parse raw classifier text into a ClassificationResult.

    Raises:
        ClassificationParseFailure: if the text is not a well-formed classification object.
    """
    text = strip_code_fences(raw_text)
    if not text:
        raise ClassificationParseFailure("Empty classifier response")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ClassificationParseFailure(f"Classifier response is not valid JSON: {e.msg}") from e

    if not isinstance(data, dict):
        raise ClassificationParseFailure("Classifier response is not a JSON object")

    category = CATEGORY_MAP.get(_lookup_key(data.get("category")))
    if category is None:
        raise ClassificationParseFailure(f"Unknown category: {data.get('category')!r}")

    priority = PRIORITY_MAP.get(_lookup_key(data.get("priority")))
    if priority is None:
        raise ClassificationParseFailure(f"Unknown priority: {data.get('priority')!r}")

    summary = data.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        raise ClassificationParseFailure("Missing summary")

    location = data.get("location")
    if not isinstance(location, str) or not location.strip():
        location = NO_LOCATION

    thinking = data.get("thinking")
    if thinking is None:
        reasoning = list(DEFAULT_REASONING)
    elif isinstance(thinking, list):
        reasoning = [str(step) for step in thinking if step is not None and str(step).strip()]
    else:
        raise ClassificationParseFailure("'thinking' must be a list of strings")

    return ClassificationResult(
        category=category,
        location=location.strip(),
        priority=priority,
        summary=summary.strip(),
        reasoning=reasoning or list(DEFAULT_REASONING),
        fallback_used=False,
    )
