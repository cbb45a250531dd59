"""Word cap for photo analysis text.

The vision model is asked for at most 50 words but its compliance is not
trusted; the cap is enforced here.
"""

from __future__ import annotations

MAX_PHOTO_ANALYSIS_WORDS = 50
ELLIPSIS = "..."


def cap_words(text: str, limit: int = MAX_PHOTO_ANALYSIS_WORDS) -> str:
    """Keep the first *limit* words and append an ellipsis if anything was cut."""
    cleaned = (text or "").strip()
    words = cleaned.split()
    if len(words) <= limit:
        return cleaned
    return " ".join(words[:limit]) + ELLIPSIS
