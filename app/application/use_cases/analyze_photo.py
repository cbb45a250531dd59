"""AnalyzePhotoUseCase — short textual description of an attached photo."""

from __future__ import annotations

import logging

from app.application.ports.llm_port import LLMPort
from app.domain.entities.complaint import PhotoUpload
from app.domain.exceptions import ClassifierUnavailable, PhotoAnalysisFailure
from app.domain.policies.photo_caption import MAX_PHOTO_ANALYSIS_WORDS, cap_words

logger = logging.getLogger(__name__)

PHOTO_ANALYSIS_PROMPT = (
    "Analyze this image for a city complaint. Describe the visible problem, its size, "
    f"condition and safety risk in no more than {MAX_PHOTO_ANALYSIS_WORDS} words. "
    "No extra commentary."
)

PHOTO_ANALYSIS_UNAVAILABLE = "AI photo analysis unavailable"


def augment_with_analysis(message: str, analysis: str) -> str:
    """Fold the photo description into the complaint body as a new paragraph."""
    return f"{message}\n\nAI Photo Analysis: {analysis}"


class AnalyzePhotoUseCase:
    """Asks the vision model to describe a complaint photo."""

    def __init__(self, llm: LLMPort):
        self._llm = llm

    async def execute(self, photo: PhotoUpload) -> str:
        """Return the word-capped description.

        Raises:
            PhotoAnalysisFailure: on any provider failure or an empty answer.
        """
        try:
            raw = await self._llm.complete(PHOTO_ANALYSIS_PROMPT, image=photo)
        except ClassifierUnavailable as e:
            raise PhotoAnalysisFailure(str(e)) from e
        except Exception as e:
            logger.exception("Unexpected error from the vision model")
            raise PhotoAnalysisFailure(f"{e.__class__.__name__}: {e}") from e

        text = cap_words(raw)
        if not text:
            raise PhotoAnalysisFailure("Empty photo analysis response")

        logger.info("Photo analysis complete (%d words)", len(text.split()))
        return text
