"""Port interface for the external text/vision classifier."""

from abc import ABC, abstractmethod

from app.domain.entities.complaint import PhotoUpload


class LLMPort(ABC):
    @abstractmethod
    async def complete(
        self,
        instruction: str,
        content: str | None = None,
        image: PhotoUpload | None = None,
        json_mode: bool = False,
    ) -> str:
        """Send one inference request and return the raw response text.

        Exactly one call is made; retries are the caller's decision.

        Raises:
            ClassifierUnavailable: on missing credentials, provider errors,
                timeouts or an empty answer.
        """
        ...
