"""OpenAI adapter — implements LLMPort using the OpenAI Chat Completions API."""

from __future__ import annotations

import base64
import logging

from openai import AsyncOpenAI, OpenAIError

from app.application.ports.llm_port import LLMPort
from app.config import settings
from app.domain.entities.complaint import PhotoUpload
from app.domain.exceptions import ClassifierUnavailable

logger = logging.getLogger(__name__)

PLACEHOLDER_KEY_MARKER = "your-openai-api-key"
IMAGE_ONLY_TEXT = "See the attached photo."


def _to_data_url(photo: PhotoUpload) -> str:
    encoded = base64.b64encode(photo.content).decode("utf-8")
    return f"data:{photo.mime_type};base64,{encoded}"


class OpenAIAdapter(LLMPort):
    """OpenAI implementation of LLMPort.

    The SDK's own retries are disabled: one complete() call is one request.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        vision_model: str | None = None,
        timeout: float | None = None,
        client: AsyncOpenAI | None = None,
    ):
        self._api_key = api_key if api_key is not None else settings.openai_api_key
        self._model = model or settings.openai_model
        self._vision_model = vision_model or settings.openai_vision_model or self._model
        self._timeout = timeout or settings.llm_timeout_seconds
        self._client = client

    def _get_client(self) -> AsyncOpenAI:
        if self._client is not None:
            return self._client

        key = (self._api_key or "").strip()
        if not key or PLACEHOLDER_KEY_MARKER in key:
            raise ClassifierUnavailable("OPENAI_API_KEY is not set (or placeholder)")

        self._client = AsyncOpenAI(api_key=key, timeout=self._timeout, max_retries=0)
        return self._client

    async def complete(
        self,
        instruction: str,
        content: str | None = None,
        image: PhotoUpload | None = None,
        json_mode: bool = False,
    ) -> str:
        client = self._get_client()
        model = self._vision_model if image is not None else self._model

        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": instruction},
                    {"role": "user", "content": self._build_user_content(content, image)},
                ],
                temperature=0.1,
                **kwargs,
            )
        except OpenAIError as e:
            logger.warning("OpenAI call failed (%s): %s", model, e)
            raise ClassifierUnavailable(f"{e.__class__.__name__}: {e}") from e

        if not response.choices:
            raise ClassifierUnavailable("OpenAI returned no choices")

        text = response.choices[0].message.content or ""
        if not text.strip():
            raise ClassifierUnavailable("OpenAI returned an empty message")
        return text

    @staticmethod
    def _build_user_content(content: str | None, image: PhotoUpload | None) -> str | list[dict]:
        """Plain text, or a text + inline base64 image payload for vision calls."""
        if image is None:
            return content or ""

        return [
            {"type": "text", "text": content or IMAGE_ONLY_TEXT},
            {"type": "image_url", "image_url": {"url": _to_data_url(image)}},
        ]
