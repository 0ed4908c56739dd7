"""Gemini and Imagen adapters for the description and image services."""

from __future__ import annotations

import logging
from typing import Protocol

from google import genai
from google.genai import types

from conceptsheet.core.catalog import AspectRatio
from conceptsheet.core.config import (
    get_api_key,
    get_description_model_id,
    get_image_model_id,
)
from conceptsheet.core.schemas import DescriptionResult, GeneratedImage

logger = logging.getLogger(__name__)

_client: genai.Client | None = None


def get_client(api_key: str | None = None) -> genai.Client:
    """Get a configured google-genai client.

    Uses the provided api_key if given, otherwise a process-wide client built
    from the credential found in the environment.
    """
    global _client

    if api_key:
        return genai.Client(api_key=api_key)

    if _client is None:
        _client = genai.Client(api_key=get_api_key())
    return _client


class DescriptionService(Protocol):
    """Turns a photo into a short textual description of its subject."""

    async def describe(
        self, image: bytes, mime_type: str, instruction: str
    ) -> DescriptionResult: ...


class ImageGenerationService(Protocol):
    """Renders images from a text prompt."""

    async def generate(
        self, prompt: str, aspect_ratio: AspectRatio
    ) -> list[GeneratedImage]: ...


class GeminiDescriptionService:
    """Description service backed by a Gemini multimodal model."""

    def __init__(self, model_id: str | None = None, api_key: str | None = None):
        self.model_id = model_id or get_description_model_id()
        self.api_key = api_key

    async def describe(
        self, image: bytes, mime_type: str, instruction: str
    ) -> DescriptionResult:
        # The client is built per call so a missing key fails the call itself
        client = get_client(self.api_key)
        response = await client.aio.models.generate_content(
            model=self.model_id,
            contents=[
                types.Part.from_bytes(data=image, mime_type=mime_type),
                instruction,
            ],
        )

        block_reason = None
        feedback = response.prompt_feedback
        if feedback and feedback.block_reason:
            block_reason = feedback.block_reason.value

        logger.debug(
            "Description model %s returned %d chars (block_reason=%s)",
            self.model_id,
            len(response.text or ""),
            block_reason,
        )
        return DescriptionResult(text=response.text, block_reason=block_reason)


class ImagenGenerationService:
    """Image generation service backed by an Imagen model."""

    def __init__(self, model_id: str | None = None, api_key: str | None = None):
        self.model_id = model_id or get_image_model_id()
        self.api_key = api_key

    async def generate(
        self, prompt: str, aspect_ratio: AspectRatio
    ) -> list[GeneratedImage]:
        client = get_client(self.api_key)
        response = await client.aio.models.generate_images(
            model=self.model_id,
            prompt=prompt,
            config=types.GenerateImagesConfig(
                number_of_images=1,
                output_mime_type="image/jpeg",
                aspect_ratio=aspect_ratio.value,
            ),
        )

        return [
            GeneratedImage(image_bytes=item.image.image_bytes if item.image else None)
            for item in response.generated_images or []
        ]
