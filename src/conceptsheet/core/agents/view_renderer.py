"""View renderer agent: one styled headshot per camera angle, with retries."""

import logging
from typing import Callable

from conceptsheet.core.catalog import ChromaColor, Style, View
from conceptsheet.core.errors import GenerationExhaustedError
from conceptsheet.core.model_provider import ImageGenerationService, ImagenGenerationService
from conceptsheet.core.prompts.prompt_templates import (
    GENERATE_PROGRESS,
    GENERATION_PROMPT,
    NO_IMAGE_DATA_MESSAGE,
    RESULT_LABEL,
)
from conceptsheet.core.retry import RetryExhaustedError, RetryPolicy
from conceptsheet.core.schemas import GeneratedImage, GeneratedResult, GenerationRequest

logger = logging.getLogger(__name__)


def build_generation_prompt(
    view: View, style: Style, description: str, chroma: ChromaColor
) -> str:
    """Compose the numbered instruction set sent to the image model."""
    return GENERATION_PROMPT.format(
        pose=view.pose,
        style_prompt=style.prompt,
        description=description,
        background_prompt=chroma.background_prompt,
    ).strip()


def build_label(view: View, style: Style) -> str:
    return RESULT_LABEL.format(view_name=view.display_name, style_name=style.display_name)


def first_image_missing(images: list[GeneratedImage]) -> str | None:
    """Classify a generation response: None when the first image has data."""
    if images and images[0].image_bytes:
        return None
    return NO_IMAGE_DATA_MESSAGE


class ViewRendererAgent:
    """Agent that renders a single view of the character sheet."""

    def __init__(
        self,
        service: ImageGenerationService | None = None,
        retry_policy: RetryPolicy | None = None,
    ):
        self.service = service or ImagenGenerationService()
        self.retry_policy = retry_policy or RetryPolicy.from_config()

    async def render(
        self,
        view: View,
        request: GenerationRequest,
        description: str,
        on_progress: Callable[[str], None] | None = None,
    ) -> GeneratedResult:
        """Render one view, retrying per the retry policy.

        Args:
            view: Camera angle to render
            request: The user's selections
            description: Subject description from the describer
            on_progress: Receives a caption before every attempt

        Returns:
            GeneratedResult for the view

        Raises:
            GenerationExhaustedError: If every attempt failed
        """
        prompt = build_generation_prompt(view, request.style, description, request.chroma)

        def announce(attempt: int, max_attempts: int) -> None:
            if on_progress is not None:
                on_progress(
                    GENERATE_PROGRESS.format(
                        view_name=view.display_name,
                        attempt=attempt,
                        max_attempts=max_attempts,
                    )
                )

        try:
            images = await self.retry_policy.run(
                lambda: self.service.generate(prompt, request.aspect_ratio),
                classify=first_image_missing,
                on_attempt=announce,
                label=view.display_name,
            )
        except RetryExhaustedError as e:
            raise GenerationExhaustedError(
                view.display_name, e.attempts, e.last_error
            ) from e

        logger.info("Rendered %s", view.display_name)
        return GeneratedResult(
            view=view,
            label=build_label(view, request.style),
            image_bytes=images[0].image_bytes,
        )
