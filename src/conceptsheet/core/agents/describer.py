"""Character describer agent: photo in, short physical description out."""

import logging

from conceptsheet.core.errors import ContentBlockedError, EmptyDescriptionError
from conceptsheet.core.model_provider import DescriptionService, GeminiDescriptionService
from conceptsheet.core.prompts.prompt_templates import DESCRIPTION_PROMPT
from conceptsheet.core.schemas import UploadedImage

logger = logging.getLogger(__name__)


class CharacterDescriberAgent:
    """Agent that extracts an objective headshot description from a photo."""

    def __init__(
        self,
        service: DescriptionService | None = None,
        instruction: str = DESCRIPTION_PROMPT,
    ):
        self.service = service or GeminiDescriptionService()
        self.instruction = instruction

    async def describe(self, image: UploadedImage) -> str:
        """Describe the subject of the uploaded image.

        Raises:
            ContentBlockedError: If the service withheld content with a reason
            EmptyDescriptionError: If the service returned no text otherwise
        """
        result = await self.service.describe(
            image.content, image.mime_type, self.instruction
        )

        text = (result.text or "").strip()
        if text:
            logger.info("Extracted character description (%d words)", len(text.split()))
            return text

        if result.block_reason:
            raise ContentBlockedError(result.block_reason)
        raise EmptyDescriptionError()
