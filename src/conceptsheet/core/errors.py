"""Error types surfaced by the character sheet workflow."""

from __future__ import annotations

from conceptsheet.core.prompts.prompt_templates import (
    CONTENT_BLOCKED_MESSAGE,
    EMPTY_DESCRIPTION_MESSAGE,
    GENERATION_EXHAUSTED_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
)


class CharacterSheetError(Exception):
    """Base class for errors shown to the user as the session error."""

    pass


class UploadValidationError(CharacterSheetError):
    """Raised when an uploaded file is rejected before acceptance."""

    pass


class InvalidTransitionError(CharacterSheetError):
    """Raised when an action is not allowed on the current screen."""

    pass


class ContentBlockedError(CharacterSheetError):
    """The description service refused the image and gave a reason."""

    def __init__(self, block_reason: str):
        self.block_reason = block_reason
        super().__init__(CONTENT_BLOCKED_MESSAGE.format(reason=block_reason))


class EmptyDescriptionError(CharacterSheetError):
    """The description service returned no text and no reason."""

    def __init__(self):
        super().__init__(EMPTY_DESCRIPTION_MESSAGE)


class GenerationExhaustedError(CharacterSheetError):
    """A view failed every generation attempt."""

    def __init__(self, view_name: str, attempts: int, last_error: str):
        self.view_name = view_name
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            GENERATION_EXHAUSTED_MESSAGE.format(
                view=view_name, attempts=attempts, last_error=last_error
            )
        )


def describe_error(error: BaseException) -> str:
    """Reduce any workflow failure to the message shown to the user."""
    message = str(error).strip()
    return message or UNEXPECTED_ERROR_MESSAGE
