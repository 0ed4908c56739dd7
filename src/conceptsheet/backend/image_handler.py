"""Image upload handling and validation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import UploadFile

from conceptsheet.core.errors import UploadValidationError
from conceptsheet.core.prompts.prompt_templates import NOT_AN_IMAGE_MESSAGE
from conceptsheet.core.schemas import UploadedImage

if TYPE_CHECKING:
    from conceptsheet.backend.session_manager import Session


class ImageHandler:
    """Validates uploaded photos and hands them to the session state."""

    def validate_file(self, file: UploadFile) -> None:
        """Validate the declared media type of an uploaded file.

        The size ceiling is enforced by the session state itself.

        Raises:
            UploadValidationError: If the file is not an image
        """
        if file.content_type and not file.content_type.startswith("image/"):
            raise UploadValidationError(
                NOT_AN_IMAGE_MESSAGE.format(content_type=file.content_type)
            )

    async def process_upload(self, session: Session, file: UploadFile) -> UploadedImage:
        """Read, validate and select an uploaded photo.

        Args:
            session: The user session
            file: Uploaded file

        Returns:
            The accepted UploadedImage

        Raises:
            UploadValidationError: If validation fails
        """
        self.validate_file(file)
        # One byte past the ceiling is enough to reject an oversized file
        content = await file.read(session.state.max_upload_bytes + 1)

        return session.state.select_image(
            content,
            filename=file.filename or "",
            mime_type=file.content_type or "image/jpeg",
        )


# Global image handler instance
image_handler = ImageHandler()
