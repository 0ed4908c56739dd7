"""Pydantic models passed between the session, the agents and the packager."""

import base64
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from conceptsheet.core.catalog import AspectRatio, ChromaColor, Style, View


# ============================================================================
# Enums
# ============================================================================


class Screen(str, Enum):
    """Screens of the single-page interface."""

    UPLOAD = "upload"
    LOADING = "loading"
    RESULTS = "results"


# ============================================================================
# Upload Models
# ============================================================================


class UploadedImage(BaseModel):
    """The character photo chosen by the user."""

    model_config = ConfigDict(frozen=True)

    content: bytes = Field(repr=False, description="Raw file bytes")
    filename: str = Field(default="", description="Original filename")
    mime_type: str = Field(default="image/jpeg", description="Declared media type")
    preview_ref: str = Field(description="Handle of the locally-owned preview")

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        """Original file extension without the dot, or 'jpg' if there is none."""
        suffix = Path(self.filename).suffix.lstrip(".")
        return suffix or "jpg"


# ============================================================================
# Workflow Models
# ============================================================================


class GenerationRequest(BaseModel):
    """Everything the orchestrator needs for one character sheet."""

    model_config = ConfigDict(frozen=True)

    image: UploadedImage
    style: Style
    aspect_ratio: AspectRatio
    chroma: ChromaColor


class DescriptionResult(BaseModel):
    """Outcome of a description call: text, nothing, or a block reason."""

    text: str | None = None
    block_reason: str | None = None


class GeneratedImage(BaseModel):
    """One image returned by the image generation service."""

    image_bytes: bytes | None = Field(default=None, repr=False)


class GeneratedResult(BaseModel):
    """A finished view of the character sheet."""

    model_config = ConfigDict(frozen=True)

    view: View
    label: str = Field(description="'<View Name> (<Style Name>)'")
    image_bytes: bytes = Field(repr=False, description="JPEG bytes")

    @property
    def src(self) -> str:
        """Displayable data URI for the image."""
        encoded = base64.b64encode(self.image_bytes).decode("ascii")
        return f"data:image/jpeg;base64,{encoded}"
