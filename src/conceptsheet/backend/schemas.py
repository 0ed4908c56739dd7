"""Pydantic schemas for the web API."""

from __future__ import annotations

from pydantic import BaseModel

from conceptsheet.core.catalog import AspectRatio, ChromaColor, Style
from conceptsheet.core.schemas import Screen


class SessionResponse(BaseModel):
    """Response for session creation."""

    session_id: str
    created_at: str


class ImageUploadResponse(BaseModel):
    """Response for image upload."""

    filename: str
    mime_type: str
    size: int


class SelectionsRequest(BaseModel):
    """Partial update of the style, aspect ratio and background choices."""

    style: Style | None = None
    aspect_ratio: AspectRatio | None = None
    chroma: ChromaColor | None = None


class ResultItem(BaseModel):
    """One generated view."""

    label: str
    src: str


class SessionStateResponse(BaseModel):
    """Snapshot of a session's screen and selections."""

    session_id: str
    screen: Screen
    has_image: bool
    filename: str | None = None
    style: Style | None = None
    aspect_ratio: AspectRatio | None = None
    chroma: ChromaColor | None = None
    can_generate: bool
    error: str | None = None
    progress: str = ""
    result_count: int = 0


class StyleItem(BaseModel):
    key: Style
    display_name: str
    prompt: str


class ChromaItem(BaseModel):
    key: ChromaColor
    display_name: str
    hex_value: str


class ViewItem(BaseModel):
    name: str
    pose: str


class CatalogResponse(BaseModel):
    """Every choice the upload screen offers."""

    styles: list[StyleItem]
    aspect_ratios: list[AspectRatio]
    chroma_colors: list[ChromaItem]
    views: list[ViewItem]
    max_upload_mb: int
