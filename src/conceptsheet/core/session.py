"""Session state for the three-screen interface (upload, loading, results)."""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Protocol

from conceptsheet.core.catalog import AspectRatio, ChromaColor, Style
from conceptsheet.core.config import get_max_image_size_bytes
from conceptsheet.core.errors import InvalidTransitionError, UploadValidationError
from conceptsheet.core.prompts.prompt_templates import FILE_TOO_LARGE_MESSAGE
from conceptsheet.core.schemas import (
    GeneratedResult,
    GenerationRequest,
    Screen,
    UploadedImage,
)

logger = logging.getLogger(__name__)


class PreviewStore(Protocol):
    """Owner of preview resources that must be released explicitly."""

    def create(self, content: bytes, filename: str) -> str: ...

    def release(self, ref: str) -> None: ...


class FilePreviewStore:
    """Preview store that keeps each preview as a file in one directory."""

    def __init__(self, directory: Path):
        self.directory = directory
        self.directory.mkdir(parents=True, exist_ok=True)

    def create(self, content: bytes, filename: str) -> str:
        suffix = Path(filename).suffix.lower() if filename else ""
        ref = f"preview_{uuid.uuid4().hex[:8]}{suffix}"
        (self.directory / ref).write_bytes(content)
        return ref

    def release(self, ref: str) -> None:
        path = self.path_for(ref)
        if path.exists():
            path.unlink()

    def path_for(self, ref: str) -> Path:
        return self.directory / ref


class SessionState:
    """Screen, selections, results, error and progress of one user session.

    Transitions:
        upload -> loading   begin_generation(), once all four inputs exist
        loading -> results  complete_generation()
        loading -> upload   fail_generation(), inputs kept
        results -> upload   reset(), everything cleared
    """

    def __init__(self, preview_store: PreviewStore, max_upload_bytes: int | None = None):
        self.preview_store = preview_store
        self.max_upload_bytes = (
            max_upload_bytes if max_upload_bytes is not None else get_max_image_size_bytes()
        )
        self._clear()

    def _clear(self) -> None:
        self.screen: Screen = Screen.UPLOAD
        self.image: UploadedImage | None = None
        self.style: Style | None = None
        self.aspect_ratio: AspectRatio | None = None
        self.chroma: ChromaColor | None = None
        self.results: list[GeneratedResult] = []
        self.error: str | None = None
        self.progress: str = ""

    def _require_screen(self, screen: Screen, action: str) -> None:
        if self.screen != screen:
            raise InvalidTransitionError(
                f"Cannot {action} while on the {self.screen.value} screen"
            )

    def _release_preview(self) -> None:
        if self.image is not None:
            self.preview_store.release(self.image.preview_ref)
            self.image = None

    # ------------------------------------------------------------------
    # Selections
    # ------------------------------------------------------------------

    def select_image(
        self, content: bytes, filename: str = "", mime_type: str = "image/jpeg"
    ) -> UploadedImage:
        """Accept a new photo, replacing (and releasing) any previous one.

        Raises:
            UploadValidationError: If the file exceeds the size ceiling; the
                selection is discarded and the error is kept on the session
        """
        self._require_screen(Screen.UPLOAD, "change the photo")
        self._release_preview()

        if len(content) > self.max_upload_bytes:
            max_mb = self.max_upload_bytes // (1024 * 1024)
            self.error = FILE_TOO_LARGE_MESSAGE.format(max_mb=max_mb)
            logger.info("Rejected %s (%d bytes)", filename or "upload", len(content))
            raise UploadValidationError(self.error)

        preview_ref = self.preview_store.create(content, filename)
        self.image = UploadedImage(
            content=content,
            filename=filename,
            mime_type=mime_type,
            preview_ref=preview_ref,
        )
        self.error = None
        return self.image

    def select_style(self, style: Style) -> None:
        self._require_screen(Screen.UPLOAD, "change the style")
        self.style = Style(style)

    def select_aspect_ratio(self, aspect_ratio: AspectRatio) -> None:
        self._require_screen(Screen.UPLOAD, "change the aspect ratio")
        self.aspect_ratio = AspectRatio(aspect_ratio)

    def select_chroma(self, chroma: ChromaColor) -> None:
        self._require_screen(Screen.UPLOAD, "change the background")
        self.chroma = ChromaColor(chroma)

    @property
    def missing_inputs(self) -> list[str]:
        selections = {
            "image": self.image,
            "style": self.style,
            "aspect_ratio": self.aspect_ratio,
            "chroma": self.chroma,
        }
        return [name for name, value in selections.items() if value is None]

    @property
    def can_generate(self) -> bool:
        return self.screen == Screen.UPLOAD and not self.missing_inputs

    # ------------------------------------------------------------------
    # Generation lifecycle
    # ------------------------------------------------------------------

    def begin_generation(self) -> GenerationRequest:
        """Move to the loading screen and build the request context."""
        self._require_screen(Screen.UPLOAD, "start generating")
        if self.missing_inputs:
            raise InvalidTransitionError(
                f"Cannot generate yet; missing: {', '.join(self.missing_inputs)}"
            )

        request = GenerationRequest(
            image=self.image,
            style=self.style,
            aspect_ratio=self.aspect_ratio,
            chroma=self.chroma,
        )
        self.screen = Screen.LOADING
        self.error = None
        self.results = []
        return request

    def report_progress(self, caption: str) -> None:
        if self.screen == Screen.LOADING:
            self.progress = caption

    def complete_generation(self, results: list[GeneratedResult]) -> None:
        self._require_screen(Screen.LOADING, "show results")
        self.results = list(results)
        self.progress = ""
        self.screen = Screen.RESULTS

    def fail_generation(self, message: str) -> None:
        self._require_screen(Screen.LOADING, "report a failure")
        self.results = []
        self.error = message
        self.progress = ""
        self.screen = Screen.UPLOAD

    def reset(self) -> None:
        """Return to an empty upload screen, releasing the preview."""
        if self.screen == Screen.LOADING:
            raise InvalidTransitionError("Cannot reset while a sheet is generating")
        self._release_preview()
        self._clear()

    def close(self) -> None:
        self._release_preview()
