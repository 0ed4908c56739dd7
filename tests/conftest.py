"""Shared test fixtures."""

from __future__ import annotations

import os
import tempfile

# Keep API sessions out of the project tree
os.environ.setdefault("CONCEPTSHEET_SESSIONS_DIR", tempfile.mkdtemp(prefix="conceptsheet_tests_"))

import pytest

from conceptsheet.core.agents import OrchestratorAgent
from conceptsheet.core.catalog import AspectRatio, ChromaColor, Style
from conceptsheet.core.retry import RetryPolicy
from conceptsheet.core.schemas import DescriptionResult, GeneratedImage
from conceptsheet.core.session import SessionState


# Minimal JPEG/PNG lookalikes; nothing in the workflow decodes them

JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00fake-jpeg-body\xff\xd9"
PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-png-body"

DESCRIPTION = "Short curly red hair, green eyes, freckles, and a navy hoodie."

ONE_MB = 1024 * 1024


# ============================================================================
# Fakes
# ============================================================================


class FakeDescriptionService:
    """Description service that returns a fixed outcome and records calls."""

    def __init__(self, text: str | None = DESCRIPTION, block_reason: str | None = None,
                 error: Exception | None = None):
        self.text = text
        self.block_reason = block_reason
        self.error = error
        self.calls: list[tuple[bytes, str, str]] = []

    async def describe(self, image: bytes, mime_type: str, instruction: str) -> DescriptionResult:
        self.calls.append((image, mime_type, instruction))
        if self.error is not None:
            raise self.error
        return DescriptionResult(text=self.text, block_reason=self.block_reason)


class FakeImageService:
    """Image service that plays back scripted outcomes, one per call.

    An outcome is image bytes (success), None (a response without image data)
    or an exception (raised). Once the script runs out every call succeeds.
    """

    def __init__(self, outcomes: list | None = None):
        self.outcomes = list(outcomes or [])
        self.prompts: list[str] = []
        self.aspect_ratios: list[AspectRatio] = []

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    async def generate(self, prompt: str, aspect_ratio: AspectRatio) -> list[GeneratedImage]:
        self.prompts.append(prompt)
        self.aspect_ratios.append(aspect_ratio)

        outcome = self.outcomes.pop(0) if self.outcomes else f"view-{self.call_count}".encode()
        if isinstance(outcome, Exception):
            raise outcome
        if outcome is None:
            return []
        return [GeneratedImage(image_bytes=outcome)]


class RecordingSleep:
    """Async sleep stand-in that records each requested delay."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class RecordingPreviewStore:
    """Preview store that tracks which previews were created and released."""

    def __init__(self):
        self.created: list[str] = []
        self.released: list[str] = []

    def create(self, content: bytes, filename: str) -> str:
        ref = f"preview-{len(self.created) + 1}"
        self.created.append(ref)
        return ref

    def release(self, ref: str) -> None:
        self.released.append(ref)

    @property
    def live(self) -> set[str]:
        return set(self.created) - set(self.released)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def description_service() -> FakeDescriptionService:
    return FakeDescriptionService()


@pytest.fixture
def image_service() -> FakeImageService:
    return FakeImageService()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def retry_policy(sleep) -> RetryPolicy:
    return RetryPolicy(max_attempts=3, delay_seconds=2.0, sleep=sleep)


@pytest.fixture
def orchestrator(description_service, image_service, retry_policy) -> OrchestratorAgent:
    return OrchestratorAgent(
        description_service=description_service,
        image_service=image_service,
        retry_policy=retry_policy,
    )


@pytest.fixture
def preview_store() -> RecordingPreviewStore:
    return RecordingPreviewStore()


@pytest.fixture
def state(preview_store) -> SessionState:
    return SessionState(preview_store, max_upload_bytes=4 * ONE_MB)


@pytest.fixture
def ready_state(state) -> SessionState:
    """Session on the upload screen with all four inputs chosen."""
    state.select_image(PNG_BYTES, filename="hero.png", mime_type="image/png")
    state.select_style(Style.WATERCOLOR)
    state.select_aspect_ratio(AspectRatio.PORTRAIT)
    state.select_chroma(ChromaColor.GREEN)
    return state
