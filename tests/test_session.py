"""Tests for session state transitions and preview ownership."""

import pytest

from conceptsheet.core.catalog import AspectRatio, ChromaColor, Style
from conceptsheet.core.errors import InvalidTransitionError, UploadValidationError
from conceptsheet.core.prompts.prompt_templates import FILE_TOO_LARGE_MESSAGE
from conceptsheet.core.schemas import Screen
from conceptsheet.core.session import FilePreviewStore, SessionState
from tests.conftest import JPEG_BYTES, ONE_MB, PNG_BYTES, RecordingPreviewStore


def test_new_session_starts_empty(state):
    assert state.screen == Screen.UPLOAD
    assert state.image is None
    assert state.results == []
    assert state.error is None
    assert not state.can_generate
    assert state.missing_inputs == ["image", "style", "aspect_ratio", "chroma"]


def test_oversize_upload_is_rejected_without_a_preview():
    store = RecordingPreviewStore()
    state = SessionState(store, max_upload_bytes=ONE_MB)

    with pytest.raises(UploadValidationError):
        state.select_image(b"x" * (ONE_MB + 1), filename="huge.jpg")

    assert state.image is None
    assert state.error == FILE_TOO_LARGE_MESSAGE.format(max_mb=1)
    assert store.created == []


def test_upload_at_the_ceiling_is_accepted():
    store = RecordingPreviewStore()
    state = SessionState(store, max_upload_bytes=ONE_MB)

    image = state.select_image(b"x" * ONE_MB, filename="exact.jpg")

    assert image.size == ONE_MB
    assert store.created == ["preview-1"]


def test_valid_upload_clears_previous_error():
    state = SessionState(RecordingPreviewStore(), max_upload_bytes=ONE_MB)
    with pytest.raises(UploadValidationError):
        state.select_image(b"x" * (ONE_MB + 1))

    state.select_image(JPEG_BYTES, filename="ok.jpg")

    assert state.error is None


def test_oversize_upload_discards_previous_photo(state, preview_store):
    state.select_image(PNG_BYTES, filename="first.png")
    state.max_upload_bytes = 4

    with pytest.raises(UploadValidationError):
        state.select_image(JPEG_BYTES, filename="second.jpg")

    assert state.image is None
    assert preview_store.live == set()


def test_replacing_photo_releases_old_preview_once(state, preview_store):
    state.select_image(PNG_BYTES, filename="first.png")
    state.select_image(JPEG_BYTES, filename="second.jpg")

    assert preview_store.released == ["preview-1"]
    assert preview_store.live == {"preview-2"}
    assert state.image.filename == "second.jpg"


def test_reset_releases_preview_and_clears_everything(ready_state, preview_store):
    ready_state.reset()

    assert preview_store.released == ["preview-1"]
    assert preview_store.live == set()
    assert ready_state.missing_inputs == ["image", "style", "aspect_ratio", "chroma"]

    # Nothing left to release
    ready_state.reset()
    ready_state.close()
    assert preview_store.released == ["preview-1"]


def test_selections_accept_raw_values(state):
    state.select_style("b&w_photo")
    state.select_aspect_ratio("16:9")
    state.select_chroma("blue")

    assert state.style is Style.BW_PHOTO
    assert state.aspect_ratio is AspectRatio.LANDSCAPE
    assert state.chroma is ChromaColor.BLUE


def test_generate_requires_all_four_inputs(state):
    state.select_image(PNG_BYTES, filename="hero.png")
    state.select_style(Style.CLAYMATION)

    with pytest.raises(InvalidTransitionError):
        state.begin_generation()

    assert state.screen == Screen.UPLOAD
    assert state.missing_inputs == ["aspect_ratio", "chroma"]


def test_begin_generation_moves_to_loading(ready_state):
    ready_state.error = "old failure"

    request = ready_state.begin_generation()

    assert ready_state.screen == Screen.LOADING
    assert ready_state.error is None
    assert request.style is Style.WATERCOLOR
    assert request.image is ready_state.image


def test_no_second_generation_while_loading(ready_state):
    ready_state.begin_generation()

    assert not ready_state.can_generate
    with pytest.raises(InvalidTransitionError):
        ready_state.begin_generation()


def test_inputs_are_locked_while_loading(ready_state):
    ready_state.begin_generation()

    with pytest.raises(InvalidTransitionError):
        ready_state.select_style(Style.CYBERPUNK)
    with pytest.raises(InvalidTransitionError):
        ready_state.select_image(JPEG_BYTES)
    with pytest.raises(InvalidTransitionError):
        ready_state.reset()


def test_progress_only_tracked_while_loading(ready_state):
    ready_state.report_progress("ignored")
    assert ready_state.progress == ""

    ready_state.begin_generation()
    ready_state.report_progress("Analyzing your character...")
    assert ready_state.progress == "Analyzing your character..."


def test_failure_returns_to_upload_with_inputs(ready_state):
    ready_state.begin_generation()
    ready_state.fail_generation("boom")

    assert ready_state.screen == Screen.UPLOAD
    assert ready_state.error == "boom"
    assert ready_state.results == []
    assert ready_state.can_generate


def test_results_screen_only_from_loading(ready_state):
    with pytest.raises(InvalidTransitionError):
        ready_state.complete_generation([])


def test_file_preview_store(tmp_path):
    store = FilePreviewStore(tmp_path / "uploads")

    ref = store.create(PNG_BYTES, "Hero.PNG")

    assert ref.endswith(".png")
    assert store.path_for(ref).read_bytes() == PNG_BYTES

    store.release(ref)
    assert not store.path_for(ref).exists()
    # Releasing twice is harmless
    store.release(ref)
