"""Tests for the command-line workflow."""

import zipfile

import pytest

from conceptsheet.cli.workflow import generate_character_sheet, guess_mime_type
from conceptsheet.core.agents import OrchestratorAgent
from conceptsheet.core.catalog import AspectRatio, ChromaColor, Style
from conceptsheet.core.errors import CharacterSheetError
from tests.conftest import JPEG_BYTES, FakeDescriptionService


def test_guess_mime_type(tmp_path):
    assert guess_mime_type(tmp_path / "a.png") == "image/png"
    assert guess_mime_type(tmp_path / "no_extension") == "image/jpeg"


def test_writes_archive(tmp_path, orchestrator, description_service):
    photo = tmp_path / "me.jpg"
    photo.write_bytes(JPEG_BYTES)
    captions = []

    archive_path, archive = generate_character_sheet(
        photo,
        Style.VINTAGE_COMIC,
        AspectRatio.LANDSCAPE,
        ChromaColor.BLUE,
        tmp_path / "out",
        on_progress=captions.append,
        orchestrator=orchestrator,
    )

    assert archive_path.parent == tmp_path / "out"
    assert description_service.calls[0][1] == "image/jpeg"
    with zipfile.ZipFile(archive_path) as zf:
        names = zf.namelist()
    assert len(names) == 4
    assert names[1] == f"front-view-vintage-comic-{archive.tag}.jpeg"
    assert len(captions) == 4


def test_failure_raises_with_session_error(tmp_path, image_service, retry_policy):
    photo = tmp_path / "me.jpg"
    photo.write_bytes(JPEG_BYTES)
    orchestrator = OrchestratorAgent(
        FakeDescriptionService(text=None, block_reason="PROHIBITED_CONTENT"),
        image_service,
        retry_policy,
    )

    with pytest.raises(CharacterSheetError, match="PROHIBITED_CONTENT"):
        generate_character_sheet(
            photo,
            Style.CLAYMATION,
            AspectRatio.PORTRAIT,
            ChromaColor.GREEN,
            tmp_path / "out",
            orchestrator=orchestrator,
        )

    assert not (tmp_path / "out").exists()


def test_missing_photo(tmp_path, orchestrator):
    with pytest.raises(FileNotFoundError):
        generate_character_sheet(
            tmp_path / "nope.jpg",
            Style.CLAYMATION,
            AspectRatio.PORTRAIT,
            ChromaColor.GREEN,
            tmp_path,
            orchestrator=orchestrator,
        )
