"""Run the character sheet workflow outside the web server."""

from __future__ import annotations

import asyncio
import mimetypes
import tempfile
from pathlib import Path
from typing import Callable

from conceptsheet.core.agents import OrchestratorAgent
from conceptsheet.core.archive import ArchivePackager, CharacterSheetArchive
from conceptsheet.core.catalog import AspectRatio, ChromaColor, Style
from conceptsheet.core.errors import CharacterSheetError
from conceptsheet.core.schemas import Screen
from conceptsheet.core.session import FilePreviewStore, SessionState


def guess_mime_type(path: Path) -> str:
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type or "image/jpeg"


def generate_character_sheet(
    photo_path: Path,
    style: Style,
    aspect_ratio: AspectRatio,
    chroma: ChromaColor,
    output_dir: Path,
    on_progress: Callable[[str], None] | None = None,
    orchestrator: OrchestratorAgent | None = None,
    packager: ArchivePackager | None = None,
) -> tuple[Path, CharacterSheetArchive]:
    """Generate the three views for a photo and write the zip archive.

    Args:
        photo_path: Character photo on disk
        style: Art style for every view
        aspect_ratio: Frame of the generated images
        chroma: Keying background color
        output_dir: Directory the archive is written to
        on_progress: Receives every progress caption
        orchestrator: Pipeline to use (Gemini and Imagen by default)
        packager: Archive packager (a fresh one by default)

    Returns:
        Tuple of (archive path, archive)

    Raises:
        FileNotFoundError: If the photo does not exist
        CharacterSheetError: If the photo is rejected or generation fails
    """
    if not photo_path.is_file():
        raise FileNotFoundError(f"Photo not found: {photo_path}")

    orchestrator = orchestrator or OrchestratorAgent()
    packager = packager or ArchivePackager()

    with tempfile.TemporaryDirectory(prefix="conceptsheet_") as scratch:
        state = SessionState(FilePreviewStore(Path(scratch)))
        try:
            state.select_image(
                photo_path.read_bytes(),
                filename=photo_path.name,
                mime_type=guess_mime_type(photo_path),
            )
            state.select_style(style)
            state.select_aspect_ratio(aspect_ratio)
            state.select_chroma(chroma)

            asyncio.run(orchestrator.generate_for_session(state, on_progress=on_progress))

            if state.screen != Screen.RESULTS:
                raise CharacterSheetError(state.error)

            archive = packager.package(state.image, state.results)
        finally:
            state.close()

    output_dir.mkdir(parents=True, exist_ok=True)
    archive_path = output_dir / archive.filename
    archive_path.write_bytes(archive.data)
    return archive_path, archive
