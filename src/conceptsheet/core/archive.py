"""Bundle the original upload and the generated views into one zip."""

from __future__ import annotations

import io
import logging
import random
import re
import string
import zipfile
from dataclasses import dataclass

from conceptsheet.core.schemas import GeneratedResult, UploadedImage

logger = logging.getLogger(__name__)

TAG_ALPHABET = string.ascii_lowercase + string.digits
TAG_LENGTH = 4


def slugify_label(label: str) -> str:
    """'3/4 View (Watercolor)' -> '3-4-view-watercolor'."""
    slug = re.sub(r"[/\s()]", "-", label.lower())
    slug = re.sub(r"--+", "-", slug)
    return slug.strip("-")


@dataclass(frozen=True)
class CharacterSheetArchive:
    """A finished archive ready to hand to the client."""

    filename: str
    tag: str
    entries: tuple[str, ...]
    data: bytes

    media_type = "application/zip"


class ArchivePackager:
    """Builds character sheet archives with a fresh session tag each time."""

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()
        self._last_tag: str | None = None

    def new_tag(self) -> str:
        """Random lowercase alphanumeric tag, never equal to the previous one."""
        while True:
            tag = "".join(self.rng.choices(TAG_ALPHABET, k=TAG_LENGTH))
            if tag != self._last_tag:
                self._last_tag = tag
                return tag

    def package(
        self, original: UploadedImage, results: list[GeneratedResult]
    ) -> CharacterSheetArchive:
        """Serialize the original photo and every result into a zip archive."""
        tag = self.new_tag()

        files: list[tuple[str, bytes]] = [
            (f"original-{tag}.{original.extension}", original.content)
        ]
        for result in results:
            files.append((f"{slugify_label(result.label)}-{tag}.jpeg", result.image_bytes))

        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for name, content in files:
                zf.writestr(name, content)

        archive = CharacterSheetArchive(
            filename=f"character-sheet-{tag}.zip",
            tag=tag,
            entries=tuple(name for name, _ in files),
            data=buffer.getvalue(),
        )
        logger.info("Packaged %s with %d entries", archive.filename, len(files))
        return archive
