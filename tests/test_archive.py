"""Tests for the zip archive packager."""

import io
import zipfile

from conceptsheet.core.archive import ArchivePackager, slugify_label
from conceptsheet.core.catalog import CHARACTER_VIEWS, Style
from conceptsheet.core.agents import build_label
from conceptsheet.core.schemas import GeneratedResult, UploadedImage
from tests.conftest import PNG_BYTES


class ScriptedRng:
    """Returns pre-chosen tags, one per choices() call."""

    def __init__(self, tags):
        self.tags = list(tags)

    def choices(self, population, k):
        return list(self.tags.pop(0))


def _image(filename="hero.png") -> UploadedImage:
    return UploadedImage(content=PNG_BYTES, filename=filename, mime_type="image/png", preview_ref="p")


def _results(style=Style.WATERCOLOR) -> list[GeneratedResult]:
    return [
        GeneratedResult(view=view, label=build_label(view, style), image_bytes=f"img-{view.value}".encode())
        for view in CHARACTER_VIEWS
    ]


def test_slugify_label():
    assert slugify_label("Front View (Watercolor)") == "front-view-watercolor"
    assert slugify_label("3/4 View (Watercolor)") == "3-4-view-watercolor"
    assert slugify_label("Profile View (B&w Photo)") == "profile-view-b&w-photo"


def test_archive_holds_original_and_every_view():
    packager = ArchivePackager(rng=ScriptedRng(["ab12"]))

    archive = packager.package(_image(), _results())

    assert archive.filename == "character-sheet-ab12.zip"
    assert archive.entries == (
        "original-ab12.png",
        "front-view-watercolor-ab12.jpeg",
        "3-4-view-watercolor-ab12.jpeg",
        "profile-view-watercolor-ab12.jpeg",
    )

    with zipfile.ZipFile(io.BytesIO(archive.data)) as zf:
        assert zf.namelist() == list(archive.entries)
        assert zf.read("original-ab12.png") == PNG_BYTES
        assert zf.read("3-4-view-watercolor-ab12.jpeg") == b"img-three_quarter"


def test_entry_count_follows_results():
    archive = ArchivePackager().package(_image(), _results()[:1])
    assert len(archive.entries) == 2


def test_original_without_extension_is_stored_as_jpg():
    archive = ArchivePackager(rng=ScriptedRng(["zz99"])).package(_image("photo"), _results())
    assert archive.entries[0] == "original-zz99.jpg"


def test_consecutive_archives_get_distinct_tags():
    packager = ArchivePackager(rng=ScriptedRng(["aaaa", "aaaa", "bbbb"]))

    first = packager.package(_image(), _results())
    second = packager.package(_image(), _results())

    assert first.tag == "aaaa"
    assert second.tag == "bbbb"


def test_tags_are_short_lowercase_alphanumeric():
    tag = ArchivePackager().new_tag()
    assert len(tag) == 4
    assert tag.isalnum()
    assert tag == tag.lower()
