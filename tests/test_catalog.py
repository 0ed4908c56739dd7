"""Tests for the style, view and background catalogs."""

from conceptsheet.core.agents import build_label
from conceptsheet.core.catalog import (
    CHARACTER_VIEWS,
    AspectRatio,
    ChromaColor,
    Style,
    View,
    format_style_name,
)


def test_style_keys_are_exactly_the_five_presets():
    assert [s.value for s in Style] == [
        "claymation",
        "cyberpunk",
        "b&w_photo",
        "vintage_comic",
        "watercolor",
    ]


def test_format_style_name():
    assert format_style_name("vintage_comic") == "Vintage Comic"
    assert format_style_name("b&w_photo") == "B&w Photo"
    assert format_style_name("watercolor") == "Watercolor"


def test_every_style_has_a_prompt():
    for style in Style:
        assert style.prompt
        assert style.display_name == format_style_name(style.value)


def test_views_in_generation_order():
    assert CHARACTER_VIEWS == (View.FRONT, View.THREE_QUARTER, View.PROFILE)
    assert [v.display_name for v in CHARACTER_VIEWS] == [
        "Front View",
        "3/4 View",
        "Profile View",
    ]


def test_aspect_ratios():
    assert {r.value for r in AspectRatio} == {"16:9", "9:16"}


def test_chroma_backgrounds_name_their_hex_value():
    assert ChromaColor.GREEN.hex_value == "#00ff00"
    assert ChromaColor.BLUE.hex_value == "#0000ff"
    for chroma in ChromaColor:
        assert chroma.hex_value in chroma.background_prompt


def test_labels_combine_view_and_style():
    labels = [build_label(view, Style.WATERCOLOR) for view in CHARACTER_VIEWS]
    assert labels == [
        "Front View (Watercolor)",
        "3/4 View (Watercolor)",
        "Profile View (Watercolor)",
    ]
    assert build_label(View.FRONT, Style.BW_PHOTO) == "Front View (B&w Photo)"
