"""Fixed catalogs of styles, views, aspect ratios and chroma backgrounds."""

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Metadata Records
# ============================================================================


class StyleSpec(BaseModel):
    """Art-direction preset attached to a Style."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(description="Catalog key, e.g. 'vintage_comic'")
    display_name: str = Field(description="Human-readable style name")
    prompt: str = Field(description="Long-form style prompt fragment")


class ViewSpec(BaseModel):
    """Camera angle attached to a View."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Display name, e.g. 'Front View'")
    pose: str = Field(description="Pose instruction for the image model")


class ChromaSpec(BaseModel):
    """Flat keying background attached to a ChromaColor."""

    model_config = ConfigDict(frozen=True)

    display_name: str
    hex_value: str
    background_prompt: str


def format_style_name(key: str) -> str:
    """Turn a style key into its display name ('b&w_photo' -> 'B&w Photo')."""
    spaced = key.replace("_", " ")
    return re.sub(r"(^\w)|(\s+\w)", lambda m: m.group(0).upper(), spaced)


# ============================================================================
# Enums
# ============================================================================


class Style(str, Enum):
    """Supported art styles."""

    CLAYMATION = "claymation"
    CYBERPUNK = "cyberpunk"
    BW_PHOTO = "b&w_photo"
    VINTAGE_COMIC = "vintage_comic"
    WATERCOLOR = "watercolor"

    @property
    def spec(self) -> StyleSpec:
        return STYLE_SPECS[self]

    @property
    def display_name(self) -> str:
        return self.spec.display_name

    @property
    def prompt(self) -> str:
        return self.spec.prompt


class AspectRatio(str, Enum):
    """Output aspect ratios accepted by the image model."""

    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"


class ChromaColor(str, Enum):
    """Chroma key background colors."""

    GREEN = "green"
    BLUE = "blue"

    @property
    def spec(self) -> ChromaSpec:
        return CHROMA_SPECS[self]

    @property
    def display_name(self) -> str:
        return self.spec.display_name

    @property
    def hex_value(self) -> str:
        return self.spec.hex_value

    @property
    def background_prompt(self) -> str:
        return self.spec.background_prompt


class View(Enum):
    """The three camera angles of a character sheet, in generation order."""

    FRONT = "front"
    THREE_QUARTER = "three_quarter"
    PROFILE = "profile"

    @property
    def spec(self) -> ViewSpec:
        return VIEW_SPECS[self]

    @property
    def display_name(self) -> str:
        return self.spec.name

    @property
    def pose(self) -> str:
        return self.spec.pose


# ============================================================================
# Catalog Data
# ============================================================================

_STYLE_PROMPTS: dict[Style, str] = {
    Style.CLAYMATION: (
        "A charming claymation character made from plasticine. The image should "
        "have tangible textures, visible fingerprints, and soft lighting, evoking "
        "a classic stop-motion animation feel. Critically, avoid a smooth, digital "
        "3D-rendered look."
    ),
    Style.CYBERPUNK: (
        "A gritty cyberpunk portrait with subtle cybernetic enhancements. The "
        "scene is lit with dramatic, high-contrast neon lighting, casting deep "
        "shadows and creating a moody, futuristic atmosphere. The style should be "
        "painterly and textured, not photorealistic."
    ),
    Style.BW_PHOTO: (
        "A classic black and white photograph with high contrast and medium film "
        "grain. The lighting is dramatic and directional, sculpting the features "
        "with light and shadow to create an emotional, iconic portrait. The final "
        "image must be monochrome."
    ),
    Style.VINTAGE_COMIC: (
        "A portrait in the style of 1970s American underground comix. The art "
        "must feature heavy, expressive, and thick black ink outlines. All shading "
        "and tones must be created using a combination of coarse, visible halftone "
        "dots (Ben-Day dots) and stark black ink cross-hatching. Use a limited, "
        "muted CMYK color palette, as if printed on cheap, off-white newsprint. "
        "The overall feeling should be graphic, gritty, and hand-drawn. CRITICAL: "
        "Absolutely no smooth digital gradients, airbrushing, or photorealistic "
        "rendering. The image must look like a scanned page from an old comic book."
    ),
    Style.WATERCOLOR: (
        "A beautiful watercolor painting on textured paper. The style features "
        "soft, bleeding edges, pigment granulation, and bright highlights, "
        "capturing the authentic feel of a wet-on-wet watercolor technique. Avoid "
        "sharp, digital lines or a dry brush look."
    ),
}

STYLE_SPECS: dict[Style, StyleSpec] = {
    style: StyleSpec(
        key=style.value,
        display_name=format_style_name(style.value),
        prompt=prompt,
    )
    for style, prompt in _STYLE_PROMPTS.items()
}

VIEW_SPECS: dict[View, ViewSpec] = {
    View.FRONT: ViewSpec(
        name="Front View",
        pose=(
            "Front view. The character is facing forward, looking directly into "
            "the camera. The head is not turned."
        ),
    ),
    View.THREE_QUARTER: ViewSpec(
        name="3/4 View",
        pose=(
            "Three-quarter view. The character's head is turned approximately "
            "45 degrees away from the camera."
        ),
    ),
    View.PROFILE: ViewSpec(
        name="Profile View",
        pose=(
            "Side-profile view. The camera is viewed from the side, looking "
            "directly sideways."
        ),
    ),
}

CHROMA_SPECS: dict[ChromaColor, ChromaSpec] = {
    ChromaColor.GREEN: ChromaSpec(
        display_name="Chroma Green",
        hex_value="#00ff00",
        background_prompt=(
            "A solid, flat, evenly lit chroma key green background (#00ff00)."
        ),
    ),
    ChromaColor.BLUE: ChromaSpec(
        display_name="Chroma Blue",
        hex_value="#0000ff",
        background_prompt=(
            "A solid, flat, evenly lit chroma key blue background (#0000ff)."
        ),
    ),
}

CHARACTER_VIEWS: tuple[View, ...] = tuple(View)
