"""Prompt and message templates for the generation workflow.

These templates use {placeholder} syntax for string formatting.
"""

# =============================================================================
# Description Service
# =============================================================================

DESCRIPTION_PROMPT = (
    "Analyze the person in the source image, but generate a detailed, objective "
    "description focusing *only* on the features that would be visible in a "
    "headshot from the shoulders up. For example, do not describe their legs or "
    "shoes. Focus on key facial features (eye shape and color, nose structure, "
    "lip shape, jawline), skin tone, hair (color, texture, style), and any "
    "visible clothing. The description must be purely descriptive and objective, "
    "like a police sketch artist's notes, and should not exceed 150 words. Do not "
    "include any titles, headers, or conversational preamble. Output only the raw "
    "description of the person."
)

# =============================================================================
# Image Generation
# =============================================================================

GENERATION_PROMPT = """\
Generate an image with the following strict parameters:
1.  **Framing & Composition:** A close-up headshot, framing the character from the shoulders up. This is the most critical rule. The image MUST be framed this way.
2.  **Character Pose/Angle:** {pose}.
3.  **Art Style:** {style_prompt}.
4.  **Character Description:** {description}.
5.  **Background:** {background_prompt}
6.  **Lighting:** The lighting on the subject should be neutral and clean.
7.  **Subject Count:** Exactly one person in the image.\
"""

RESULT_LABEL = "{view_name} ({style_name})"

# =============================================================================
# Progress Captions
# =============================================================================

DESCRIBE_PROGRESS = "Analyzing your character..."
GENERATE_PROGRESS = "Generating {view_name} ({attempt}/{max_attempts})..."

# =============================================================================
# Error Messages
# =============================================================================

FILE_TOO_LARGE_MESSAGE = (
    "File is too large. Please upload an image under {max_mb}MB."
)
NOT_AN_IMAGE_MESSAGE = "Unsupported file type '{content_type}'. Please upload an image."

CONTENT_BLOCKED_MESSAGE = (
    "Image analysis failed because the content was blocked ({reason}). "
    "Please try a different image."
)
EMPTY_DESCRIPTION_MESSAGE = (
    "Could not analyze the image; the model returned an empty description. "
    "Please try a different one."
)
NO_IMAGE_DATA_MESSAGE = "Model returned no image data."
GENERATION_EXHAUSTED_MESSAGE = (
    "Failed to generate '{view}' after {attempts} attempts. Last error: {last_error}"
)
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."
GENERATION_INTERRUPTED_MESSAGE = (
    "Generation was interrupted before the sheet was finished. Please try again."
)
