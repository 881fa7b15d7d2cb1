"""
Image placement configuration for Explorer

Central place for the constants and line arithmetic shared by the server-side
image placement and the client-side placeholder synthesis.
"""

from typing import List

# At most this many images are placed into one piece of text
MAX_IMAGES = 3

# Images are never placed closer together than this many lines
MIN_LINE_SPACING = 5

# Texts with this many non-blank lines or fewer get a single trailing image
SHORT_TEXT_LINES = 5

# Prompt-flow placeholders are spaced blindly because the text does not exist yet
PROMPT_PLACEHOLDER_COUNT = 3
PROMPT_PLACEHOLDER_SPACING = 3

# Sentinel values identifying a placeholder without inspecting its URL
PLACEHOLDER_URL = "/ExplorerPlaceHolderImage.png"
PLACEHOLDER_ALT_TEXT = "Loading image..."

# Shown in place of the text while the prompt flow is generating it
GENERATING_TEXT_MARKER = "Generating content..."


def content_lines(text: str) -> List[str]:
    """Return the non-blank lines of a text."""
    return [line for line in text.split("\n") if line.strip()]


def placement_interval(line_count: int, image_count: int) -> int:
    """
    Spacing between images so they are spread evenly, but never closer than
    MIN_LINE_SPACING lines apart.
    """
    return max(line_count // (image_count + 1), MIN_LINE_SPACING)
