"""
Synthetic image entries shown while real images are still being fetched.

The prompt flow cannot know the length of a text that does not exist yet, so
its placeholders are spaced blindly; the paste flow spreads them over the
lines it already has.
"""
from typing import Tuple

from config.placement_config import (
    MAX_IMAGES,
    PLACEHOLDER_ALT_TEXT,
    PLACEHOLDER_URL,
    PROMPT_PLACEHOLDER_COUNT,
    PROMPT_PLACEHOLDER_SPACING,
    SHORT_TEXT_LINES,
    content_lines,
    placement_interval,
)
from models.content import ImagePlacement


def placeholder(after_line: int) -> ImagePlacement:
    return ImagePlacement(url=PLACEHOLDER_URL, alt_text=PLACEHOLDER_ALT_TEXT, after_line=after_line)


def prompt_placeholders() -> Tuple[ImagePlacement, ...]:
    return tuple(
        placeholder(i * PROMPT_PLACEHOLDER_SPACING)
        for i in range(1, PROMPT_PLACEHOLDER_COUNT + 1)
    )


def paste_placeholders(text: str, requested: int = MAX_IMAGES) -> Tuple[ImagePlacement, ...]:
    count = max(1, min(requested, MAX_IMAGES))
    line_count = len(content_lines(text))

    if line_count <= SHORT_TEXT_LINES:
        return (placeholder(max(line_count - 1, 0)),)

    interval = placement_interval(line_count, count)
    return tuple(
        placeholder(i * interval)
        for i in range(1, count + 1)
        if i * interval < line_count
    )
