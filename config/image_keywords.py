"""
Stock-photo keyword lists for Explorer

Topics in UNFRIENDLY_KEYWORDS rarely have usable stock photos, so texts about
them get no images unless they also mention something in FRIENDLY_KEYWORDS.
Keywords match whole words or their plural, case-insensitively.
"""
import re
from typing import Iterable

UNFRIENDLY_KEYWORDS = (
    "ai", "artificial intelligence", "neural", "robot", "cyber", "cyberpunk",
    "hologram", "matrix", "metaverse", "machine learning",
    "deep learning", "quantum", "simulation", "biotech", "genetics", "spaceship",
)

FRIENDLY_KEYWORDS = (
    "nature", "flower", "forest", "tree", "sunset", "mountain", "animal",
    "horse", "cat", "dog", "bird", "person", "people", "man", "woman", "child", "kids",
    "travel", "beach", "car", "road", "building", "city", "landscape", "food",
    "sky", "river", "street", "garden", "park", "bridge", "boat", "bicycle", "field",
    "lake", "snow", "rain", "umbrella", "coffee", "desk", "laptop", "phone", "books",
    "writing", "reading", "studying", "shopping", "cooking", "walking", "running",
    "friends", "family", "vacation", "countryside", "market", "cafe", "sunrise", "sunlight",
)


def _pattern(keywords: Iterable[str]) -> re.Pattern:
    alternatives = "|".join(re.escape(keyword) for keyword in sorted(keywords, key=len, reverse=True))
    return re.compile(rf"\b(?:{alternatives})s?\b", re.IGNORECASE)


_UNFRIENDLY = _pattern(UNFRIENDLY_KEYWORDS)
_FRIENDLY = _pattern(FRIENDLY_KEYWORDS)


def has_unfriendly_keyword(text: str) -> bool:
    return _UNFRIENDLY.search(text) is not None


def has_friendly_keyword(text: str) -> bool:
    return _FRIENDLY.search(text) is not None


def is_photo_friendly(text: str) -> bool:
    """False when the text only talks about topics stock photos do not cover."""
    return not has_unfriendly_keyword(text) or has_friendly_keyword(text)
