"""
Content models for Explorer

Python names are snake_case; the aliases are the JSON names used on the wire
and in the saved_content table.
"""
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional, Tuple
from datetime import datetime
from enum import Enum

from config.placement_config import PLACEHOLDER_ALT_TEXT


class GenerationMode(str, Enum):
    GENERATE = "generate"
    PASTE = "paste"


class SocialPostType(str, Enum):
    INFORMATIVE_SUMMARY = "informative-summary"
    TIPS_CAROUSEL = "tips-carousel"
    MOTIVATIONAL_QUOTE = "motivational-quote"
    STATS_BASED = "stats-based"
    PERSONAL_JOURNEY = "personal-journey"
    EXPERIMENTAL_REMIX = "experimental-remix"


class UserLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class DifficultyLevel(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class ImagePlacement(BaseModel):
    """
    One image rendered immediately after the given zero-indexed line.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str
    alt_text: str = Field(default="", alias="alt")
    after_line: int = Field(default=0, ge=0, alias="position")

    @property
    def is_placeholder(self) -> bool:
        return self.alt_text == PLACEHOLDER_ALT_TEXT


class MCQuestion(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    prompt: str = Field(..., min_length=1, alias="question")
    options: Tuple[str, ...] = Field(..., min_length=4, max_length=4)
    correct_option_index: int = Field(..., ge=0, le=3, alias="correctAnswer")

    @model_validator(mode="after")
    def _index_points_into_options(self):
        if self.correct_option_index >= len(self.options):
            raise ValueError("correctAnswer must index into options")
        return self


class GeneratedContent(BaseModel):
    """Result of the prompt-driven generation: text plus everything derived from it."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str
    images: Tuple[ImagePlacement, ...] = ()
    mcqs: Tuple[MCQuestion, ...] = ()


class SavedContentItem(BaseModel):
    """
    A durable copy of one snapshot's content fields, owned by one identity.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    owner_id: str = Field(..., alias="user_id")
    title: str
    text: str = Field(..., alias="generated_text")
    images: Tuple[ImagePlacement, ...] = Field(default=(), alias="generated_images")
    mcqs: Tuple[MCQuestion, ...] = Field(default=(), alias="generated_mcqs")
    social_post: str = Field(default="", alias="generated_social_media_post")
    created_at: Optional[datetime] = None
