"""
Request and response bodies for the Explorer HTTP API
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict, Any

from models.content import (
    DifficultyLevel,
    ImagePlacement,
    MCQuestion,
    SocialPostType,
    UserLevel,
)


class ContentRequest(BaseModel):
    prompt: str = Field(..., min_length=1, description="User's prompt for content generation")


class TextRequest(BaseModel):
    text: str = Field(..., min_length=1, description="Text the images are chosen for")


class McqRequest(BaseModel):
    text: str = Field(..., min_length=1, description="Text the questions are about")
    difficulty: Optional[DifficultyLevel] = Field(default=None, description="Question difficulty")


class SocialPostRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(..., min_length=1)
    post_type: SocialPostType = Field(..., alias="postType")
    user_level: Optional[UserLevel] = Field(default=None, alias="userLevel")


class SaveContentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1)
    generated_text: str = Field(..., min_length=1, alias="generatedText")
    generated_images: List[ImagePlacement] = Field(default=[], alias="generatedImages")
    generated_mcqs: List[MCQuestion] = Field(default=[], alias="generatedMcqs")
    generated_social_media_post: str = Field(default="", alias="generatedSocialMediaPost")


class ContentResponse(BaseModel):
    text: str
    images: List[ImagePlacement]
    mcqs: List[MCQuestion]


class ImagesResponse(BaseModel):
    images: List[ImagePlacement]


class McqsResponse(BaseModel):
    mcqs: List[MCQuestion]


class SocialPostResponse(BaseModel):
    post: str


class SavedContentResponse(BaseModel):
    success: bool = True
    savedContent: Dict[str, Any]
    message: str


class DeletedContentResponse(BaseModel):
    success: bool = True
    deletedContent: Dict[str, Any]
    message: str
