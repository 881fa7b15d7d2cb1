"""
Content generation routes for Explorer
"""
import time
import logging
from fastapi import APIRouter, HTTPException, status, Depends

from auth.dependencies import get_current_user
from models.errors import ContentError
from models.requests import (
    ContentRequest,
    ContentResponse,
    ImagesResponse,
    McqRequest,
    McqsResponse,
    SocialPostRequest,
    SocialPostResponse,
    TextRequest,
)
from routes.errors import http_error
from services.content_service import ContentService
from services.image_service import ImageService
from services.mcq_service import McqService
from services.registry import (
    get_content_service,
    get_image_service,
    get_mcq_service,
    get_social_post_service,
)
from services.social_post_service import SocialPostService

router = APIRouter(prefix="/api/v1", tags=["Content"])
logger = logging.getLogger(__name__)


def _require_text(value: str, detail: str):
    if not value.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


@router.post("/generate-content", response_model=ContentResponse)
async def generate_content(
    request: ContentRequest,
    current_user: dict = Depends(get_current_user),
    content_service: ContentService = Depends(get_content_service),
):
    """
    Generate text for a prompt together with placed images and a quiz
    """
    request_id = f"{current_user['id']}_{int(time.time())}"
    logger.info(f"[{request_id}] Content generation requested by {current_user['email']}")
    _require_text(request.prompt, "Prompt is required")

    try:
        start_time = time.time()
        result = await content_service.generate_content(request.prompt)
        logger.info(
            f"[{request_id}] Generated {len(result.text)} chars, {len(result.images)} images, "
            f"{len(result.mcqs)} MCQs in {int((time.time() - start_time) * 1000)} ms"
        )
        return ContentResponse(text=result.text, images=list(result.images), mcqs=list(result.mcqs))

    except ContentError as e:
        logger.error(f"[{request_id}] Content generation failed: {e.message}")
        raise http_error(e)
    except Exception as e:
        logger.error(f"[{request_id}] Unexpected error: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred while generating content."
        )


@router.post("/generate-images", response_model=ImagesResponse)
async def generate_images(
    request: TextRequest,
    current_user: dict = Depends(get_current_user),
    image_service: ImageService = Depends(get_image_service),
):
    """
    Pick images for existing text. An empty list is a valid answer.
    """
    _require_text(request.text, "Text content is required")
    logger.info(f"Image generation requested by {current_user['id']} for text length: {len(request.text)}")

    try:
        images = await image_service.generate_images(request.text)
        return ImagesResponse(images=images)

    except ContentError as e:
        logger.error(f"Image generation failed for {current_user['id']}: {e.message}")
        raise http_error(e)
    except Exception as e:
        logger.error(f"Unexpected image generation error: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred while generating images."
        )


@router.post("/generate-mcqs", response_model=McqsResponse)
async def generate_mcqs(
    request: McqRequest,
    current_user: dict = Depends(get_current_user),
    mcq_service: McqService = Depends(get_mcq_service),
):
    """
    Generate multiple-choice questions about existing text
    """
    _require_text(request.text, "Text content is required")
    logger.info(f"MCQ generation requested by {current_user['id']} (difficulty: {request.difficulty})")

    try:
        mcqs = await mcq_service.generate_mcqs(request.text, request.difficulty)
        return McqsResponse(mcqs=mcqs)

    except ContentError as e:
        logger.error(f"MCQ generation failed for {current_user['id']}: {e.message}")
        raise http_error(e)
    except Exception as e:
        logger.error(f"Unexpected MCQ generation error: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred while generating questions."
        )


@router.post("/generate-social-post", response_model=SocialPostResponse)
async def generate_social_post(
    request: SocialPostRequest,
    current_user: dict = Depends(get_current_user),
    social_post_service: SocialPostService = Depends(get_social_post_service),
):
    """
    Turn existing text into a social media post of the requested type
    """
    _require_text(request.text, "Text content is required")
    logger.info(f"Social post requested by {current_user['id']}: {request.post_type.value}")

    try:
        post = await social_post_service.generate_social_post(request.text, request.post_type, request.user_level)
        return SocialPostResponse(post=post)

    except ContentError as e:
        logger.error(f"Social post generation failed for {current_user['id']}: {e.message}")
        raise http_error(e)
    except Exception as e:
        logger.error(f"Unexpected social post error: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred while generating the post."
        )
