"""
Lazily constructed service instances, used as FastAPI dependencies
"""
from auth.middleware import get_auth_middleware
from services.content_service import ContentService
from services.image_service import ImageService
from services.llm_service import LLMService
from services.mcq_service import McqService
from services.saved_content_service import SavedContentService
from services.social_post_service import SocialPostService

# Global service instances - created on first use
llm_service = None
image_service = None
mcq_service = None
content_service = None
social_post_service = None
saved_content_service = None


def get_llm_service() -> LLMService:
    global llm_service
    if llm_service is None:
        llm_service = LLMService()
    return llm_service


def get_image_service() -> ImageService:
    global image_service
    if image_service is None:
        image_service = ImageService(get_llm_service())
    return image_service


def get_mcq_service() -> McqService:
    global mcq_service
    if mcq_service is None:
        mcq_service = McqService(get_llm_service())
    return mcq_service


def get_content_service() -> ContentService:
    global content_service
    if content_service is None:
        content_service = ContentService(get_llm_service(), get_image_service(), get_mcq_service())
    return content_service


def get_social_post_service() -> SocialPostService:
    global social_post_service
    if social_post_service is None:
        social_post_service = SocialPostService(get_llm_service())
    return social_post_service


def get_saved_content_service() -> SavedContentService:
    global saved_content_service
    if saved_content_service is None:
        saved_content_service = SavedContentService(get_auth_middleware().supabase)
    return saved_content_service
