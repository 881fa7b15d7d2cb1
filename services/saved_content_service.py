"""
Saved content service for Explorer database operations
"""
from typing import List, Dict, Any
import logging
from supabase import Client

from config.app_config import SAVED_CONTENT_TABLE
from config.decorators import retry_on_transient_error
from models.errors import GatewayError, NotFoundError
from models.requests import SaveContentRequest

logger = logging.getLogger(__name__)


@retry_on_transient_error
def _execute(query):
    return query.execute()


class SavedContentService:
    def __init__(self, supabase_client: Client, table: str = SAVED_CONTENT_TABLE):
        self.supabase = supabase_client
        self.table = table

    async def save_content(self, user_id: str, request: SaveContentRequest) -> Dict[str, Any]:
        """
        Save a snapshot of generated content for a user
        """
        data = {
            "user_id": user_id,
            "title": request.title,
            "generated_text": request.generated_text,
            "generated_images": [image.model_dump(mode="json", by_alias=True) for image in request.generated_images],
            "generated_mcqs": [mcq.model_dump(mode="json", by_alias=True) for mcq in request.generated_mcqs],
            "generated_social_media_post": request.generated_social_media_post,
        }
        logger.info(
            f"Saving content for user {user_id}: '{request.title}', {len(request.generated_text)} chars, "
            f"{len(data['generated_images'])} images, {len(data['generated_mcqs'])} MCQs"
        )
        try:
            response = _execute(self.supabase.table(self.table).insert(data))
        except Exception as e:
            logger.error(f"Error saving content for user {user_id}: {str(e)}", exc_info=True)
            raise GatewayError("Failed to save content") from e

        if not response.data:
            raise GatewayError("Failed to save content")
        logger.info(f"Content saved successfully: {response.data[0]['id']}")
        return response.data[0]

    async def list_content(self, user_id: str, limit: int = 50) -> List[Dict[str, Any]]:
        """
        Get a user's saved content, newest first
        """
        try:
            response = _execute(
                self.supabase.table(self.table).select("*").eq("user_id", user_id).order("created_at", desc=True).limit(limit)
            )
        except Exception as e:
            logger.error(f"Error listing saved content for user {user_id}: {str(e)}")
            raise GatewayError("Failed to load saved content") from e
        return response.data or []

    async def delete_content(self, content_id: str, user_id: str) -> Dict[str, Any]:
        """
        Delete a saved item (with user ownership check)
        """
        logger.info(f"Deleting saved content for user: {user_id} content ID: {content_id}")
        try:
            response = _execute(self.supabase.table(self.table).delete().eq("id", content_id).eq("user_id", user_id))
        except Exception as e:
            logger.error(f"Error deleting saved content {content_id}: {str(e)}")
            raise GatewayError("Failed to delete saved content") from e

        if not response.data:
            raise NotFoundError("Content not found or you don't have permission to delete it")
        logger.info(f"Content deleted successfully: {content_id}")
        return response.data[0]
