"""
Saved content routes for Explorer
"""
import logging
from fastapi import APIRouter, HTTPException, status, Depends, Query

from auth.dependencies import get_current_user
from models.errors import ContentError
from models.requests import DeletedContentResponse, SaveContentRequest, SavedContentResponse
from routes.errors import http_error
from services.registry import get_saved_content_service
from services.saved_content_service import SavedContentService

router = APIRouter(prefix="/api/v1/saved-content", tags=["Saved Content"])
logger = logging.getLogger(__name__)


@router.post("", response_model=SavedContentResponse, status_code=status.HTTP_201_CREATED)
async def save_content(
    request: SaveContentRequest,
    current_user: dict = Depends(get_current_user),
    saved_content_service: SavedContentService = Depends(get_saved_content_service),
):
    """
    Save the current content under a title
    """
    if not request.title.strip() or not request.generated_text.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Title and generated text are required"
        )

    try:
        saved = await saved_content_service.save_content(current_user["id"], request)
        return SavedContentResponse(savedContent=saved, message="Content saved successfully!")

    except ContentError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Save content error: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save content"
        )


@router.get("")
async def list_saved_content(
    current_user: dict = Depends(get_current_user),
    limit: int = Query(default=50, ge=1, le=100),
    saved_content_service: SavedContentService = Depends(get_saved_content_service),
):
    """
    List the current user's saved content, newest first
    """
    try:
        items = await saved_content_service.list_content(current_user["id"], limit=limit)
        return {"items": items}

    except ContentError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"List saved content error: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load saved content"
        )


@router.delete("/{content_id}", response_model=DeletedContentResponse)
async def delete_saved_content(
    content_id: str,
    current_user: dict = Depends(get_current_user),
    saved_content_service: SavedContentService = Depends(get_saved_content_service),
):
    """
    Delete one of the current user's saved items
    """
    try:
        deleted = await saved_content_service.delete_content(content_id, current_user["id"])
        return DeletedContentResponse(deletedContent=deleted, message="Content deleted successfully!")

    except ContentError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Delete saved content error: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete saved content"
        )
