"""
Image service for Explorer: picks stock photos for a text and decides where they go
"""
import asyncio
import logging
from typing import List, Optional

import httpx

from config.app_config import PEXELS_API_KEY, PEXELS_SEARCH_URL, PEXELS_TIMEOUT
from config.image_keywords import has_unfriendly_keyword, is_photo_friendly
from config.placement_config import MAX_IMAGES, content_lines, placement_interval
from models.content import ImagePlacement
from models.errors import GatewayError
from prompts.content_prompts import IMAGE_PROMPTS_SYSTEM_PROMPT
from services.llm_service import LLMService

logger = logging.getLogger(__name__)

FALLBACK_IMAGE_QUERY = "A visual representation related to the provided text"
ALT_TEXT_LIMIT = 100


class ImageService:
    def __init__(
        self,
        llm: LLMService,
        api_key: Optional[str] = PEXELS_API_KEY,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.llm = llm
        self.api_key = api_key
        self._http_client = http_client

    async def propose_queries(self, text: str) -> List[str]:
        """
        Ask the LLM for image search queries. An unusable answer falls back to
        a single generic query; queries about topics stock photos do not cover
        are dropped, which may leave none.
        """
        try:
            queries = await self.llm.generate_json(
                IMAGE_PROMPTS_SYSTEM_PROMPT.format(count=MAX_IMAGES),
                text,
                max_output_tokens=500,
            )
        except GatewayError as e:
            logger.error(f"Error generating image queries: {e.message}")
            return [FALLBACK_IMAGE_QUERY]

        if not isinstance(queries, list):
            logger.warning(f"Image queries were not a JSON array: {type(queries).__name__}")
            return [FALLBACK_IMAGE_QUERY]

        cleaned = [q.strip() for q in queries if isinstance(q, str) and q.strip()]
        if not cleaned:
            return [FALLBACK_IMAGE_QUERY]

        suitable = [q for q in cleaned if not has_unfriendly_keyword(q)]
        for query in cleaned:
            if query not in suitable:
                logger.info(f"Skipping image query with unsuitable keywords: '{query}'")
        return suitable[:MAX_IMAGES]

    async def search_image(self, client: httpx.AsyncClient, query: str) -> Optional[str]:
        """Return the URL of the best matching photo, or None when there is none."""
        try:
            response = await client.get(
                PEXELS_SEARCH_URL,
                params={"query": query, "per_page": 1},
                headers={"Authorization": self.api_key},
            )
        except httpx.HTTPError as e:
            logger.error(f"Error fetching from Pexels for '{query}': {str(e)}")
            return None

        if response.status_code != 200:
            logger.error(f"Pexels API error {response.status_code} for '{query}'")
            return None

        try:
            data = response.json()
        except ValueError:
            logger.error(f"Pexels returned a non-JSON body for '{query}'")
            return None

        photos = data.get("photos") if isinstance(data, dict) else None
        if not isinstance(photos, list) or not photos:
            logger.info(f"No Pexels results for '{query}'")
            return None

        src = photos[0].get("src") if isinstance(photos[0], dict) else None
        url = src.get("large") if isinstance(src, dict) else None
        if not url:
            logger.warning(f"Pexels photo for '{query}' has no large image URL")
            return None
        return url

    async def _search_all(self, client: httpx.AsyncClient, queries: List[str]) -> List[Optional[str]]:
        return await asyncio.gather(*(self.search_image(client, query) for query in queries))

    async def generate_images(self, text: str) -> List[ImagePlacement]:
        """
        Find up to MAX_IMAGES photos for the text and spread them over its lines.
        Queries without a result are skipped, so the list may be empty.
        """
        if not self.api_key:
            raise GatewayError("Pexels API key is not configured")

        if not is_photo_friendly(text):
            logger.info("Text only covers topics without stock photos, skipping images")
            return []

        queries = await self.propose_queries(text)
        if not queries:
            logger.info("No suitable image queries left after filtering")
            return []

        line_count = len(content_lines(text))
        interval = placement_interval(line_count, len(queries))

        if self._http_client is not None:
            urls = await self._search_all(self._http_client, queries)
        else:
            async with httpx.AsyncClient(timeout=PEXELS_TIMEOUT) as client:
                urls = await self._search_all(client, queries)

        images = [
            ImagePlacement(url=url, alt_text=query[:ALT_TEXT_LIMIT], after_line=(i + 1) * interval)
            for i, (query, url) in enumerate(zip(queries, urls))
            if url
        ]
        logger.info(f"Placed {len(images)}/{len(queries)} images over {line_count} lines")
        return images
