"""
Content service for Explorer: prompt -> text, images and quiz in one call
"""
import asyncio
import logging
from typing import List

from models.content import GeneratedContent, ImagePlacement, MCQuestion
from models.errors import GatewayError
from prompts.content_prompts import TEXT_SYSTEM_PROMPT
from services.image_service import ImageService
from services.llm_service import LLMService
from services.mcq_service import McqService

logger = logging.getLogger(__name__)

CONTENT_MCQ_COUNT = 5


class ContentService:
    def __init__(self, llm: LLMService, image_service: ImageService, mcq_service: McqService):
        self.llm = llm
        self.image_service = image_service
        self.mcq_service = mcq_service

    async def generate_content(self, prompt: str) -> GeneratedContent:
        """
        The text is mandatory; images and questions degrade to empty lists
        when their providers fail.
        """
        text = await self.llm.generate_text(TEXT_SYSTEM_PROMPT, prompt, max_output_tokens=1000)
        images, mcqs = await asyncio.gather(self._images_or_empty(text), self._mcqs_or_empty(text))
        return GeneratedContent(text=text, images=tuple(images), mcqs=tuple(mcqs))

    async def _images_or_empty(self, text: str) -> List[ImagePlacement]:
        try:
            return await self.image_service.generate_images(text)
        except GatewayError as e:
            logger.error(f"Image generation failed, continuing without images: {e.message}")
            return []

    async def _mcqs_or_empty(self, text: str) -> List[MCQuestion]:
        try:
            return await self.mcq_service.generate_mcqs(text, count=CONTENT_MCQ_COUNT)
        except GatewayError as e:
            logger.error(f"MCQ generation failed, continuing without questions: {e.message}")
            return []
