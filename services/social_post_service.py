"""
Social media post service for Explorer
"""
import logging
from typing import Optional

from models.content import SocialPostType, UserLevel
from models.errors import GatewayError
from prompts.content_prompts import build_social_post_prompt
from services.llm_service import LLMService

logger = logging.getLogger(__name__)


class SocialPostService:
    def __init__(self, llm: LLMService):
        self.llm = llm

    async def generate_social_post(
        self,
        text: str,
        post_type: SocialPostType,
        user_level: Optional[UserLevel] = None,
    ) -> str:
        system_prompt = build_social_post_prompt(post_type.value, user_level.value if user_level else None)
        post = await self.llm.generate_text(system_prompt, text, temperature=0.8, max_output_tokens=600)
        post = post.strip().strip('"').strip()
        if not post:
            raise GatewayError("Failed to generate social media post")
        logger.info(f"Generated {post_type.value} post ({len(post)} characters)")
        return post
