"""
Quiz (MCQ) service for Explorer
"""
import logging
from typing import Any, List, Optional

from pydantic import ValidationError as SchemaError

from models.content import DifficultyLevel, MCQuestion
from prompts.content_prompts import build_mcq_prompt
from services.llm_service import LLMService

logger = logging.getLogger(__name__)

DEFAULT_MCQ_COUNT = 3


def parse_mcqs(parsed: Any) -> List[MCQuestion]:
    """
    Accept either a bare array or an object with a 'questions' array and keep
    only well-formed questions.
    """
    if isinstance(parsed, list):
        candidates = parsed
    elif isinstance(parsed, dict):
        candidates = parsed.get("questions") or []
    else:
        candidates = []

    mcqs = []
    for candidate in candidates:
        try:
            mcqs.append(MCQuestion.model_validate(candidate))
        except SchemaError as e:
            logger.warning(f"Dropping malformed MCQ: {e.error_count()} validation error(s)")
    logger.info(f"Validated {len(mcqs)}/{len(candidates)} MCQs")
    return mcqs


class McqService:
    def __init__(self, llm: LLMService):
        self.llm = llm

    async def generate_mcqs(
        self,
        text: str,
        difficulty: Optional[DifficultyLevel] = None,
        count: int = DEFAULT_MCQ_COUNT,
    ) -> List[MCQuestion]:
        logger.info(f"Generating {count} MCQs for text length: {len(text)}")
        parsed = await self.llm.generate_json(
            build_mcq_prompt(count, difficulty.value if difficulty else None),
            text,
            max_output_tokens=200 * count + 200,
        )
        return parse_mcqs(parsed)
