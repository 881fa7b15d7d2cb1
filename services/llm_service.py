"""
LLM service for Explorer, backed by Gemini
"""
import re
import json
import asyncio
import logging
from typing import Any, List, Optional

from google import genai
from google.genai import types

from config.app_config import GEMINI_API_KEY, GEMINI_MODEL, FALLBACK_GEMINI_MODEL, GENERATION_TIMEOUT
from models.errors import GatewayError

logger = logging.getLogger(__name__)

CODE_FENCE_START = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
CODE_FENCE_END = re.compile(r"\s*```$")


def initialize_gemini() -> genai.Client:
    """Initialize the Gemini client with the configured API key."""
    if not GEMINI_API_KEY:
        raise ValueError("GEMINI_API_KEY not found in environment variables")
    return genai.Client(api_key=GEMINI_API_KEY)


def extract_text(response: Any) -> str:
    """Join the text parts of the first candidate of a Gemini response."""
    if response and response.candidates:
        candidate = response.candidates[0]
        if candidate.content and getattr(candidate.content, "parts", None):
            return "".join(p.text for p in candidate.content.parts if getattr(p, "text", None))
    return ""


def clean_json_response(content: str) -> str:
    """Strip markdown code fences and surrounding whitespace from a JSON answer."""
    content = content.strip()
    if content.startswith("```"):
        content = CODE_FENCE_START.sub("", content)
        content = CODE_FENCE_END.sub("", content)
    return content.strip()


class LLMService:
    def __init__(
        self,
        client: Optional[genai.Client] = None,
        model: str = GEMINI_MODEL,
        fallback_model: str = FALLBACK_GEMINI_MODEL,
        timeout: float = GENERATION_TIMEOUT,
    ):
        self._client = client
        self.model = model
        self.fallback_model = fallback_model
        self.timeout = timeout

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = initialize_gemini()
        return self._client

    def _models_to_try(self) -> List[str]:
        models = [self.model]
        if self.fallback_model and self.fallback_model != self.model:
            models.append(self.fallback_model)
        return models

    async def generate_text(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_output_tokens: Optional[int] = None,
    ) -> str:
        """
        Generate text, falling back to the second model when the first one fails
        or answers with nothing.
        """
        config = types.GenerateContentConfig(
            system_instruction=system_prompt,
            temperature=temperature,
            max_output_tokens=max_output_tokens,
        )
        client = self.client
        last_error = "Empty response from model"

        for model_name in self._models_to_try():
            try:
                response = await asyncio.wait_for(
                    asyncio.to_thread(
                        client.models.generate_content,
                        model=model_name,
                        contents=user_prompt,
                        config=config,
                    ),
                    timeout=self.timeout,
                )
                text_output = extract_text(response).strip()
                if text_output:
                    logger.info(f"Generated {len(text_output)} characters with {model_name}")
                    return text_output
                logger.error(f"No text parts found in {model_name} response")
                last_error = "Empty response from model"
            except asyncio.TimeoutError:
                logger.error(f"{model_name} timed out after {self.timeout} seconds")
                last_error = "The AI provider took too long to respond"
            except Exception as e:
                logger.error(f"Error generating with {model_name}: {str(e)}")
                last_error = str(e)

        raise GatewayError(f"Failed to generate content: {last_error}")

    async def generate_json(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_output_tokens: Optional[int] = None,
    ) -> Any:
        """Generate and parse a JSON answer; malformed JSON is a gateway failure."""
        raw = await self.generate_text(system_prompt, user_prompt, temperature, max_output_tokens)
        cleaned = clean_json_response(raw)
        try:
            return json.loads(cleaned)
        except json.JSONDecodeError as e:
            logger.error(f"Malformed JSON from model: {e}; raw content: {raw[:200]}")
            raise GatewayError("The AI returned a malformed response. Please try again.") from e
