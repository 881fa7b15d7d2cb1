"""
Gateways from the client to the Explorer API.

The controller depends only on the two Protocols; the HTTP implementations
attach the signed-in identity's bearer token and turn every failure into a
ContentError carrying a message fit for the user.
"""
import logging
from typing import Any, List, Optional, Protocol, Sequence

import httpx
from pydantic import ValidationError as SchemaError

from client.auth_session import AuthSession
from config.app_config import CONTENT_API_URL, CLIENT_HTTP_TIMEOUT
from models.content import (
    DifficultyLevel,
    GeneratedContent,
    ImagePlacement,
    MCQuestion,
    SavedContentItem,
    SocialPostType,
    UserLevel,
)
from models.errors import GatewayError, NotFoundError, UnauthorizedError

logger = logging.getLogger(__name__)


class AIContentGateway(Protocol):
    async def generate_content(self, prompt: str) -> GeneratedContent: ...

    async def generate_images(self, text: str) -> List[ImagePlacement]: ...

    async def generate_mcqs(self, text: str, difficulty: Optional[DifficultyLevel] = None) -> List[MCQuestion]: ...

    async def generate_social_post(
        self, text: str, post_type: SocialPostType, user_level: Optional[UserLevel] = None
    ) -> str: ...


class PersistenceGateway(Protocol):
    async def save(
        self,
        title: str,
        text: str,
        images: Sequence[ImagePlacement],
        mcqs: Sequence[MCQuestion],
        social_post: str,
    ) -> SavedContentItem: ...

    async def list_items(self) -> List[SavedContentItem]: ...

    async def delete(self, item_id: str) -> None: ...


def extract_error_message(response: httpx.Response) -> str:
    """Best human-readable message from an error response."""
    try:
        data = response.json()
    except ValueError:
        text = response.text.strip()
        return text or f"Error: {response.reason_phrase}"

    if isinstance(data, dict):
        for key in ("detail", "error", "message"):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
            if isinstance(value, list) and value:
                # FastAPI request validation errors
                return "; ".join(str(item.get("msg", item)) if isinstance(item, dict) else str(item) for item in value)
    elif isinstance(data, str) and data:
        return data
    return f"Error: {response.reason_phrase}"


class ApiClient:
    """Authenticated JSON calls against /api/v1."""

    def __init__(
        self,
        session: AuthSession,
        base_url: str = CONTENT_API_URL,
        timeout: float = CLIENT_HTTP_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def call(self, method: str, path: str, payload: Optional[dict] = None) -> Any:
        identity = self.session.identity
        if identity is None:
            raise UnauthorizedError("Please sign in to continue")

        url = f"{self.base_url}/api/v1/{path}"
        headers = {"Authorization": f"Bearer {identity.access_token}"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(method, url, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            logger.error(f"{method} {path} timed out: {e}")
            raise GatewayError("The request timed out. Please try again.") from e
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise GatewayError(f"Network error: {str(e)}") from e

        if not response.is_success:
            message = extract_error_message(response)
            logger.error(f"{method} {path} returned {response.status_code}: {message}")
            if response.status_code == 401:
                raise UnauthorizedError(message)
            if response.status_code == 404:
                raise NotFoundError(message)
            raise GatewayError(message)

        try:
            data = response.json()
        except ValueError as e:
            raise GatewayError("Received a malformed response from the server") from e
        if not isinstance(data, dict):
            raise GatewayError("Received a malformed response from the server")
        return data


def _parse(model, data: Any, what: str):
    try:
        return model.model_validate(data)
    except SchemaError as e:
        logger.error(f"Malformed {what} in response: {e}")
        raise GatewayError(f"Received malformed {what} from the server") from e


class HttpContentGateway:
    def __init__(self, api: ApiClient):
        self.api = api

    async def generate_content(self, prompt: str) -> GeneratedContent:
        data = await self.api.call("POST", "generate-content", {"prompt": prompt})
        return _parse(GeneratedContent, data, "content")

    async def generate_images(self, text: str) -> List[ImagePlacement]:
        data = await self.api.call("POST", "generate-images", {"text": text})
        return [_parse(ImagePlacement, image, "image") for image in data.get("images") or []]

    async def generate_mcqs(self, text: str, difficulty: Optional[DifficultyLevel] = None) -> List[MCQuestion]:
        payload = {"text": text}
        if difficulty is not None:
            payload["difficulty"] = difficulty.value
        data = await self.api.call("POST", "generate-mcqs", payload)
        return [_parse(MCQuestion, mcq, "question") for mcq in data.get("mcqs") or []]

    async def generate_social_post(
        self, text: str, post_type: SocialPostType, user_level: Optional[UserLevel] = None
    ) -> str:
        payload = {"text": text, "postType": post_type.value}
        if user_level is not None:
            payload["userLevel"] = user_level.value
        data = await self.api.call("POST", "generate-social-post", payload)
        post = data.get("post")
        if not isinstance(post, str) or not post:
            raise GatewayError("Received an empty social media post")
        return post


class HttpPersistenceGateway:
    def __init__(self, api: ApiClient):
        self.api = api

    async def save(
        self,
        title: str,
        text: str,
        images: Sequence[ImagePlacement],
        mcqs: Sequence[MCQuestion],
        social_post: str,
    ) -> SavedContentItem:
        payload = {
            "title": title,
            "generatedText": text,
            "generatedImages": [image.model_dump(mode="json", by_alias=True) for image in images],
            "generatedMcqs": [mcq.model_dump(mode="json", by_alias=True) for mcq in mcqs],
            "generatedSocialMediaPost": social_post,
        }
        data = await self.api.call("POST", "saved-content", payload)
        return _parse(SavedContentItem, data.get("savedContent"), "saved content")

    async def list_items(self) -> List[SavedContentItem]:
        data = await self.api.call("GET", "saved-content")
        return [_parse(SavedContentItem, item, "saved content") for item in data.get("items") or []]

    async def delete(self, item_id: str) -> None:
        await self.api.call("DELETE", f"saved-content/{item_id}")
