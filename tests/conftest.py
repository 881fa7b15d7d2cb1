"""Shared fixtures for the Explorer tests.

The content gateway is an AsyncMock so each test can script results,
failures, or blocking calls per method.
"""

from unittest.mock import AsyncMock

import pytest

from client.auth_session import AuthSession, Identity
from client.controller import GenerationController
from models.content import GeneratedContent
from tests.helpers import InMemoryPersistence, make_image, make_mcq, make_text


@pytest.fixture
def identity() -> Identity:
    return Identity(id="user-1", email="reader@example.com", access_token="token-abc")


@pytest.fixture
def session(identity) -> AuthSession:
    return AuthSession.from_identity(identity)


@pytest.fixture
def anonymous_session() -> AuthSession:
    return AuthSession()


@pytest.fixture
def generated_content() -> GeneratedContent:
    return GeneratedContent(
        text=make_text(12),
        images=(make_image(4, 1), make_image(8, 2)),
        mcqs=(make_mcq(1), make_mcq(2, correct=3)),
    )


# =============================================================================
# Gateways
# =============================================================================

@pytest.fixture
def content_gateway(generated_content):
    """AI content gateway whose calls all succeed by default."""
    gateway = AsyncMock()
    gateway.generate_content.return_value = generated_content
    gateway.generate_images.return_value = [make_image(5, 1), make_image(10, 2)]
    gateway.generate_mcqs.return_value = [make_mcq(1), make_mcq(2), make_mcq(3)]
    gateway.generate_social_post.return_value = "Five things I learned today"
    return gateway


@pytest.fixture
def persistence() -> InMemoryPersistence:
    return InMemoryPersistence()


@pytest.fixture
def controller(content_gateway, persistence, session) -> GenerationController:
    return GenerationController(content_gateway, persistence, session)


@pytest.fixture
def anonymous_controller(content_gateway, persistence, anonymous_session) -> GenerationController:
    return GenerationController(content_gateway, persistence, anonymous_session)
