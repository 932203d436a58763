"""
Shared fixtures: a fake google-genai client exposing the async models surface.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from scriptvision.config import GeminiConfig
from scriptvision.gemini_client import GeminiClient
from scriptvision.service import AIService


def make_text_response(text=None, finish_reason=None, block_reason=None):
    """Build an object shaped like GenerateContentResponse."""
    candidates = [SimpleNamespace(finish_reason=finish_reason)] if finish_reason else []
    feedback = SimpleNamespace(block_reason=block_reason) if block_reason else None
    return SimpleNamespace(text=text, candidates=candidates, prompt_feedback=feedback)


def make_image_response(*images, filtered_reason=None):
    """Build an object shaped like GenerateImagesResponse."""
    generated = [
        SimpleNamespace(image=SimpleNamespace(image_bytes=data), rai_filtered_reason=None)
        for data in images
    ]
    if filtered_reason:
        generated.append(SimpleNamespace(image=None, rai_filtered_reason=filtered_reason))
    return SimpleNamespace(generated_images=generated)


@pytest.fixture
def config():
    return GeminiConfig(api_key="test-key")


@pytest.fixture
def fake_client():
    models = SimpleNamespace(generate_content=AsyncMock(), generate_images=AsyncMock())
    return SimpleNamespace(aio=SimpleNamespace(models=models))


@pytest.fixture
def gemini(config, fake_client):
    return GeminiClient(config, client=fake_client)


@pytest.fixture
def service(config, fake_client):
    return AIService(config, client=fake_client)
