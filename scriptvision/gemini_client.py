import logging
from typing import Any, Optional

from google import genai
from google.genai import types

from scriptvision.config import GeminiConfig

logger = logging.getLogger(__name__)


class GeminiClient:
    """Thin async wrapper around the google-genai client for the configured models."""

    def __init__(self, config: GeminiConfig, client: Optional[Any] = None):
        """
        Args:
            config: Credentials and model names
            client: Optional pre-built genai.Client, mainly for tests
        """
        self.config = config
        self.client = client if client is not None else genai.Client(api_key=config.api_key)

    @property
    def prompt_model(self) -> str:
        return self.config.prompt_model

    @property
    def image_model(self) -> str:
        return self.config.image_model

    async def generate_content(
        self,
        contents: Any,
        config: Optional[types.GenerateContentConfig] = None
    ) -> types.GenerateContentResponse:
        """Send a generateContent request to the text model."""
        logger.debug(f"Calling {self.prompt_model} generate_content")
        return await self.client.aio.models.generate_content(
            model=self.prompt_model,
            contents=contents,
            config=config,
        )

    async def generate_images(
        self,
        prompt: str,
        config: types.GenerateImagesConfig
    ) -> types.GenerateImagesResponse:
        """Send a generateImages request to the image model."""
        logger.debug(f"Calling {self.image_model} generate_images")
        return await self.client.aio.models.generate_images(
            model=self.image_model,
            prompt=prompt,
            config=config,
        )
