"""
Single entry point bundling prompt generation, style analysis and image generation.
"""

import logging
from typing import Any, Optional, Union

from scriptvision.config import GeminiConfig
from scriptvision.gemini_client import GeminiClient
from scriptvision.image_generator import ImageGenerator
from scriptvision.models import (
    AspectRatio,
    ImageAnalysisInput,
    ImageResult,
    PromptGenerationResult,
)
from scriptvision.prompt_generator import PromptGenerator
from scriptvision.style_analyzer import StyleAnalyzer

logger = logging.getLogger(__name__)


class AIService:
    """Adapter over the hosted Gemini service.

    Prompt generation and style analysis raise on failure. Image generation
    returns an ImageResult instead, so one failed prompt does not abort the
    rest of a storyboard.
    """

    def __init__(self, config: GeminiConfig, client: Optional[Any] = None):
        """
        Args:
            config: Validated Gemini configuration
            client: Optional genai.Client to share or substitute
        """
        self.config = config
        self.gemini = GeminiClient(config, client)
        self.prompt_generator = PromptGenerator(self.gemini)
        self.style_analyzer = StyleAnalyzer(self.gemini)
        self.image_generator = ImageGenerator(self.gemini)
        logger.debug(f"AI service initialized with {config!r}")

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "AIService":
        """Build the service from environment configuration, failing fast without a key."""
        return cls(GeminiConfig.from_env(env_file))

    async def generate_prompts(self, script: str, style: str, niche: str = "") -> PromptGenerationResult:
        return await self.prompt_generator.generate_prompts(script, style, niche)

    async def analyze_image_style(self, image: ImageAnalysisInput) -> str:
        return await self.style_analyzer.analyze_image_style(image)

    async def generate_image(self, prompt: str, aspect_ratio: Union[AspectRatio, str]) -> ImageResult:
        return await self.image_generator.generate_image(prompt, aspect_ratio)
