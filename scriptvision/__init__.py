"""
Script Visualization Client
Turns scripts into image prompts and images using Google's Gemini and Imagen models.

This package provides:
- Breaking a script into scenes and generating one image prompt per scene
- Describing a reference image's visual style as prompt keywords
- Generating images from prompts with per-prompt error results
"""

__version__ = "0.1.0"

import logging

from scriptvision.config import GeminiConfig, configure_logging
from scriptvision.errors import (
    AIServiceError,
    ConfigurationError,
    EmptyResponseError,
    MalformedResponseError,
    PromptGenerationError,
    StyleAnalysisError,
    classify_image_error,
)
from scriptvision.image_generator import ImageGenerator
from scriptvision.models import (
    AspectRatio,
    ImageAnalysisInput,
    ImageResult,
    PromptGenerationResult,
)
from scriptvision.prompt_generator import PromptGenerator
from scriptvision.service import AIService
from scriptvision.style_analyzer import StyleAnalyzer

__all__ = [
    "AIService",
    "GeminiConfig",
    "configure_logging",
    "PromptGenerator",
    "StyleAnalyzer",
    "ImageGenerator",
    "AspectRatio",
    "ImageAnalysisInput",
    "ImageResult",
    "PromptGenerationResult",
    "AIServiceError",
    "ConfigurationError",
    "PromptGenerationError",
    "EmptyResponseError",
    "MalformedResponseError",
    "StyleAnalysisError",
    "classify_image_error",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
