"""
Reference image style analysis using Gemini vision.
"""

import logging

from google.genai import types

from scriptvision.errors import StyleAnalysisError
from scriptvision.gemini_client import GeminiClient
from scriptvision.models import ImageAnalysisInput
from scriptvision.prompts import STYLE_ANALYSIS_INSTRUCTION

logger = logging.getLogger(__name__)


class StyleAnalyzer:
    """Describes an image's visual style as text-to-image keywords."""

    def __init__(self, gemini: GeminiClient):
        self.gemini = gemini

    async def analyze_image_style(self, image: ImageAnalysisInput) -> str:
        """
        Describe the artistic style of an image.

        Args:
            image: Base64 image data and its MIME type

        Returns:
            str: Comma-separated style keywords

        Raises:
            StyleAnalysisError: On any failure, including an empty answer
        """
        try:
            image_part = types.Part.from_bytes(data=image.to_bytes(), mime_type=image.mime_type)
            text_part = types.Part.from_text(text=STYLE_ANALYSIS_INSTRUCTION)

            response = await self.gemini.generate_content([image_part, text_part])

            description = (response.text or "").strip()
            if not description:
                raise ValueError("Style analysis returned an empty response")

            logger.info(f"Analyzed reference image style: {description}")
            return description

        except Exception as e:
            logger.error(f"Error analyzing image style: {str(e)}", exc_info=True)
            raise StyleAnalysisError() from None
