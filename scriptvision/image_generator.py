import logging
from typing import Union

from google.genai import types

from scriptvision.config import IMAGE_GENERATION
from scriptvision.errors import (
    IMAGE_SAFETY_MESSAGE,
    NO_IMAGE_MESSAGE,
    classify_image_error,
)
from scriptvision.gemini_client import GeminiClient
from scriptvision.models import AspectRatio, ImageResult

logger = logging.getLogger(__name__)


class ImageGenerator:
    """Generates single images with Imagen, reporting failures as results."""

    def __init__(self, gemini: GeminiClient):
        self.gemini = gemini

    def _build_config(self, aspect_ratio: AspectRatio) -> types.GenerateImagesConfig:
        return types.GenerateImagesConfig(
            number_of_images=IMAGE_GENERATION["number_of_images"],
            output_mime_type=IMAGE_GENERATION["output_mime_type"],
            include_rai_reason=IMAGE_GENERATION["include_rai_reason"],
            aspect_ratio=aspect_ratio.value,
        )

    async def generate_image(self, prompt: str, aspect_ratio: Union[AspectRatio, str]) -> ImageResult:
        """
        Generate one JPEG image for a prompt.

        Service failures never raise; they come back as an ImageResult with
        error set so a caller working through many prompts can keep going.

        Args:
            prompt: Image prompt
            aspect_ratio: Output aspect ratio, passed through to the service

        Returns:
            ImageResult: base64 image data, or a caller-facing error message
        """
        ratio = AspectRatio.coerce(aspect_ratio)

        try:
            response = await self.gemini.generate_images(prompt, self._build_config(ratio))
        except Exception as e:
            logger.error(f'Image generation failed for prompt: "{prompt}": {str(e)}', exc_info=True)
            return ImageResult.failure(classify_image_error(e))

        generated = getattr(response, "generated_images", None) or []
        for generated_image in generated:
            image = getattr(generated_image, "image", None)
            if image is not None and image.image_bytes:
                logger.info(f"Generated image ({len(image.image_bytes)} bytes, {ratio.value})")
                return ImageResult.success(image.image_bytes)

        filtered = [g.rai_filtered_reason for g in generated if getattr(g, "rai_filtered_reason", None)]
        if filtered:
            logger.warning(f'Image filtered for prompt "{prompt}": {"; ".join(filtered)}')
            return ImageResult.failure(IMAGE_SAFETY_MESSAGE)

        logger.warning(f'No image returned for prompt: "{prompt}"')
        return ImageResult.failure(NO_IMAGE_MESSAGE)
