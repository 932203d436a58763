"""
Exception types and error classification for the Gemini client layer.
"""

from typing import Optional


# Caller-facing messages
EMPTY_RESPONSE_MESSAGE = (
    "The AI returned an empty response. This can happen if the script is too short, "
    "vague, or contains content that goes against the safety policy."
)
SAFETY_BLOCKED_MESSAGE = (
    "The script or style contains content that violates safety policies. "
    "Please revise your input and try again."
)
RECITATION_BLOCKED_MESSAGE = (
    "The response was blocked due to potential recitation issues. "
    "Try rephrasing your script."
)
STOPPED_UNEXPECTEDLY_MESSAGE = (
    "Prompt generation stopped unexpectedly. Reason: {reason}. "
    "Please check your script content."
)
INVALID_JSON_MESSAGE = (
    "The AI returned a response that was not valid JSON. "
    "This may be a temporary issue, please try again."
)
INVALID_STRUCTURE_MESSAGE = "The AI returned a response with an invalid structure. Please try again."
PROMPT_SERVICE_ERROR_MESSAGE = (
    "Failed to generate prompts from the script due to an unexpected AI service error."
)
STYLE_ANALYSIS_ERROR_MESSAGE = "Failed to analyze the reference image style."

NO_IMAGE_MESSAGE = "The API did not return an image."
IMAGE_SAFETY_MESSAGE = "This prompt was blocked for safety reasons. Please try rephrasing it."
IMAGE_FAILED_MESSAGE = "Image generation failed."

# Substrings the image service puts in its policy rejections. These follow the
# service's wording, so a change on their side silently degrades safety
# rejections to IMAGE_FAILED_MESSAGE.
IMAGE_SAFETY_MARKERS = (
    "sensitive words",
    "Responsible AI practices",
)


class AIServiceError(Exception):
    """Base class for errors raised by the AI service layer."""
    pass


class ConfigurationError(AIServiceError):
    """Raised when required credentials are missing."""
    pass


class PromptGenerationError(AIServiceError):
    """Raised when a script could not be turned into image prompts."""

    def __init__(self, message: str = PROMPT_SERVICE_ERROR_MESSAGE):
        super().__init__(message)


class EmptyResponseError(PromptGenerationError):
    """The model returned no text; the message depends on the finish reason."""

    def __init__(self, finish_reason: Optional[str] = None):
        self.finish_reason = finish_reason
        super().__init__(empty_response_message(finish_reason))


class MalformedResponseError(PromptGenerationError):
    """The model returned text that is not JSON or lacks a prompts array."""
    pass


class StyleAnalysisError(AIServiceError):
    """Raised when a reference image could not be analyzed."""

    def __init__(self, message: str = STYLE_ANALYSIS_ERROR_MESSAGE):
        super().__init__(message)


def empty_response_message(finish_reason: Optional[str]) -> str:
    """Map a finish reason to the message shown for an empty response."""
    if finish_reason == "SAFETY":
        return SAFETY_BLOCKED_MESSAGE
    if finish_reason == "RECITATION":
        return RECITATION_BLOCKED_MESSAGE
    if finish_reason and finish_reason != "STOP":
        return STOPPED_UNEXPECTEDLY_MESSAGE.format(reason=finish_reason)
    return EMPTY_RESPONSE_MESSAGE


def is_image_safety_rejection(error: BaseException) -> bool:
    """Check whether an image service error is a content policy rejection."""
    message = str(error)
    return any(marker in message for marker in IMAGE_SAFETY_MARKERS)


def classify_image_error(error: BaseException) -> str:
    """
    Turn an exception raised by the image service into a caller-facing message.

    Detection is substring matching on the error text. Replace it with the
    service's structured error code if one becomes available.

    Args:
        error: Exception raised while requesting an image

    Returns:
        str: Safety message for policy rejections, generic failure otherwise
    """
    if is_image_safety_rejection(error):
        return IMAGE_SAFETY_MESSAGE
    return IMAGE_FAILED_MESSAGE
