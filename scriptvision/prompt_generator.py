import json
import logging
from typing import Any, List, Optional

from google.genai import types
from jsonschema import ValidationError, validate

from scriptvision.errors import (
    INVALID_JSON_MESSAGE,
    INVALID_STRUCTURE_MESSAGE,
    EmptyResponseError,
    MalformedResponseError,
    PromptGenerationError,
)
from scriptvision.gemini_client import GeminiClient
from scriptvision.models import PromptGenerationResult
from scriptvision.prompts import PROMPT_SCHEMA, build_prompt_request

logger = logging.getLogger(__name__)


def _enum_value(value: Any) -> Optional[str]:
    if value is None:
        return None
    return getattr(value, "value", None) or str(value)


def get_finish_reason(response: Any) -> Optional[str]:
    """
    Extract why the model stopped generating.

    Falls back to the prompt feedback block reason when the request was
    rejected before any candidate was produced.
    """
    candidates = getattr(response, "candidates", None) or []
    if candidates:
        reason = _enum_value(getattr(candidates[0], "finish_reason", None))
        if reason:
            return reason

    feedback = getattr(response, "prompt_feedback", None)
    if feedback is not None:
        return _enum_value(getattr(feedback, "block_reason", None))
    return None


def parse_prompts(text: str) -> List[str]:
    """
    Parse the model's JSON answer into a list of prompts.

    Raises:
        MalformedResponseError: If the text is not JSON or has no prompts array
    """
    try:
        result = json.loads(text)
    except ValueError as e:
        logger.error(f"Failed to parse AI response as JSON: {text!r} ({str(e)})")
        raise MalformedResponseError(INVALID_JSON_MESSAGE) from None

    try:
        validate(instance=result, schema=PROMPT_SCHEMA)
    except ValidationError as e:
        logger.error(f"AI response has an invalid structure: {text!r} ({e.message})")
        raise MalformedResponseError(INVALID_STRUCTURE_MESSAGE) from None

    return result["prompts"]


class PromptGenerator:
    """Turns a script into a list of image prompts using Gemini."""

    def __init__(self, gemini: GeminiClient):
        self.gemini = gemini

    async def generate_prompts(self, script: str, style: str, niche: str = "") -> PromptGenerationResult:
        """
        Break a script into scenes and generate one image prompt per scene.

        Args:
            script: Script to visualize
            style: Visual style the prompts must follow
            niche: Optional topic or niche

        Returns:
            PromptGenerationResult: Prompts plus the exact instruction sent

        Raises:
            EmptyResponseError: The model returned no text
            MalformedResponseError: The text was not a valid prompts object
            PromptGenerationError: Any other failure, with details logged only
        """
        request_prompt = build_prompt_request(script, style, niche)

        try:
            logger.info(f"Generating prompts for a {len(script)} character script")
            response = await self.gemini.generate_content(
                request_prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=PROMPT_SCHEMA,
                ),
            )

            json_text = response.text
            if not json_text:
                finish_reason = get_finish_reason(response)
                logger.error(f"AI response text is empty (finish reason: {finish_reason}). Full response: {response!r}")
                raise EmptyResponseError(finish_reason)

            prompts = parse_prompts(json_text)
            logger.info(f"Generated {len(prompts)} prompts")
            return PromptGenerationResult(prompts=prompts, request_prompt=request_prompt)

        except (EmptyResponseError, MalformedResponseError):
            raise
        except Exception as e:
            logger.error(f"Error during prompt generation: {str(e)}", exc_info=True)
            raise PromptGenerationError() from None
