"""
Gemini API client, used as an alternative LLM judge for essays.

Clients are created per API key (cached) rather than at import time, since
the key arrives through DetectionConfig.
"""

import logging
from functools import lru_cache

from google import genai
from google.genai import types

from artfolio.config import settings
from artfolio.detection.errors import DetectionServiceError

logger = logging.getLogger(__name__)

PROVIDER = "gemini"


@lru_cache(maxsize=4)
def get_client(api_key: str) -> genai.Client:
    return genai.Client(
        api_key=api_key,
        http_options=types.HttpOptions(timeout=settings.gemini_http_timeout_ms),
    )


async def generate_text(
    api_key: str,
    model: str,
    system_instruction: str,
    prompt: str,
    temperature: float,
) -> str:
    """Single-turn generation; returns the reply text ("" when the model returned none)."""
    config = types.GenerateContentConfig(
        system_instruction=system_instruction,
        temperature=temperature,
    )
    try:
        response = await get_client(api_key).aio.models.generate_content(
            model=model,
            contents=[prompt],
            config=config,
        )
    except Exception as e:
        logger.error(f"[GEMINI] generate_content failed: {e}")
        raise DetectionServiceError(f"Gemini API error: {e}", provider=PROVIDER)

    if hasattr(response, "usage_metadata") and response.usage_metadata:
        logger.info(
            f"[GEMINI] Tokens: prompt={response.usage_metadata.prompt_token_count} "
            f"completion={response.usage_metadata.candidates_token_count}"
        )
    return response.text or ""
