"""
Sightengine integration: raw call to the check.json scoring endpoint.

Returns the decoded JSON body untouched; interpreting the score is the
image detector's job.
"""

import asyncio
import logging

import aiohttp

from artfolio.config import settings
from artfolio.detection.errors import DetectionServiceError
from artfolio.integrations import http_client as http_module

logger = logging.getLogger(__name__)

PROVIDER = "sightengine"


async def check_media(
    content: bytes,
    filename: str,
    content_type: str,
    api_user: str,
    api_secret: str,
) -> dict:
    """POST one image with the genAI model selector and return the JSON body."""
    form = aiohttp.FormData()
    form.add_field("media", content, filename=filename, content_type=content_type)
    form.add_field("models", settings.sightengine_models)
    form.add_field("api_user", api_user)
    form.add_field("api_secret", api_secret)

    async with http_module.request_session() as session:
        try:
            async with session.post(settings.sightengine_api_url, data=form) as response:
                if response.status < 200 or response.status >= 300:
                    logger.error(f"[SIGHTENGINE] HTTP {response.status} for {filename}")
                    raise DetectionServiceError(
                        "AI detection service error", provider=PROVIDER, status=response.status
                    )
                try:
                    data = await response.json(content_type=None)
                except ValueError as e:
                    logger.error(f"[SIGHTENGINE] Non-JSON response for {filename}: {e}")
                    raise DetectionServiceError(
                        "AI detection service returned an invalid response", provider=PROVIDER
                    )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"[SIGHTENGINE] Request failed for {filename}: {e!r}")
            raise DetectionServiceError(f"AI detection service unreachable: {e!r}", provider=PROVIDER) from e

    if not isinstance(data, dict) or data.get("status") != "success":
        error = data.get("error") if isinstance(data, dict) else None
        logger.error(f"[SIGHTENGINE] Unsuccessful status for {filename}: {error}")
        raise DetectionServiceError("AI detection failed", provider=PROVIDER)

    return data
