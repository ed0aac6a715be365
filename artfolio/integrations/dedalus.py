"""
Dedalus Labs integration: OpenAI-compatible chat completions plus the
health and model-listing endpoints.

Every function takes the API key explicitly; nothing here reads the
environment.
"""

import asyncio
import logging
from urllib.parse import quote

import aiohttp

from artfolio.config import settings
from artfolio.detection.errors import DetectionServiceError
from artfolio.integrations import http_client as http_module

logger = logging.getLogger(__name__)

PROVIDER = "dedalus"


def _headers(api_key: str) -> dict:
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }


async def _request(method: str, endpoint: str, api_key: str, payload: dict = None) -> dict:
    url = f"{settings.dedalus_api_url.rstrip('/')}{endpoint}"
    async with http_module.request_session() as session:
        try:
            async with session.request(method, url, json=payload, headers=_headers(api_key)) as response:
                if response.status < 200 or response.status >= 300:
                    logger.error(f"[DEDALUS] {method} {endpoint} -> HTTP {response.status}")
                    raise DetectionServiceError(
                        f"Dedalus API error: {response.status}", provider=PROVIDER, status=response.status
                    )
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    logger.error(f"[DEDALUS] {method} {endpoint} returned non-JSON body: {e}")
                    raise DetectionServiceError("Dedalus API returned an invalid response", provider=PROVIDER)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"[DEDALUS] {method} {endpoint} failed: {e!r}")
            raise DetectionServiceError(f"Dedalus API unreachable: {e!r}", provider=PROVIDER) from e


async def create_chat_completion(
    api_key: str,
    model: str,
    system_prompt: str,
    user_message: str,
    temperature: float,
) -> str:
    """Run one chat completion and return the first choice's text ("" when absent)."""
    payload = {
        "model": model,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ],
        "temperature": temperature,
    }
    data = await _request("POST", "/v1/chat/completions", api_key, payload)

    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        logger.warning("[DEDALUS] Completion response had no message content")
        return ""
    return content if isinstance(content, str) else ""


async def get_health(api_key: str) -> dict:
    return await _request("GET", "/health", api_key)


async def list_models(api_key: str) -> list[dict]:
    data = await _request("GET", "/v1/models", api_key)
    return data.get("data", []) if isinstance(data, dict) else []


async def get_model(api_key: str, model_id: str) -> dict:
    return await _request("GET", f"/v1/models/{quote(model_id, safe='')}", api_key)
