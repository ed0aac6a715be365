"""
Shared pytest fixtures for all test modules.

Environment variables are cleared before the app is imported so a developer's
real .env credentials can never leak into a test run. Routes get their
UploadGate through `app.dependency_overrides`.
"""

import io
import os

for _var in ("SIGHTENGINE_API_USER", "SIGHTENGINE_API_SECRET", "DEDALUS_API_KEY", "GEMINI_API_KEY"):
    os.environ[_var] = ""
os.environ["ENVIRONMENT"] = "test"

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from artfolio.core.dependencies import get_upload_gate
from artfolio.detection import policy
from artfolio.detection.config import Credentials, DetectionConfig, DetectionMode
from artfolio.schemas.detection import Modality

# App import happens AFTER the environment is scrubbed above.
from artfolio.main import app  # noqa: E402

# Plainly human prose, comfortably over the 100-char minimum.
LONG_ESSAY = (
    "I painted the harbour at dawn last winter, numb fingers and all, and the gulls "
    "kept stealing bread from my open lunch bag."
)
SHORT_ESSAY = "Too short to judge."


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def image_creds() -> Credentials:
    return Credentials(api_key="se-user", api_secret="se-secret")


@pytest.fixture
def text_creds() -> Credentials:
    return Credentials(api_key="dedalus-key")


@pytest.fixture
def strict_config(image_creds, text_creds) -> DetectionConfig:
    return DetectionConfig(
        mode=DetectionMode.STRICT,
        image_credentials=image_creds,
        text_credentials=text_creds,
    )


# ---------------------------------------------------------------------------
# App fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def client():
    """FastAPI TestClient; the shared HTTP session is never opened."""
    with (
        patch("artfolio.integrations.http_client.initialize", new_callable=AsyncMock),
        patch("artfolio.integrations.http_client.close", new_callable=AsyncMock),
    ):
        with TestClient(app, raise_server_exceptions=False) as c:
            yield c
    app.dependency_overrides.clear()


@pytest.fixture
def use_gate():
    """Install a gate for the duration of one test: `use_gate(gate)`."""
    def _install(gate):
        app.dependency_overrides[get_upload_gate] = lambda: gate
        return gate

    yield _install
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Shared test-data helpers
# ---------------------------------------------------------------------------


def make_tiny_jpeg() -> bytes:
    """Create a minimal 10×10 JPEG in memory — fast and valid."""
    buf = io.BytesIO()
    Image.new("RGB", (10, 10), color=(128, 128, 128)).save(buf, format="JPEG")
    return buf.getvalue()


def make_tiny_png() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), color=(10, 200, 30)).save(buf, format="PNG")
    return buf.getvalue()


def image_result(score: float, provider: str = "sightengine"):
    return policy.judge(Modality.IMAGE, score, provider)


def text_result(score: float, reasoning: str = "ok", provider: str = "dedalus:test"):
    return policy.judge(Modality.TEXT, score, provider, reasoning)


def fake_image_detector(result=None, side_effect=None) -> MagicMock:
    detector = MagicMock()
    detector.check_image = AsyncMock(return_value=result, side_effect=side_effect)
    return detector


def fake_text_detector(result=None, side_effect=None) -> MagicMock:
    detector = MagicMock()
    detector.check_text = AsyncMock(return_value=result, side_effect=side_effect)
    return detector


def make_mock_response(status=200, json_data=None, json_error=None) -> MagicMock:
    """aiohttp-style response usable as `async with session.post(...) as response`."""
    resp = MagicMock()
    resp.__aenter__ = AsyncMock(return_value=resp)
    resp.__aexit__ = AsyncMock(return_value=None)
    resp.status = status
    resp.json = AsyncMock(return_value=json_data, side_effect=json_error)
    return resp


def patch_session(mock_session):
    """
    Patch http_client.request_session to yield mock_session directly,
    bypassing aiohttp.ClientSession construction entirely.
    """
    @asynccontextmanager
    async def _fake_request_session():
        yield mock_session

    return patch(
        "artfolio.integrations.http_client.request_session",
        side_effect=_fake_request_session,
    )
