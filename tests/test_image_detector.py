"""
Unit tests for artfolio/detection/image_detector.py — SightengineDetector.

aiohttp is replaced by a mock session (see tests.conftest.patch_session);
no real network calls are made.
"""

import asyncio
from unittest.mock import MagicMock

import aiohttp
import pytest

from artfolio.detection import policy
from artfolio.detection.config import Credentials, DetectionMode
from artfolio.detection.errors import DetectionConfigError, DetectionServiceError, InputInvalidError
from artfolio.detection.image_detector import SightengineDetector, infer_content_type, read_ai_score
from tests.conftest import make_mock_response, make_tiny_jpeg, patch_session


def _session_returning(resp) -> MagicMock:
    session = MagicMock()
    session.post = MagicMock(return_value=resp)
    return session


def _success(score) -> dict:
    return {"status": "success", "type": {"ai_generated": score}, "media": {"id": "med_1"}}


@pytest.fixture
def detector(image_creds):
    return SightengineDetector(image_creds, DetectionMode.STRICT)


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------


async def test_human_score_passes(detector):
    session = _session_returning(make_mock_response(json_data=_success(0.12)))
    with patch_session(session):
        result = await detector.check_image(make_tiny_jpeg(), "sketch.jpg")

    assert result.passed is True
    assert result.score == 0.12
    assert result.threshold == 0.75
    assert result.provider == "sightengine"
    assert result.warning is None


async def test_ai_score_fails(detector):
    session = _session_returning(make_mock_response(json_data=_success(0.80)))
    with patch_session(session):
        result = await detector.check_image(make_tiny_jpeg(), "render.png")

    assert result.passed is False
    assert result.score == 0.80


async def test_score_at_threshold_fails(detector):
    session = _session_returning(make_mock_response(json_data=_success(0.75)))
    with patch_session(session):
        result = await detector.check_image(make_tiny_jpeg(), "edge.jpg")
    assert result.passed is False


async def test_missing_score_field_fails_open(detector):
    session = _session_returning(make_mock_response(json_data={"status": "success"}))
    with patch_session(session):
        result = await detector.check_image(make_tiny_jpeg(), "photo.jpg")

    assert result.passed is True
    assert result.score == 0.0


async def test_request_carries_model_selector_and_credentials(detector):
    session = _session_returning(make_mock_response(json_data=_success(0.1)))
    with patch_session(session):
        await detector.check_image(make_tiny_jpeg(), "photo.jpg")

    url = session.post.call_args.args[0]
    form = session.post.call_args.kwargs["data"]
    assert url == "https://api.sightengine.com/1.0/check.json"
    fields = {opts["name"]: value for opts, _headers, value in form._fields}
    assert fields["models"] == "genai"
    assert fields["api_user"] == "se-user"
    assert fields["api_secret"] == "se-secret"
    assert "media" in fields


# ---------------------------------------------------------------------------
# Provider failures → DetectionServiceError
# ---------------------------------------------------------------------------


async def test_http_error_raises_service_error(detector):
    session = _session_returning(make_mock_response(status=500))
    with patch_session(session):
        with pytest.raises(DetectionServiceError) as exc:
            await detector.check_image(make_tiny_jpeg(), "photo.jpg")
    assert exc.value.status == 500
    assert exc.value.provider == "sightengine"


async def test_unsuccessful_json_status_raises_even_on_200(detector):
    body = {"status": "failure", "error": {"type": "credentials_error", "message": "bad key"}}
    session = _session_returning(make_mock_response(status=200, json_data=body))
    with patch_session(session):
        with pytest.raises(DetectionServiceError):
            await detector.check_image(make_tiny_jpeg(), "photo.jpg")


async def test_non_json_body_raises_service_error(detector):
    resp = make_mock_response(json_error=ValueError("Expecting value"))
    with patch_session(_session_returning(resp)):
        with pytest.raises(DetectionServiceError):
            await detector.check_image(make_tiny_jpeg(), "photo.jpg")


async def test_network_error_raises_service_error(detector):
    session = MagicMock()
    session.post = MagicMock(side_effect=aiohttp.ClientError("connection refused"))
    with patch_session(session):
        with pytest.raises(DetectionServiceError):
            await detector.check_image(make_tiny_jpeg(), "photo.jpg")


async def test_timeout_raises_service_error(detector):
    session = MagicMock()
    session.post = MagicMock(side_effect=asyncio.TimeoutError())
    with patch_session(session):
        with pytest.raises(DetectionServiceError) as exc:
            await detector.check_image(make_tiny_jpeg(), "photo.jpg")
    assert exc.value.provider == "sightengine"


# ---------------------------------------------------------------------------
# Missing credentials: permissive vs strict
# ---------------------------------------------------------------------------


async def test_missing_credentials_permissive_passes_with_warning():
    detector = SightengineDetector(None, DetectionMode.PERMISSIVE)
    session = _session_returning(make_mock_response(json_data=_success(0.99)))
    with patch_session(session):
        result = await detector.check_image(make_tiny_jpeg(), "photo.jpg")

    assert result.passed is True
    assert result.warning == policy.SKIPPED_WARNING
    session.post.assert_not_called()


async def test_missing_credentials_strict_is_config_error():
    detector = SightengineDetector(None, DetectionMode.STRICT)
    with pytest.raises(DetectionConfigError):
        await detector.check_image(make_tiny_jpeg(), "photo.jpg")


async def test_missing_credentials_strict_is_a_service_error():
    detector = SightengineDetector(None, "strict")
    with pytest.raises(DetectionServiceError):
        await detector.check_image(make_tiny_jpeg(), "photo.jpg")


async def test_credentials_without_secret_count_as_missing():
    detector = SightengineDetector(Credentials(api_key="user-only"), DetectionMode.STRICT)
    assert detector.is_configured is False
    with pytest.raises(DetectionConfigError):
        await detector.check_image(make_tiny_jpeg(), "photo.jpg")


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------


async def test_unsupported_type_is_input_invalid(detector):
    with pytest.raises(InputInvalidError):
        await detector.check_image(b"%PDF-1.4", "portfolio.pdf")


async def test_empty_content_is_input_invalid(detector):
    with pytest.raises(InputInvalidError):
        await detector.check_image(b"", "photo.jpg")


@pytest.mark.parametrize(
    "filename, expected",
    [("a.jpg", "image/jpeg"), ("a.JPEG", "image/jpeg"), ("a.png", "image/png"),
     ("a.gif", "image/gif"), ("a.webp", "image/webp"), ("a.txt", "text/plain")],
)
def test_infer_content_type(filename, expected):
    assert infer_content_type(filename) == expected


def test_read_ai_score_ignores_non_numeric():
    assert read_ai_score({"type": {"ai_generated": "0.9"}}) == 0.0
    assert read_ai_score({"type": None}) == 0.0
    assert read_ai_score({"type": {"ai_generated": 1}}) == 1.0
