"""
Image adapter: scores one image with Sightengine's genAI model and turns the
response into a DetectionResult.
"""

import logging
import mimetypes
from typing import Optional

from artfolio.detection import policy
from artfolio.detection.config import Credentials, DetectionMode
from artfolio.detection.errors import DetectionConfigError, InputInvalidError
from artfolio.integrations import sightengine
from artfolio.schemas.detection import DetectionResult, Modality

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/gif", "image/webp")

# Older interpreters ship without a .webp mapping
mimetypes.add_type("image/webp", ".webp")


def infer_content_type(filename: str) -> Optional[str]:
    content_type, _ = mimetypes.guess_type(filename or "")
    return content_type


def read_ai_score(data: dict) -> float:
    """`type.ai_generated`, or 0.0 when the field is missing or not a number."""
    section = data.get("type")
    value = section.get("ai_generated") if isinstance(section, dict) else None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        logger.warning("[SIGHTENGINE] Response missing type.ai_generated; scoring as human")
        return 0.0
    return float(value)


class SightengineDetector:
    provider = sightengine.PROVIDER
    modality = Modality.IMAGE

    def __init__(self, credentials: Optional[Credentials], mode: DetectionMode = DetectionMode.STRICT):
        self.credentials = credentials
        self.mode = DetectionMode(mode)

    @property
    def is_configured(self) -> bool:
        return self.credentials is not None and self.credentials.has_secret

    async def check_image(self, content: bytes, filename: str) -> DetectionResult:
        if not self.is_configured:
            if self.mode == DetectionMode.PERMISSIVE:
                logger.warning("[SIGHTENGINE] Credentials not configured; skipping image detection")
                return policy.skipped_result(self.modality, self.provider)
            logger.error("[SIGHTENGINE] Credentials not configured")
            raise DetectionConfigError("AI detection service not configured", provider=self.provider)

        if not content:
            raise InputInvalidError("No file provided")

        content_type = infer_content_type(filename)
        if content_type not in ALLOWED_IMAGE_TYPES:
            raise InputInvalidError("Invalid file type")

        data = await sightengine.check_media(
            content,
            filename,
            content_type,
            api_user=self.credentials.api_key,
            api_secret=self.credentials.api_secret,
        )
        score = read_ai_score(data)
        result = policy.judge(self.modality, score, self.provider)
        logger.info(f"[SIGHTENGINE] {filename}: score={score:.3f} passed={result.passed}")
        return result
