"""
Shared route dependencies.

`get_upload_gate` builds one UploadGate from process settings on first use.
Tests swap it out with `app.dependency_overrides[get_upload_gate]`.
"""

import logging
from functools import lru_cache

from artfolio.config import settings
from artfolio.detection.config import DetectionConfig
from artfolio.detection.gate import UploadGate

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_detection_config() -> DetectionConfig:
    config = DetectionConfig.from_settings(settings)
    logger.info(
        f"[STARTUP] Detection mode={config.mode.value} "
        f"image={'configured' if config.image_credentials else 'missing'} "
        f"text[{config.text_provider}]={'configured' if config.text_credentials else 'missing'}"
    )
    return config


@lru_cache(maxsize=1)
def get_upload_gate() -> UploadGate:
    return UploadGate(get_detection_config())
