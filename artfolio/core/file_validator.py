"""
Upload validation for images headed to the detection gate.

Sets PIL.Image.MAX_IMAGE_PIXELS to prevent decompression-bomb attacks.
"""

import io
import logging
import os

from fastapi import HTTPException
from PIL import Image

from artfolio.config import settings
from artfolio.detection.image_detector import ALLOWED_IMAGE_TYPES, infer_content_type

Image.MAX_IMAGE_PIXELS = settings.pil_max_image_pixels

logger = logging.getLogger(__name__)

# PIL formats accepted as image content; any of them passes under any allowed extension
_PIL_FORMATS = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "GIF": "image/gif",
    "WEBP": "image/webp",
}


def validate_image_upload(filename: str, content: bytes, content_type: str = None) -> str:
    """
    Check type, size, and content integrity of an uploaded image.

    Returns the MIME type inferred from the filename. Raises HTTPException
    with 400 / 413 / 415 on failure.
    """
    if not content:
        raise HTTPException(status_code=400, detail="No file provided")

    inferred = infer_content_type(filename)
    declared = (content_type or "").split(";")[0].strip().lower()
    if inferred not in ALLOWED_IMAGE_TYPES or (declared and declared not in ALLOWED_IMAGE_TYPES):
        raise HTTPException(status_code=415, detail="Invalid file type")

    if len(content) > settings.max_image_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"Image too large. Max {settings.max_image_upload_bytes // 1024 // 1024}MB allowed."
        )

    try:
        with Image.open(io.BytesIO(content)) as img:
            img.verify()
        with Image.open(io.BytesIO(content)) as img:
            actual = _PIL_FORMATS.get(img.format)
        if actual is None:
            raise ValueError(f"Format mismatch: {img.format}")
    except Exception as e:
        logger.error(f"Corrupted or mislabeled image rejected ({os.path.basename(filename)}): {e}")
        raise HTTPException(status_code=400, detail="Invalid file content or format mismatch.")

    return inferred
