"""
System / health routes.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from artfolio.core.dependencies import get_upload_gate
from artfolio.detection.gate import UploadGate

router = APIRouter(tags=["System"])


@router.get("/health")
async def health():
    return {"status": "healthy"}


@router.get("/health/detectors")
async def detectors_health(gate: UploadGate = Depends(get_upload_gate)):
    """Which providers are configured. Makes no outbound calls."""
    return {
        "mode": gate.config.mode.value,
        "image": {
            "provider": gate.image_detector.provider,
            "configured": gate.image_detector.is_configured,
        },
        "text": {
            "provider": gate.text_detector.provider,
            "configured": gate.text_detector.is_configured,
        },
    }


@router.get("/robots.txt", response_class=PlainTextResponse)
def robots():
    return "User-agent: *\nDisallow: /"
