"""
Validation routes:

  POST /api/validate-image      multipart 'file'       -> image adapter only
  POST /api/validate-text       JSON {"text": "..."}   -> text adapter only
  POST /api/submissions/verify  multipart 'file'/'text' -> full upload gate

The first two mirror what the upload form calls step by step; the third runs
the whole gate in one request and returns the Verdict boundary contract.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from artfolio.core.dependencies import get_upload_gate
from artfolio.core.file_validator import validate_image_upload
from artfolio.detection import policy
from artfolio.detection.errors import DetectionConfigError, DetectionServiceError, InputInvalidError
from artfolio.detection.gate import UploadGate
from artfolio.schemas.detection import (
    DetectionResult,
    ImagePayload,
    Modality,
    RejectionReason,
    Submission,
    TextValidationRequest,
    ValidationResponse,
    VerdictResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Validation"])

_HUMAN_MESSAGES = {
    Modality.IMAGE: ("Image appears to be human-created", "Image appears to be AI-generated"),
    Modality.TEXT: ("Text appears to be human-written", "Text appears to be AI-generated"),
}


def _to_response(result: DetectionResult) -> ValidationResponse:
    passed_msg, failed_msg = _HUMAN_MESSAGES[result.modality]
    if result.warning == policy.PARSE_FAILED_WARNING:
        message = "Could not determine AI probability"
    else:
        message = passed_msg if result.passed else failed_msg
    return ValidationResponse(
        passed=result.passed,
        score=result.score,
        threshold=result.threshold,
        message=message,
        reasoning=result.reasoning,
        warning=result.warning,
    )


def _raise_for(e: Exception, what: str):
    if isinstance(e, InputInvalidError):
        raise HTTPException(status_code=400, detail=str(e))
    if isinstance(e, DetectionConfigError):
        raise HTTPException(status_code=500, detail="AI detection service not configured")
    logger.error(f"[VALIDATE] {what} detection failed: {e}")
    raise HTTPException(status_code=502, detail="AI detection service error")


@router.post("/validate-image", response_model=ValidationResponse, response_model_exclude_none=True)
async def validate_image(
    file: UploadFile = File(...),
    gate: UploadGate = Depends(get_upload_gate),
):
    content = await file.read()
    filename = file.filename or "upload"
    validate_image_upload(filename, content, file.content_type)

    try:
        result = await gate.image_detector.check_image(content, filename)
    except (InputInvalidError, DetectionServiceError) as e:
        _raise_for(e, "Image")

    return _to_response(result)


@router.post("/validate-text", response_model=ValidationResponse, response_model_exclude_none=True)
async def validate_text(
    body: TextValidationRequest,
    gate: UploadGate = Depends(get_upload_gate),
):
    if not body.text or not isinstance(body.text, str):
        raise HTTPException(status_code=400, detail="No text provided")

    try:
        result = await gate.text_detector.check_text(body.text)
    except (InputInvalidError, DetectionServiceError) as e:
        _raise_for(e, "Text")

    return _to_response(result)


_STATUS_FOR_REASON = {
    RejectionReason.INPUT_INVALID: 400,
    RejectionReason.SERVICE_UNAVAILABLE: 503,
}


@router.post("/submissions/verify", response_model=VerdictResponse)
async def verify_submission(
    file: Optional[UploadFile] = File(None),
    text: Optional[str] = Form(None),
    gate: UploadGate = Depends(get_upload_gate),
):
    image = None
    if file is not None:
        content = await file.read()
        filename = file.filename or "upload"
        validate_image_upload(filename, content, file.content_type)
        image = ImagePayload(content=content, filename=filename)

    verdict = await gate.evaluate(Submission(image=image, text=text))

    status_code = _STATUS_FOR_REASON.get(verdict.reason, 200)
    return JSONResponse(status_code=status_code, content=verdict.to_response())
