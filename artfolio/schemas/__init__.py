from artfolio.schemas.detection import (
    DetectionResult,
    GateState,
    ImagePayload,
    Modality,
    ParsedVerdict,
    RejectionReason,
    Submission,
    TextValidationRequest,
    ValidationResponse,
    Verdict,
    VerdictResponse,
)

__all__ = [
    "DetectionResult",
    "GateState",
    "ImagePayload",
    "Modality",
    "ParsedVerdict",
    "RejectionReason",
    "Submission",
    "TextValidationRequest",
    "ValidationResponse",
    "Verdict",
    "VerdictResponse",
]
