from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Modality(str, Enum):
    IMAGE = "image"
    TEXT = "text"   # an essay, in user-facing messages


class GateState(str, Enum):
    IDLE = "idle"
    VALIDATING_LENGTH = "validating_length"
    DETECTING_IMAGE = "detecting_image"
    DETECTING_TEXT = "detecting_text"
    AGGREGATING = "aggregating"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class RejectionReason(str, Enum):
    CONTENT_REJECTED = "content_rejected"
    SERVICE_UNAVAILABLE = "service_unavailable"
    INPUT_INVALID = "input_invalid"


class ImagePayload(BaseModel):
    content: bytes
    filename: str = "upload"


class Submission(BaseModel):
    """Candidate content for one upload attempt. Never persisted."""
    image: Optional[ImagePayload] = None
    text: Optional[str] = None

    @property
    def has_image(self) -> bool:
        return self.image is not None

    @property
    def has_text(self) -> bool:
        return self.text is not None


class ParsedVerdict(BaseModel):
    """The JSON object the LLM judge is instructed to emit."""
    ai_probability: float
    reasoning: str = ""


class DetectionResult(BaseModel):
    """Outcome of scoring one modality."""
    modality: Modality
    passed: bool
    score: float = Field(description="Probability the content is AI-generated")
    threshold: float
    provider: str
    reasoning: Optional[str] = None
    warning: Optional[str] = None   # set when detection was skipped or unparseable

    @property
    def degraded(self) -> bool:
        return self.warning is not None


class Verdict(BaseModel):
    """Aggregate accept/reject decision for a Submission."""
    accepted: bool
    state: GateState
    reason: Optional[RejectionReason] = None
    modality: Optional[Modality] = None
    score: Optional[float] = None
    threshold: Optional[float] = None
    message: Optional[str] = None
    results: list[DetectionResult] = []
    warnings: list[str] = []

    def to_response(self) -> dict:
        if self.accepted:
            return {"accepted": True}
        return {
            "accepted": False,
            "modality": self.modality.value if self.modality else None,
            "score": self.score,
            "threshold": self.threshold,
            "message": self.message,
        }


# --------------------------------------------------------------------------- #
# API bodies                                                                  #
# --------------------------------------------------------------------------- #


class TextValidationRequest(BaseModel):
    text: Optional[str] = None


class ValidationResponse(BaseModel):
    passed: bool
    score: float
    threshold: float
    message: str
    reasoning: Optional[str] = None
    warning: Optional[str] = None


class VerdictResponse(BaseModel):
    accepted: bool
    modality: Optional[str] = None
    score: Optional[float] = None
    threshold: Optional[float] = None
    message: Optional[str] = None
